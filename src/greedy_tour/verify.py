"""Independent structural checks of a greedy tour using networkx."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import networkx as nx

from .tsp.greedy_edge import Edge
from .tsp.solver import TourResult


@dataclass
class TourCheck:
    max_degree: int
    fragments: int          # connected pieces that contain at least one selected edge
    is_hamiltonian: bool
    covered_by_path: bool   # path visits every node touched by a selected edge


def tour_graph(selected_edges: Sequence[Edge], num_nodes: int) -> nx.MultiGraph:
    """MultiGraph so a parallel pair shows up as degree, not as a silently merged edge."""
    G = nx.MultiGraph()
    G.add_nodes_from(range(num_nodes))
    for e in selected_edges:
        G.add_edge(e.u, e.v, weight=e.w)
    return G


def check_tour(result: TourResult, num_nodes: int) -> TourCheck:
    G = tour_graph(result.selected_edges, num_nodes)
    degrees = [d for _, d in G.degree()]
    max_degree = max(degrees) if degrees else 0
    touched = {n for n in G.nodes if G.degree(n) > 0}
    fragments = sum(1 for comp in nx.connected_components(G) if comp & touched)
    is_hamiltonian = (
        num_nodes > 0
        and G.number_of_edges() == num_nodes
        and all(d == 2 for d in degrees)
        and nx.is_connected(G)
    )
    return TourCheck(
        max_degree=max_degree,
        fragments=fragments,
        is_hamiltonian=is_hamiltonian,
        covered_by_path=touched <= set(result.path),
    )
