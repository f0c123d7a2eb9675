"""Greedy degree-constrained edge selection (greedy-edge TSP construction).

Edges are taken cheapest-first (``MIN``) or most-expensive-first (``MAX``).
An edge is accepted unless one endpoint already has two neighbours or it
would close a cycle before every node is on the tour. The single exception
is the closing edge: when one component already spans all ``n`` nodes with
``n - 1`` edges, the edge joining the two path ends completes the circuit.

The result may be partial (fewer than ``n`` edges, several path fragments)
when the graph is too sparse; that is a normal outcome, not an error.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple

from .disjoint_set import DisjointSetForest

MODES = ('MIN', 'MAX')

Adjacency = List[List[Tuple[int, float]]]


@dataclass(frozen=True)
class Edge:
    u: int
    v: int
    w: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Edge':
        return cls(int(data['u']), int(data['v']), float(data['w']))


def check_mode(mode: str) -> str:
    """Normalise a mode string, rejecting anything but MIN/MAX."""
    norm = str(mode).upper()
    if norm not in MODES:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {MODES}")
    return norm


def sort_edges(edges: Iterable[Edge], mode: str) -> List[Edge]:
    # sorted() is stable with reverse=True too, so ties keep input order in both modes
    return sorted(edges, key=lambda e: e.w, reverse=(check_mode(mode) == 'MAX'))


def construct(edges: Iterable[Edge], num_nodes: int, mode: str = 'MIN') -> Tuple[List[Edge], Adjacency]:
    """Run the greedy selection; returns (selected_edges, adjacency).

    Edges are used as given: endpoints must lie in [0, num_nodes), and
    self-loops or parallel edges are not filtered out.
    """
    ordered = sort_edges(edges, mode)
    degree = [0] * num_nodes
    selected: List[Edge] = []
    adjacency: Adjacency = [[] for _ in range(num_nodes)]
    forest = DisjointSetForest(num_nodes)

    for edge in ordered:
        u, v, w = edge.u, edge.v, edge.w
        if degree[u] >= 2 or degree[v] >= 2:
            continue
        if forest.find(u) == forest.find(v):
            # only the edge that closes the full Hamiltonian circuit may form a cycle
            if not (forest.component_size(u) == num_nodes and len(selected) == num_nodes - 1):
                continue
        forest.union(u, v)
        selected.append(edge)
        degree[u] += 1
        degree[v] += 1
        adjacency[u].append((v, w))
        adjacency[v].append((u, w))
        if len(selected) == num_nodes:
            break

    return selected, adjacency
