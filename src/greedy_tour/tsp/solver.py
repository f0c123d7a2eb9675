"""Pure entry point: edges + node count + mode -> TourResult."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .greedy_edge import Edge, check_mode, construct
from .tour_assembly import StepDetail, assemble_path, summarize


@dataclass
class TourResult:
    mode: str
    path: List[int]                 # closed tours repeat node 0 at the end
    details: List[StepDetail]
    cost: float                     # sum over selected_edges, not over path
    selected_edges: List[Edge] = field(default_factory=list)
    complete: bool = False
    runtime: float = 0.0

    def to_dict(self) -> dict:
        return {
            'path': list(self.path),
            'details': [d.to_dict() for d in self.details],
            'cost': self.cost,
            'complete': self.complete,
        }

    def labelled(self, labels: Sequence[str]) -> List[dict]:
        """Step details with display labels in place of node indices."""
        return [{'from': labels[d.src], 'to': labels[d.dst], 'dist': d.dist} for d in self.details]


def compute_greedy_tour(edges: Iterable[Edge], num_nodes: int, mode: str = 'MIN',
                        close_open_path: bool = False) -> TourResult:
    """Build one greedy tour.

    ``complete`` is True when the selected edges form a Hamiltonian cycle.
    By default node 0 is repeated at the end of the path only in that case;
    ``close_open_path`` restores the always-closed path of earlier versions,
    which repeated node 0 whenever it had an incident edge.
    """
    mode = check_mode(mode)
    start_t = time.time()
    selected, adjacency = construct(edges, num_nodes, mode)
    complete = num_nodes > 0 and len(selected) == num_nodes
    path = assemble_path(adjacency, num_nodes, closed=complete or close_open_path)
    details, cost = summarize(path, adjacency, selected)
    runtime = time.time() - start_t
    return TourResult(mode=mode, path=path, details=details, cost=cost,
                      selected_edges=selected, complete=complete, runtime=runtime)


def solve_request(request: dict) -> dict:
    """``{edges: [{u, v, w}], numNodes, mode}`` -> ``{path, details, cost, complete}``."""
    edges = [Edge.from_dict(e) for e in request.get('edges', [])]
    result = compute_greedy_tour(edges, int(request['numNodes']), request.get('mode', 'MIN'))
    return result.to_dict()
