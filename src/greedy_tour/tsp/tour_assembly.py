"""Turn the selected-edge adjacency into an ordered tour and per-step distances."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .greedy_edge import Adjacency, Edge

ANCHOR = 0


@dataclass(frozen=True)
class StepDetail:
    src: int
    dst: int
    dist: float

    def to_dict(self) -> dict:
        return {'from': self.src, 'to': self.dst, 'dist': self.dist}


def assemble_path(adjacency: Adjacency, num_nodes: int, closed: bool = False) -> List[int]:
    """Depth-first preorder walk from node 0.

    Neighbours are followed in acceptance order. The walk uses an explicit
    stack of neighbour iterators, so it matches the recursive version step for
    step (including the backtrack to node 0's second neighbour on an open
    fragment) without any recursion limit. Nodes not reachable from 0 are left
    out. When ``closed`` is set the anchor is appended again at the end.
    """
    if num_nodes <= 0 or not adjacency[ANCHOR]:
        return []

    path = [ANCHOR]
    visited = {ANCHOR}
    stack = [iter(adjacency[ANCHOR])]
    while stack:
        for nb, _w in stack[-1]:
            if nb not in visited:
                visited.add(nb)
                path.append(nb)
                stack.append(iter(adjacency[nb]))
                break
        else:
            stack.pop()

    if closed:
        path.append(ANCHOR)
    return path


def step_distance(adjacency: Adjacency, src: int, dst: int) -> float:
    for nb, w in adjacency[src]:
        if nb == dst:
            return w
    return 0


def summarize(path: Sequence[int], adjacency: Adjacency, selected_edges: Sequence[Edge]) -> Tuple[List[StepDetail], float]:
    """Step details along ``path`` and the total cost of ``selected_edges``.

    The cost is taken from the selected edges, not from the path, so on an
    incomplete tour the two can disagree.
    """
    details = [
        StepDetail(path[i], path[i + 1], step_distance(adjacency, path[i], path[i + 1]))
        for i in range(len(path) - 1)
    ]
    cost = sum(e.w for e in selected_edges)
    return details, cost
