from __future__ import annotations

from typing import List

import pytest

from greedy_tour.tsp import Edge


@pytest.fixture
def square_edges() -> List[Edge]:
    """4-cycle of weight 10 plus both diagonals at 15."""
    return [
        Edge(0, 1, 10), Edge(1, 2, 10), Edge(2, 3, 10), Edge(3, 0, 10),
        Edge(0, 2, 15), Edge(1, 3, 15),
    ]


@pytest.fixture
def chain_edges() -> List[Edge]:
    """0-1-2-3 on five nodes; node 4 has no edges."""
    return [Edge(0, 1, 5), Edge(1, 2, 5), Edge(2, 3, 5)]
