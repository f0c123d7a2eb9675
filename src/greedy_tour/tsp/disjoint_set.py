"""Union-find over integer node ids, used to reject premature sub-cycles."""
from __future__ import annotations

from typing import List


class DisjointSetForest:
    """Parent/size arrays over nodes [0, n).

    ``union(x, y)`` hangs the root of ``x`` under the root of ``y``. Sizes are
    only valid at roots.
    """

    def __init__(self, n: int):
        self.parent: List[int] = list(range(n))
        self.size: List[int] = [1] * n

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # full path compression
        while self.parent[x] != root:
            nxt = self.parent[x]
            self.parent[x] = root
            x = nxt
        return root

    def union(self, x: int, y: int) -> bool:
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False
        self.parent[root_x] = root_y
        self.size[root_y] += self.size[root_x]
        return True

    def component_size(self, x: int) -> int:
        return self.size[self.find(x)]
