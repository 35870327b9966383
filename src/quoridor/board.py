from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import FrozenSet, Iterable, List, Tuple

Cell = Tuple[int, int]  # (row, col)

UNREACHABLE = -1

DIRECTIONS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Orientation(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1


class Edge(IntEnum):
    """Board edge a player has to reach."""
    NORTH = 0  # row 0
    WEST = 1   # column 0
    SOUTH = 2  # row N-1
    EAST = 3   # column N-1


def reaches(edge: Edge, r: int, c: int, size: int) -> bool:
    if edge == Edge.NORTH:
        return r == 0
    if edge == Edge.WEST:
        return c == 0
    if edge == Edge.SOUTH:
        return r == size - 1
    return c == size - 1


@dataclass(frozen=True, order=True)
class Wall:
    """
    A two-cell wall anchored at (row, col).

    - HORIZONTAL at (r,c) blocks vertical moves between rows r and r+1
      for columns c and c+1.
    - VERTICAL at (r,c) blocks horizontal moves between cols c and c+1
      for rows r and r+1.

    Valid anchors: 0 <= r < N-1, 0 <= c < N-1.
    """
    row: int
    col: int
    orientation: Orientation


class Board:
    """Board size plus the placed walls. Never mutated after construction."""

    __slots__ = ("size", "walls", "_lookup")

    def __init__(self, size: int = 9, walls: Iterable[Wall] = ()) -> None:
        self.size = size
        self.walls: Tuple[Wall, ...] = tuple(walls)
        self._lookup: FrozenSet[Tuple[int, int, Orientation]] = frozenset(
            (w.row, w.col, w.orientation) for w in self.walls)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.walls == other.walls

    def __hash__(self) -> int:
        return hash((self.size, self.walls))

    def __repr__(self) -> str:
        return f"Board(size={self.size}, walls={list(self.walls)!r})"

    def with_wall(self, w: Wall) -> "Board":
        return Board(self.size, self.walls + (w,))

    def in_bounds(self, p: Cell) -> bool:
        r, c = p
        return 0 <= r < self.size and 0 <= c < self.size

    # ---------------------------- Wall rules ----------------------------
    def anchor_in_range(self, w: Wall) -> bool:
        return 0 <= w.row <= self.size - 2 and 0 <= w.col <= self.size - 2

    def conflicts(self, w: Wall) -> bool:
        """True if w shares an anchor with a placed wall or overlaps a parallel one."""
        for placed in self.walls:
            if placed.row == w.row and placed.col == w.col:
                return True
            if placed.orientation != w.orientation:
                continue
            if w.orientation == Orientation.HORIZONTAL:
                if placed.row == w.row and abs(placed.col - w.col) == 1:
                    return True
            elif placed.col == w.col and abs(placed.row - w.row) == 1:
                return True
        return False

    # ---------------------------- Movement graph ----------------------------
    def blocked(self, a: Cell, b: Cell) -> bool:
        """Return True if a wall separates the adjacent cells a and b."""
        ar, ac = a
        br, bc = b
        if ac == bc:
            r = min(ar, br)
            return ((r, ac, Orientation.HORIZONTAL) in self._lookup or
                    (r, ac - 1, Orientation.HORIZONTAL) in self._lookup)
        c = min(ac, bc)
        return ((ar, c, Orientation.VERTICAL) in self._lookup or
                (ar - 1, c, Orientation.VERTICAL) in self._lookup)

    def neighbors(self, p: Cell) -> List[Cell]:
        r, c = p
        out = []
        for dr, dc in DIRECTIONS:
            q = (r + dr, c + dc)
            if self.in_bounds(q) and not self.blocked(p, q):
                out.append(q)
        return out

    # ---------------------------- Shortest paths ----------------------------
    def shortest_distance(self, start: Cell, goal: Edge) -> int:
        """BFS distance from start to the goal edge, or UNREACHABLE."""
        n = self.size
        if reaches(goal, start[0], start[1], n):
            return 0
        queue = deque([(start, 0)])
        visited = {start}
        while queue:
            cell, dist = queue.popleft()
            for q in self.neighbors(cell):
                if q in visited:
                    continue
                if reaches(goal, q[0], q[1], n):
                    return dist + 1
                visited.add(q)
                queue.append((q, dist + 1))
        return UNREACHABLE

    def path_exists(self, start: Cell, goal: Edge) -> bool:
        return self.shortest_distance(start, goal) != UNREACHABLE
