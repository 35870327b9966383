from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .board import Board, Cell, DIRECTIONS, Edge, Orientation, Wall, reaches

DEFAULT_BOARD_SIZE = 9
TOTAL_WALLS = 20

# Goal edge per player id; each pawn starts on the edge opposite its goal.
DEFAULT_GOALS: Dict[str, Edge] = {
    "p1": Edge.NORTH,
    "p2": Edge.WEST,
    "p3": Edge.SOUTH,
    "p4": Edge.EAST,
}


class Status(IntEnum):
    ACTIVE = 0
    ENDED = 1


class MoveKind(IntEnum):
    PAWN = 0
    WALL = 1
    RESIGN = 2


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    to: Optional[Cell] = None
    wall: Optional[Wall] = None

    @staticmethod
    def pawn(to: Cell) -> "Move":
        return Move(kind=MoveKind.PAWN, to=to)

    @staticmethod
    def place_wall(w: Wall) -> "Move":
        return Move(kind=MoveKind.WALL, wall=w)

    @staticmethod
    def resign() -> "Move":
        return Move(kind=MoveKind.RESIGN)


@dataclass(frozen=True)
class Position:
    """
    Immutable game position. Transitions build new positions and leave the
    mappings of their parent untouched.
    """
    board: Board
    pawns: Mapping[str, Cell]
    walls_left: Mapping[str, int]
    goals: Mapping[str, Edge]
    active: Tuple[str, ...]
    turn_index: int = 0
    status: Status = Status.ACTIVE
    winner: Optional[str] = None
    reason: Optional[str] = field(default=None, compare=False)

    # the mappings are plain dicts
    __hash__ = None

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def to_move(self) -> Optional[str]:
        if not self.active:
            return None
        return self.active[self.turn_index]

    def ended(self) -> bool:
        return self.status == Status.ENDED

    def distance(self, player_id: str) -> int:
        return self.board.shortest_distance(self.pawns[player_id], self.goals[player_id])


def start_cell(goal: Edge, size: int) -> Cell:
    mid = size // 2
    if goal == Edge.NORTH:
        return (size - 1, mid)
    if goal == Edge.WEST:
        return (mid, size - 1)
    if goal == Edge.SOUTH:
        return (0, mid)
    return (mid, 0)


def new_position(players: Sequence[str],
                 board_size: int = DEFAULT_BOARD_SIZE,
                 walls: Optional[int] = None,
                 goals: Optional[Mapping[str, Edge]] = None) -> Position:
    if not 2 <= len(players) <= 4:
        raise ValueError("2 to 4 players required")
    if len(set(players)) != len(players):
        raise ValueError("duplicate player id")
    if board_size < 3 or board_size % 2 == 0:
        raise ValueError("board size must be odd and at least 3")
    goal_map: Dict[str, Edge] = {}
    for pid in players:
        if goals is not None and pid in goals:
            goal_map[pid] = Edge(goals[pid])
        elif pid in DEFAULT_GOALS:
            goal_map[pid] = DEFAULT_GOALS[pid]
        else:
            raise ValueError(f"no goal configured for player {pid!r}")
    pawns = {pid: start_cell(goal_map[pid], board_size) for pid in players}
    if len(set(pawns.values())) != len(pawns):
        raise ValueError("players share a start cell")
    if walls is None:
        walls = TOTAL_WALLS // len(players)
    if walls < 0:
        raise ValueError("wall count must be non-negative")
    return Position(
        board=Board(board_size),
        pawns=pawns,
        walls_left={pid: walls for pid in players},
        goals=goal_map,
        active=tuple(players),
    )


# ---------------------------- Legal move gen ----------------------------
def legal_pawn_moves(position: Position) -> List[Cell]:
    me = position.to_move
    if position.ended() or me not in position.pawns:
        return []
    board = position.board
    occupied = set(position.pawns.values())
    r, c = position.pawns[me]
    moves: List[Cell] = []
    for dr, dc in DIRECTIONS:
        nxt = (r + dr, c + dc)
        if not board.in_bounds(nxt) or board.blocked((r, c), nxt):
            continue
        if nxt not in occupied:
            moves.append(nxt)
            continue
        jump = (nxt[0] + dr, nxt[1] + dc)
        if board.in_bounds(jump) and not board.blocked(nxt, jump) and jump not in occupied:
            moves.append(jump)
            continue
        if dr != 0:
            sides = ((nxt[0], nxt[1] - 1), (nxt[0], nxt[1] + 1))
        else:
            sides = ((nxt[0] - 1, nxt[1]), (nxt[0] + 1, nxt[1]))
        for side in sides:
            if board.in_bounds(side) and not board.blocked(nxt, side) and side not in occupied:
                moves.append(side)
    # two occupied neighbours can offer the same side-step
    uniq: List[Cell] = []
    seen = set()
    for m in moves:
        if m not in seen:
            seen.add(m)
            uniq.append(m)
    return uniq


def wall_is_legal(position: Position, w: Wall) -> bool:
    me = position.to_move
    if position.ended() or position.walls_left.get(me, 0) <= 0:
        return False
    board = position.board
    if not board.anchor_in_range(w) or board.conflicts(w):
        return False
    # every active player must keep a route to their goal
    trial = board.with_wall(w)
    for pid in position.active:
        if pid not in position.pawns or pid not in position.goals:
            continue
        if not trial.path_exists(position.pawns[pid], position.goals[pid]):
            return False
    return True


def iter_wall_placements(position: Position) -> Iterator[Wall]:
    if position.ended() or position.walls_left.get(position.to_move, 0) <= 0:
        return
    n = position.size
    for r in range(n - 1):
        for c in range(n - 1):
            for o in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                w = Wall(r, c, o)
                if wall_is_legal(position, w):
                    yield w


def legal_wall_placements(position: Position) -> List[Wall]:
    return list(iter_wall_placements(position))


def iter_legal_moves(position: Position) -> Iterator[Move]:
    """Pawn moves first, then walls; wall connectivity checks run lazily."""
    for cell in legal_pawn_moves(position):
        yield Move.pawn(cell)
    for w in iter_wall_placements(position):
        yield Move.place_wall(w)


def legal_moves(position: Position) -> List[Move]:
    return list(iter_legal_moves(position))


# ---------------------------- Transitions ----------------------------
def apply_move(position: Position, move: Move) -> Position:
    if position.ended():
        raise RuntimeError("Game over")
    me = position.to_move
    board = position.board
    pawns = position.pawns
    walls_left = position.walls_left
    if move.kind == MoveKind.PAWN:
        pawns = dict(pawns)
        pawns[me] = move.to
    elif move.kind == MoveKind.WALL:
        board = board.with_wall(move.wall)
        walls_left = dict(walls_left)
        walls_left[me] -= 1
    else:
        raise ValueError("resign is not a board move; use apply_player_loss")

    goal = position.goals.get(me)
    if goal is not None and me in pawns:
        r, c = pawns[me]
        if reaches(goal, r, c, board.size):
            return replace(position, board=board, pawns=pawns, walls_left=walls_left,
                           status=Status.ENDED, winner=me, reason="goal")
    return replace(position, board=board, pawns=pawns, walls_left=walls_left,
                   turn_index=(position.turn_index + 1) % len(position.active))


def apply_player_loss(position: Position, player_id: str, reason: str = "resignation") -> Position:
    """Drop a player from the game; the last one standing wins."""
    if position.ended() or player_id not in position.active:
        return position
    idx = position.active.index(player_id)
    active = position.active[:idx] + position.active[idx + 1:]
    pawns = {pid: cell for pid, cell in position.pawns.items() if pid != player_id}

    if len(active) <= 1:
        winner = active[0] if active else None
        if winner is None:
            reason = "draw"
        elif reason != "goal":
            reason = "last player standing"
        return replace(position, pawns=pawns, active=active, turn_index=0,
                       status=Status.ENDED, winner=winner, reason=reason)

    turn = position.turn_index
    if idx < turn:
        turn -= 1
    return replace(position, pawns=pawns, active=active, turn_index=turn % len(active))


class Game:
    """Mutable session around a Position; validates moves before applying them."""

    def __init__(self,
                 players: Sequence[str] = ("p1", "p3"),
                 board_size: int = DEFAULT_BOARD_SIZE,
                 walls: Optional[int] = None,
                 position: Optional[Position] = None) -> None:
        if position is None:
            position = new_position(players, board_size, walls)
        self.position = position

    def current_player(self) -> Optional[str]:
        return self.position.to_move

    def legal_moves(self) -> List[Move]:
        return legal_moves(self.position)

    def play(self, move: Move) -> None:
        if self.terminal():
            raise RuntimeError("Game over")
        if move.kind == MoveKind.RESIGN:
            self.position = apply_player_loss(self.position, self.position.to_move)
            return
        if move.kind == MoveKind.PAWN:
            ok = move.to in legal_pawn_moves(self.position)
        else:
            ok = move.wall is not None and wall_is_legal(self.position, move.wall)
        if not ok:
            raise ValueError(f"Illegal move: {move}")
        self.position = apply_move(self.position, move)

    def resign(self, player_id: Optional[str] = None) -> None:
        if self.terminal():
            raise RuntimeError("Game over")
        pid = self.position.to_move if player_id is None else player_id
        if pid not in self.position.active:
            raise ValueError(f"unknown player {pid!r}")
        self.position = apply_player_loss(self.position, pid)

    def terminal(self) -> bool:
        return self.position.ended()

    def winner(self) -> Optional[str]:
        return self.position.winner

    def reason(self) -> Optional[str]:
        return self.position.reason
