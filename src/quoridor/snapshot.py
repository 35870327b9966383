"""
Host boundary: plain-data game snapshots in, plain-data moves out.

Snapshots are validated with pydantic before any Position is built, so the
rules and the search can assume well-formed input.
"""
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, model_validator

from .ai.minimax import DEFAULT_MAX_DEPTH, best_move
from .board import Board, Edge, Orientation, Wall
from .game import DEFAULT_GOALS, Move, MoveKind, Position, Status

OrientationName = Literal["horizontal", "vertical"]
EdgeName = Literal["north", "west", "south", "east"]


class CellModel(BaseModel):
    row: int
    col: int


class WallModel(BaseModel):
    row: int
    col: int
    orientation: OrientationName


class StateSnapshot(BaseModel):
    board_size: int = Field(9, ge=3)
    pawn_positions: Dict[str, CellModel]
    walls_left: Dict[str, int]
    placed_walls: List[WallModel] = []
    active_player_ids: List[str]
    player_turn_index: int = 0
    status: Literal["active", "ended"] = "active"
    winner: Optional[str] = None
    goals: Dict[str, EdgeName] = {}

    @model_validator(mode="after")
    def check_consistency(self) -> "StateSnapshot":
        n = self.board_size
        if self.active_player_ids and not 0 <= self.player_turn_index < len(self.active_player_ids):
            raise ValueError("player_turn_index out of range")
        for pid in self.active_player_ids:
            if pid not in self.pawn_positions:
                raise ValueError(f"no pawn for active player {pid!r}")
        # eliminated players keep a parked pawn, e.g. (-1, -1)
        cells = set()
        for pid in self.active_player_ids:
            cell = self.pawn_positions[pid]
            if not (0 <= cell.row < n and 0 <= cell.col < n):
                raise ValueError(f"pawn of {pid!r} is off the board")
            if (cell.row, cell.col) in cells:
                raise ValueError("two pawns share a cell")
            cells.add((cell.row, cell.col))
        for pid, count in self.walls_left.items():
            if count < 0:
                raise ValueError(f"negative wall count for {pid!r}")
        for w in self.placed_walls:
            if not (0 <= w.row <= n - 2 and 0 <= w.col <= n - 2):
                raise ValueError(f"wall anchor ({w.row}, {w.col}) out of range")
        if self.status == "ended" and self.winner is not None and self.winner not in self.active_player_ids:
            raise ValueError("winner is not an active player")
        return self


def goal_map(players: Sequence[str], overrides: Mapping[str, str]) -> Dict[str, Edge]:
    goals: Dict[str, Edge] = {}
    for pid in players:
        if pid in overrides:
            goals[pid] = Edge[overrides[pid].upper()]
        elif pid in DEFAULT_GOALS:
            goals[pid] = DEFAULT_GOALS[pid]
        else:
            raise ValueError(f"no goal configured for player {pid!r}")
    return goals


def to_position(state: Union[StateSnapshot, Mapping[str, Any]], players: Sequence[str]) -> Position:
    if not isinstance(state, StateSnapshot):
        state = StateSnapshot.model_validate(state)
    active = tuple(state.active_player_ids)
    walls = [Wall(w.row, w.col, Orientation[w.orientation.upper()]) for w in state.placed_walls]
    return Position(
        board=Board(state.board_size, walls),
        pawns={pid: (cell.row, cell.col) for pid, cell in state.pawn_positions.items() if pid in active},
        walls_left={pid: state.walls_left.get(pid, 0) for pid in active},
        goals=goal_map(players, state.goals),
        active=active,
        turn_index=state.player_turn_index if active else 0,
        status=Status.ENDED if state.status == "ended" else Status.ACTIVE,
        winner=state.winner,
    )


def position_to_snapshot(position: Position) -> Dict[str, Any]:
    snap = StateSnapshot(
        board_size=position.size,
        pawn_positions={pid: CellModel(row=r, col=c) for pid, (r, c) in position.pawns.items()},
        walls_left=dict(position.walls_left),
        placed_walls=[WallModel(row=w.row, col=w.col, orientation=w.orientation.name.lower())
                      for w in position.board.walls],
        active_player_ids=list(position.active),
        player_turn_index=position.turn_index,
        status=position.status.name.lower(),
        winner=position.winner,
        goals={pid: edge.name.lower() for pid, edge in position.goals.items()},
    )
    return snap.model_dump()


def move_to_dict(mv: Move) -> Dict[str, Any]:
    if mv.kind == MoveKind.PAWN:
        r, c = mv.to
        return {"type": "pawn", "row": r, "col": c}
    if mv.kind == MoveKind.WALL:
        w = mv.wall
        return {"type": "wall", "row": w.row, "col": w.col, "orientation": w.orientation.name.lower()}
    return {"type": "resign"}


def find_best_move(state: Union[StateSnapshot, Mapping[str, Any]],
                   players: Sequence[str],
                   depth: int = DEFAULT_MAX_DEPTH) -> Dict[str, Any]:
    """Single entry point for hosts: snapshot + participating ids -> move dict."""
    position = to_position(state, players)
    return move_to_dict(best_move(position, max_depth=depth))
