from string import ascii_lowercase
from typing import Tuple

from .board import Cell, Orientation, Wall
from .game import Move, MoveKind

COLS = ascii_lowercase
ORIENT_CHARS = {"h": Orientation.HORIZONTAL, "v": Orientation.VERTICAL}


def cell_to_str(cell: Cell) -> str:
    r, c = cell
    return f"{COLS[c]}{r + 1}"


def parse_cell(s: str, size: int = 9) -> Cell:
    s = s.strip().lower()
    if len(s) < 2 or s[0] not in COLS[:size] or not s[1:].isdigit():
        raise ValueError(f"invalid cell {s!r}")
    r = int(s[1:]) - 1
    c = COLS.index(s[0])
    if not 0 <= r < size:
        raise ValueError(f"invalid cell {s!r}")
    return r, c


def wall_to_str(w: Wall) -> str:
    o = "h" if w.orientation == Orientation.HORIZONTAL else "v"
    return cell_to_str((w.row, w.col)) + o


def parse_wall(s: str, size: int = 9) -> Wall:
    s = s.strip().lower()
    if len(s) < 3 or s[-1] not in ORIENT_CHARS:
        raise ValueError(f"invalid wall {s!r}")
    r, c = parse_cell(s[:-1], size)
    return Wall(r, c, ORIENT_CHARS[s[-1]])


def parse_move(s: str, size: int = 9) -> Move:
    """'e8' moves the pawn, 'e8h' / 'e8v' places a wall, 'resign' resigns."""
    s = s.strip().lower()
    if s == "resign":
        return Move.resign()
    if s and s[-1] in ORIENT_CHARS:
        return Move.place_wall(parse_wall(s, size))
    return Move.pawn(parse_cell(s, size))


def move_to_str(mv: Move) -> str:
    if mv.kind == MoveKind.PAWN:
        return cell_to_str(mv.to)
    if mv.kind == MoveKind.WALL:
        return wall_to_str(mv.wall)
    return "resign"


def split_moves(s: str) -> Tuple[str, ...]:
    return tuple(part for part in s.replace(",", " ").split() if part)
