import sys
import argparse
import logging
from typing import List, Optional

from quoridor.ai.minimax import best_move
from quoridor.game import Game, Position, legal_pawn_moves
from quoridor.notation import COLS, cell_to_str, move_to_str, parse_move


def setup_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


def render_board(pos: Position) -> None:
    n = pos.size
    board = pos.board
    marks = {cell: pid[-1] for pid, cell in pos.pawns.items()}
    print("    " + "   ".join(COLS[:n]))
    for r in range(n):
        line = f"{r + 1:>2}  "
        for c in range(n):
            line += marks.get((r, c), ".")
            if c + 1 < n:
                line += " | " if board.blocked((r, c), (r, c + 1)) else "   "
        print(line)
        if r + 1 < n:
            under = "    "
            for c in range(n):
                under += "-" if board.blocked((r, c), (r + 1, c)) else " "
                if c + 1 < n:
                    under += "   "
            print(under.rstrip())
    walls = "  ".join(f"{pid}:{pos.walls_left.get(pid, 0)}" for pid in pos.active)
    print(f"walls left  {walls}")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--players", nargs="+", default=["p1", "p3"])
    parser.add_argument("--bot", action="append", default=[],
                        help="player id played by the engine (repeatable)")
    parser.add_argument("--depth", type=int, default=2)
    parser.add_argument("--size", type=int, default=9)
    parser.add_argument("--walls", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, WARNING)")
    args = parser.parse_args()
    setup_logging(args.log_level)

    try:
        g = Game(players=args.players, board_size=args.size, walls=args.walls)
    except ValueError as e:
        print(f"Cannot start game: {e}")
        return 2
    bots: List[str] = [b for b in args.bot if b != "none"]

    print("Quoridor CLI")
    print("Enter moves like: e8 (pawn), d4h / d4v (wall), resign")
    print("Commands: help, board, moves, quit")
    render_board(g.position)

    while not g.terminal():
        p: Optional[str] = g.current_player()
        if p in bots:
            mv = best_move(g.position, max_depth=args.depth)
            print(f"[{p}-BOT] plays: {move_to_str(mv)}")
            g.play(mv)
            render_board(g.position)
            continue
        try:
            s = input(f"[{p}] > ").strip()
        except EOFError:
            print()
            break
        if not s:
            continue
        if s.lower() in ("q", "quit", "exit"):
            print("Bye.")
            return 0
        if s.lower() in ("h", "help", "?"):
            print("Pawn: destination cell, column letter + row number (e.g., e8)")
            print("Wall: anchor cell + h or v (e.g., d4h)")
            print("Args: --players p1 p3 --bot p3 --depth N --size N")
            continue
        if s.lower() in ("b", "board"):
            render_board(g.position)
            continue
        if s.lower() in ("m", "moves"):
            pawn = [cell_to_str(cell) for cell in legal_pawn_moves(g.position)]
            print("Pawn moves: " + " ".join(pawn))
            continue
        try:
            g.play(parse_move(s, g.position.size))
            render_board(g.position)
        except ValueError as e:
            print(f"Invalid move: {e}")
            continue
    if g.winner() is not None:
        print(f"Winner: {g.winner()} ({g.reason()})")
    elif g.terminal():
        print("Draw.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
