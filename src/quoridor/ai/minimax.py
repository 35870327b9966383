import logging
import math
from typing import Dict, List, Optional

from ..board import UNREACHABLE
from ..game import Move, MoveKind, Position, apply_move, iter_legal_moves, legal_moves

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 2
WIN_SCORE = 10_000
TRAPPED_SCORE = 9_999
# Aggregate wall supply the wall term is measured against, split over opponents.
WALL_BASELINE = 5

STATS: Dict[str, int] = {
    "nodes": 0,
    "evals": 0,
    "cuts": 0,
    "leaf_terminal": 0,
}


def reset_stats() -> None:
    STATS["nodes"] = 0
    STATS["evals"] = 0
    STATS["cuts"] = 0
    STATS["leaf_terminal"] = 0


def stats_snapshot() -> Dict[str, int]:
    return dict(STATS)


def evaluate(position: Position) -> int:
    """
    Static score from the point of view of the player to move.

    Path difference against the most threatening opponent dominates; the
    remaining walls add a small bonus.
    """
    STATS["evals"] += 1
    me = position.to_move
    if position.ended():
        return WIN_SCORE if position.winner == me else -WIN_SCORE
    if me not in position.goals or me not in position.pawns:
        return 0

    my_path = position.distance(me)
    if my_path == UNREACHABLE:
        return -TRAPPED_SCORE

    min_opp_path: Optional[int] = None
    for pid in position.active:
        if pid == me or pid not in position.goals or pid not in position.pawns:
            continue
        d = position.distance(pid)
        if d != UNREACHABLE and (min_opp_path is None or d < min_opp_path):
            min_opp_path = d
    if min_opp_path is None:
        return TRAPPED_SCORE

    opponents = len(position.active) - 1
    wall_adv = position.walls_left.get(me, 0) - (WALL_BASELINE // opponents if opponents > 0 else 0)
    return (min_opp_path - my_path) * 10 + wall_adv * 2


def order_moves(moves: List[Move]) -> List[Move]:
    # stable: generator order is kept inside each group
    return sorted(moves, key=lambda m: m.kind != MoveKind.PAWN)


def immediate_win_move(position: Position, moves: List[Move]) -> Optional[Move]:
    """
    First pawn move in `moves` that reaches the mover's goal, if any.

    Only consulted at odd depths, where a win one ply down is scored from
    the wrong side. At even depths the root keeps the first maximizing
    move, which can be an earlier non-winning move when every reply to it
    ends the game.
    """
    for mv in moves:
        if mv.kind != MoveKind.PAWN:
            continue
        if apply_move(position, mv).winner == position.to_move:
            return mv
    return None


def negamax(position: Position, depth: int, alpha: float, beta: float, color: int) -> float:
    """
    Negamax with alpha-beta pruning.

    With more than two players every other player is folded into a single
    opponent: the evaluator scores against the closest rival and signs
    alternate per ply regardless of who actually moves next.
    """
    STATS["nodes"] += 1
    if position.ended():
        STATS["leaf_terminal"] += 1
        return color * evaluate(position)
    if depth == 0:
        return color * evaluate(position)

    best = -math.inf
    searched = False
    # pawn moves come out of the generator first; walls are only checked once reached
    for mv in iter_legal_moves(position):
        searched = True
        child = apply_move(position, mv)
        val = -negamax(child, depth - 1, -beta, -alpha, -color)
        if val > best:
            best = val
        if best > alpha:
            alpha = best
        if alpha >= beta:
            STATS["cuts"] += 1
            break
    if not searched:
        return color * evaluate(position)
    return best


def best_move(position: Position, max_depth: int = DEFAULT_MAX_DEPTH) -> Move:
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")
    moves = order_moves(legal_moves(position))
    if not moves:
        logger.debug("no legal move for %s, resigning", position.to_move)
        return Move.resign()

    # at even depths the search already scores a direct win as WIN_SCORE
    win = immediate_win_move(position, moves) if max_depth % 2 == 1 else None
    if win is not None:
        logger.debug("%s wins immediately with %s", position.to_move, win)
        return win

    # children start with the sign that makes full-depth leaves score for the side to move
    color = 1 if (max_depth - 1) % 2 == 0 else -1
    best_mv = moves[0]
    best_val = -math.inf
    for mv in moves:
        child = apply_move(position, mv)
        val = -negamax(child, max_depth - 1, -math.inf, -best_val, color)
        if val > best_val:
            best_val = val
            best_mv = mv

    logger.debug("best move for %s: %s (value=%s, %d candidates, stats=%s)",
                 position.to_move, best_mv, best_val, len(moves), stats_snapshot())
    return best_mv
