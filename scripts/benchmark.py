import argparse
import logging
import time
from statistics import mean

from quoridor.ai.minimax import best_move, reset_stats, stats_snapshot
from quoridor.game import Position, apply_move, new_position
from quoridor.notation import move_to_str, parse_move, split_moves

OPENINGS = {
    "start": "",
    "open": "e8 e2 e7 e3",
    "walled": "e8 e2 c7h f2h e7 e3 c4v f5v",
}


def scripted_position(players, line: str) -> Position:
    pos = new_position(players)
    for token in split_moves(line):
        pos = apply_move(pos, parse_move(token, pos.size))
    return pos


def bench_position(pos: Position, depth: int, repeats: int):
    times = []
    nodes = []
    evals = []
    cuts = []
    mv = None
    for i in range(repeats):
        reset_stats()
        t0 = time.time()
        mv = best_move(pos, max_depth=depth)
        dt = time.time() - t0
        s = stats_snapshot()
        times.append(dt)
        nodes.append(s["nodes"])
        evals.append(s["evals"])
        cuts.append(s["cuts"])
    return {
        "move": move_to_str(mv),
        "time_s_avg": mean(times),
        "nodes_avg": int(mean(nodes)),
        "nps": int(mean(nodes) / mean(times)) if mean(times) > 0 else 0,
        "evals_avg": int(mean(evals)),
        "cuts_avg": int(mean(cuts)),
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--openings", nargs="+", choices=sorted(OPENINGS), default=sorted(OPENINGS))
    parser.add_argument("--players", nargs="+", default=["p1", "p3"])
    parser.add_argument("--depths", type=int, nargs="+", default=[1, 2])
    parser.add_argument("--repeats", type=int, default=3)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    print("Quoridor negamax benchmark")
    for name in args.openings:
        pos = scripted_position(args.players, OPENINGS[name])
        print(f"\nOpening '{name}' (to move: {pos.to_move}, walls placed: {len(pos.board.walls)})")
        for d in args.depths:
            res = bench_position(pos, depth=d, repeats=args.repeats)
            print(f"depth={d:>2}  move={res['move']:>6}  time={res['time_s_avg']:.3f}s  nodes={res['nodes_avg']:>8}  nps={res['nps']:>8}  evals={res['evals_avg']:>8}  cuts={res['cuts_avg']:>8}")


if __name__ == "__main__":
    main()
