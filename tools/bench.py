#!/usr/bin/env python3
"""
Benchmark: nodes visited and time per move across search depths.

Run before and after a search change (ordering, pruning, evaluation) to
quantify it. At a fixed depth a lower node count means more effective pruning;
a higher kNPS means cheaper nodes.

Usage: python3 tools/bench.py [max_depth]
"""
import os
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from hexbot.rules import ChessRules
from hexbot.search import Bot

# Fixed positions, the same for every comparison.
# (label, starting FEN or None for the standard start, SAN record)
POSITIONS = [
    ("Start",        None, []),
    ("After 1.e4",   None, ["e4"]),
    ("Italian",      None, ["e4", "e5", "Nf3", "Nc6", "Bc4"]),
    ("Hanging rook", "7k/8/4p3/3r4/n7/8/8/3Q3K w - - 0 1", []),
    ("Back rank",    "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1", []),
    ("Pawn ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1", []),
]


def run_position(label: str, fen: str | None, record: list[str], depth: int) -> dict:
    """Search one position at `depth` and return its metrics."""
    bot = Bot(record, rules=ChessRules(fen))
    result = bot.search(depth)
    elapsed = max(1, result.elapsed_ms)
    return {
        "label": label,
        "move": result.move.uci() if result.move is not None else "(none)",
        "depth": depth,
        "value": result.value,
        "nodes": result.nodes,
        "knps": result.nodes / elapsed,
        "time_ms": result.elapsed_ms,
    }


def main() -> None:
    """Run all positions at depths 0..max_depth and print a summary table."""
    max_depth = int(sys.argv[1]) if len(sys.argv) > 1 else 2

    print(f"hexbot benchmark, depths 0..{max_depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Depth':>5} {'Value':>6} "
        f"{'Nodes':>9} {'kNPS':>7} {'Time(ms)':>9}"
    )
    print("-" * 63)

    results = []
    for label, fen, record in POSITIONS:
        for depth in range(max_depth + 1):
            r = run_position(label, fen, record, depth)
            results.append(r)
            print(
                f"{r['label']:<14} {r['move']:<7} {r['depth']:>5} {r['value']:>6} "
                f"{r['nodes']:>9,} {r['knps']:>7.1f} {r['time_ms']:>9,}"
            )

    print("-" * 63)
    for depth in range(max_depth + 1):
        at_depth = [r for r in results if r["depth"] == depth]
        avg_nodes = sum(r["nodes"] for r in at_depth) // len(at_depth)
        avg_time = sum(r["time_ms"] for r in at_depth) // len(at_depth)
        print(f"{'AVERAGE d=' + str(depth):<14} {'':<7} {'':>5} {'':>6} {avg_nodes:>9,} {'':>7} {avg_time:>9,}")


if __name__ == "__main__":
    main()
