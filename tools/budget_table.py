#!/usr/bin/env python3
"""
Budget table: print the optimum/maximum budgets over a simulated game.

Run before and after each change to the time curves to see where the clock
goes: how much is spent in the opening, whether the middlegame bump is where
it should be, and whether the clock survives to the end of the game.

Usage: python3 tools/budget_table.py [time-control ...]
       e.g. python3 tools/budget_table.py 60+1 40/120 300
"""
import logging
import os
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from timeman.options import options_from_env
from timeman.simulate import TimeControl, simulate_game

# Standard controls: bullet, blitz, rapid, and a classical 40-move session.
TIME_CONTROLS = ["60", "60+1", "180+2", "600+5", "40/120", "40/900+30"]

# Moves printed per game; the remaining rows are summarised.
SHOWN_MOVES = (1, 5, 10, 15, 20, 25, 30, 40, 50, 60, 80)


def print_control(control: TimeControl, moves: int = 80) -> None:
    """Simulate one control and print a row per selected move."""
    rows = simulate_game(control, moves=moves, options=options_from_env())

    print(f"Time control {control}")
    print(f"{'Move':>5} {'Clock(ms)':>10} {'Optimum':>9} {'Maximum':>9} {'Opt%':>6}")
    print("-" * 43)
    for row in rows:
        if row.move_number not in SHOWN_MOVES:
            continue
        share = 100.0 * row.optimum / row.clock_ms if row.clock_ms else 0.0
        print(
            f"{row.move_number:>5} {row.clock_ms:>10,} {row.optimum:>9,} "
            f"{row.maximum:>9,} {share:>6.2f}"
        )
    print("-" * 43)
    print(f"{'END':>5} {rows[-1].clock_ms - rows[-1].spent_ms + control.increment_ms:>10,}")
    print()


def main() -> None:
    """Print a budget table for each requested (or standard) time control."""
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    controls = sys.argv[1:] or TIME_CONTROLS
    for text in controls:
        try:
            control = TimeControl.parse(text)
        except ValueError as exc:
            print(f"budget_table: {exc}", file=sys.stderr)
            continue
        print_control(control)


if __name__ == "__main__":
    main()
