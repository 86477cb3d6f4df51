"""
Chess time management package.

Computes, once per move, an optimum and a maximum thinking time for a search
driver, from the clock state, the move number and a position-complexity
signal. Budgets are in milliseconds, or in search nodes when node-time mode
is enabled.

Modules:
    constants  — Curve constants, piece values, and option bounds
    curves     — Pure budget curves (optimum / maximum ratio of the clock)
    complexity — Time-signal strategies: material, eval, or none
    signals    — Ply, material and evaluation signals from a chess.Board
    options    — EngineOptions: Move Overhead, nodestime, Ponder, Time Signal
    manager    — TimeManager and Limits: per-move init, elapsed, node budget
    simulate   — Replay a whole time control through the manager
"""

from timeman.complexity import TimeSignal
from timeman.curves import BudgetKind, budget_ratio, remaining
from timeman.manager import Limits, TimeManager, now_ms
from timeman.options import EngineOptions, options_from_env

__all__ = [
    "BudgetKind",
    "EngineOptions",
    "Limits",
    "TimeManager",
    "TimeSignal",
    "budget_ratio",
    "now_ms",
    "options_from_env",
    "remaining",
]
