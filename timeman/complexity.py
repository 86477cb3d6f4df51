"""
Position-signal strategies for the curve engine.

The curves take a move number and a complexity factor. How those two are
derived from the position is a policy choice, selected by the "Time Signal"
option:

    material — the move number is the real one; the complexity factor
               follows the non-pawn material left on the board.
    eval     — the complexity factor is neutral; a lopsided evaluation
               pulls the move number back, so the curves behave as if the
               game were younger.
    none     — real move number, neutral complexity.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from timeman.constants import (
    COMPLEXITY_MAX,
    COMPLEXITY_MIN,
    COMPLEXITY_NEUTRAL,
    EVAL_DEPENDENCE,
    EVAL_LIMIT,
    STARTING_NON_PAWN_MATERIAL,
)


class TimeSignal(str, Enum):
    """Which position signal feeds the time curves."""

    MATERIAL = "material"
    EVAL = "eval"
    NONE = "none"


@dataclass(frozen=True)
class MoveContext:
    """Inputs the curve engine needs from the position."""

    move_number: int
    complexity: float


def move_number_from_ply(ply: int) -> int:
    """Full-move number for either side: plies 1 and 2 are both move 1."""
    return max(0, (ply + 1) // 2)


def _clamp_signal(value: float, low: float, high: float) -> float | None:
    """Clamp a raw signal into [low, high]; NaN yields None.

    Compares before converting, so ints too large for a float and
    infinities both land on a bound instead of overflowing.
    """
    if value != value:
        return None
    return float(max(low, min(high, value)))


def material_complexity(non_pawn_material: float) -> float:
    """Map non-pawn material (cp, both sides) onto [COMPLEXITY_MIN, COMPLEXITY_MAX]."""
    material = _clamp_signal(non_pawn_material, 0, STARTING_NON_PAWN_MATERIAL)
    if material is None:
        return COMPLEXITY_MIN
    return COMPLEXITY_MIN + (COMPLEXITY_MAX - COMPLEXITY_MIN) * material / STARTING_NON_PAWN_MATERIAL


def _material_context(ply: int, signal: float | None) -> MoveContext:
    if signal is None:
        signal = STARTING_NON_PAWN_MATERIAL
    return MoveContext(move_number_from_ply(ply), material_complexity(signal))


def _eval_context(ply: int, signal: float | None) -> MoveContext:
    score = None if signal is None else _clamp_signal(signal, -EVAL_LIMIT, EVAL_LIMIT)
    if score is None:
        score = 0.0
    mn = move_number_from_ply(ply)
    # Round half away from zero; the value is clamped to >= 1 anyway.
    theoretical = math.floor(mn - EVAL_DEPENDENCE * math.sqrt(abs(score)) + 0.5)
    return MoveContext(max(1, int(theoretical)), COMPLEXITY_NEUTRAL)


def _neutral_context(ply: int, signal: float | None) -> MoveContext:
    return MoveContext(move_number_from_ply(ply), COMPLEXITY_NEUTRAL)


_STRATEGIES: dict[TimeSignal, Callable[[int, float | None], MoveContext]] = {
    TimeSignal.MATERIAL: _material_context,
    TimeSignal.EVAL: _eval_context,
    TimeSignal.NONE: _neutral_context,
}


def move_context(signal_kind: TimeSignal, ply: int, signal: float | None = None) -> MoveContext:
    """
    Resolve the move number and complexity factor for the current position.

    Args:
        signal_kind: Strategy selected by the "Time Signal" option.
        ply:         Half-moves since the start of the game.
        signal:      Non-pawn material (material) or evaluation in centipawns
                     (eval). None means "unknown" and yields the strategy's
                     neutral outcome.

    Returns:
        MoveContext with the move number and complexity factor.
    """
    return _STRATEGIES[TimeSignal(signal_kind)](ply, signal)
