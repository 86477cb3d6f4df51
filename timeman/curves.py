"""
Curve engine: turn the clock state into a fraction of the remaining time.

The time manager asks for two budgets per move, an "optimum" (stop starting
new iterations after this) and a "maximum" (abort the search after this).
Both come out of the same closed-form curves; the two kinds only differ in
the scale constants of BUDGET_CONSTANTS.

Two families of time controls are handled:

    movestogo > 0:  x moves in y minutes (+ z increment). The remaining time
                    is split over the moves left before the clock is refilled,
                    weighted by a move-number curve that spends a little more
                    in the early middlegame.

    movestogo == 0: sudden death (basetime + z increment). There is no refill,
                    so a small share of the clock is spent per move and the
                    share grows as the game goes on (spend-up factor sd).

In both cases the increment is mixed in through a bell curve: increment is
leaned on most around move 19 and least in the opening and deep endgame.

Everything here is a pure function of its arguments. Malformed inputs are
clamped into range rather than rejected, so the result is always a finite,
non-negative budget.
"""

import math
from dataclasses import dataclass
from enum import Enum

from timeman.constants import (
    COMPLEXITY_MAX,
    COMPLEXITY_MIN,
    INC_USAGE_BASE,
    INC_USAGE_BUMP,
    INC_USAGE_PEAK,
    INC_USAGE_WIDTH,
    MOVE_CURVE_BUMP,
    MOVE_CURVE_PEAK,
    MOVE_CURVE_PLATEAU,
    MOVE_CURVE_PLATEAU_MOVE,
    MOVE_CURVE_RAMP,
    MOVE_CURVE_WIDTH,
    MOVES_TO_GO_SD,
    SD_GROWTH,
    SD_HALF,
)


class BudgetKind(Enum):
    """Which of the two per-move budgets is being computed."""

    OPTIMUM = "optimum"
    MAXIMUM = "maximum"


@dataclass(frozen=True)
class KindConstants:
    """
    Scale constants that distinguish the optimum from the maximum budget.

    Attributes:
        moves_to_go_share: Numerator of the per-move share in movestogo mode.
        sudden_death_share: Base fraction of the clock in sudden-death mode.
        ratio_cap: Upper bound on the final ratio. The optimum is capped at
                   1 / 1.25 so that the ponder bonus can never lift it past
                   a maximum that has already been clamped to the full clock.
    """

    moves_to_go_share: float
    sudden_death_share: float
    ratio_cap: float


BUDGET_CONSTANTS: dict[BudgetKind, KindConstants] = {
    BudgetKind.OPTIMUM: KindConstants(moves_to_go_share=1.0, sudden_death_share=0.018, ratio_cap=0.8),
    BudgetKind.MAXIMUM: KindConstants(moves_to_go_share=6.0, sudden_death_share=0.074, ratio_cap=1.0),
}


def gauss(x: float, a: float, b: float) -> float:
    """Unnormalized bell curve exp(-(x - a)^2 / b), 1.0 at x == a."""
    return math.exp(-(x - a) * (x - a) / b)


def clamp_complexity(complexity: float) -> float:
    """Clamp a complexity factor into [COMPLEXITY_MIN, COMPLEXITY_MAX]."""
    if complexity != complexity:  # NaN
        return COMPLEXITY_MIN
    return max(COMPLEXITY_MIN, min(COMPLEXITY_MAX, complexity))


def move_curve(move_number: int) -> float:
    """
    Move-number weighting for movestogo controls.

    Grows from move 1, bumps around MOVE_CURVE_PEAK and settles on the
    MOVE_CURVE_PLATEAU multiplier after MOVE_CURVE_PLATEAU_MOVE. The bell
    is narrow enough that the curve is continuous (to within 0.01) where
    the plateau takes over.
    """
    if move_number > MOVE_CURVE_PLATEAU_MOVE:
        return MOVE_CURVE_PLATEAU
    return (
        1.0
        + move_number / MOVE_CURVE_RAMP
        + MOVE_CURVE_BUMP * gauss(move_number, MOVE_CURVE_PEAK, MOVE_CURVE_WIDTH)
    )


def spend_up_factor(move_number: int) -> float:
    """Sudden-death spend-up factor: 1.0 at move 0, rising as the game goes on."""
    return 1.0 + SD_GROWTH * move_number / (SD_HALF + move_number)


def increment_usage(move_number: int) -> float:
    """Weight given to the increment, between INC_USAGE_BASE and BASE + BUMP."""
    return INC_USAGE_BASE + INC_USAGE_BUMP * gauss(move_number, INC_USAGE_PEAK, INC_USAGE_WIDTH)


def budget_ratio(
    kind: BudgetKind,
    move_number: int,
    moves_to_go: int,
    increment: int,
    my_time: int,
    complexity: float,
) -> float:
    """
    Fraction of the usable clock that the given budget may claim.

    Args:
        kind:        OPTIMUM or MAXIMUM.
        move_number: Full-move number used by the curves. With the eval time
                     signal this is the "theoretical" move number, shifted
                     back in lopsided positions.
        moves_to_go: Moves left until the clock is refilled; 0 = sudden death.
        increment:   Increment per move, same unit as my_time.
        my_time:     Remaining clock for the side to move (ms or nodes).
        complexity:  Complexity factor; clamped into [0.2, 1.2].

    Returns:
        A ratio in [0, 1]. Returns 0.0 when the clock is exhausted.
    """
    if my_time <= 0:
        return 0.0

    constants = BUDGET_CONSTANTS[kind]
    complexity = clamp_complexity(complexity)
    increment = max(0, increment)
    moves_to_go = max(0, moves_to_go)
    move_number = max(0, move_number)

    if moves_to_go:
        sd = MOVES_TO_GO_SD
        t_ratio = constants.moves_to_go_share / moves_to_go * complexity * move_curve(move_number)
    else:
        sd = spend_up_factor(move_number)
        t_ratio = constants.sudden_death_share * sd * complexity

    inc_usage = increment_usage(move_number)
    ratio = t_ratio * (1.0 + inc_usage * increment / (my_time * sd))

    return max(0.0, min(constants.ratio_cap, 1.0, ratio))


def remaining(
    kind: BudgetKind,
    my_time: int,
    increment: int,
    move_overhead: int,
    moves_to_go: int,
    move_number: int,
    complexity: float,
) -> int:
    """
    Budget for this move in the unit of my_time (milliseconds or nodes).

    The move overhead is taken off the clock first so that the budget never
    includes time that will be lost to communication latency. The result is
    floored, never negative, and never more than my_time - move_overhead.
    """
    if my_time <= 0:
        return 0

    ratio = budget_ratio(kind, move_number, moves_to_go, increment, my_time, complexity)
    usable_time = max(0, my_time - max(0, move_overhead))

    return int(usable_time * ratio)
