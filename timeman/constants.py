"""
Time management constants: curve shapes, per-kind scale factors, and option bounds.

Every number the time manager uses lives here so that the curve code never
carries magic numbers. The curves are tuned by hand against self-play and
are expected to move between releases; keeping them in one place makes it
easy to compare one tuning with the next.

Units:
    - Times are integer milliseconds (or synthetic nodes in node-time mode).
    - Material is in centipawns (1 pawn = 100 cp).
    - Move numbers are full moves (one move = two plies).
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------
# Used only to measure how much material is left on the board (complexity
# signal) and to produce a cheap material evaluation for the eval signal.

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
}

NON_PAWN_PIECE_TYPES: tuple[int, ...] = (chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN)

# Non-pawn material of the initial position, both sides together:
# 2 * (2N + 2B + 2R + Q) = 2 * 3200.
STARTING_NON_PAWN_MATERIAL: int = 2 * (
    2 * KNIGHT_VALUE + 2 * BISHOP_VALUE + 2 * ROOK_VALUE + QUEEN_VALUE
)

# ---------------------------------------------------------------------------
# Complexity factor
# ---------------------------------------------------------------------------
# Scales both budgets. A full board is considered hardest to play (1.2);
# a bare-king ending is the easiest (0.2).

COMPLEXITY_MIN: float = 0.2
COMPLEXITY_MAX: float = 1.2
COMPLEXITY_NEUTRAL: float = 1.0

# Evaluation dependence of the theoretical move number: a lopsided position
# is treated as if the game were younger, i.e. there is less to decide.
EVAL_DEPENDENCE: float = 0.4

# Evaluations are clamped to +-EVAL_LIMIT before use; mate and infinite
# scores all count as the same decided position.
EVAL_LIMIT: int = 100_000

# ---------------------------------------------------------------------------
# Moves-to-go curve
# ---------------------------------------------------------------------------
# Multiplier applied to the per-move share in "x moves in y minutes" controls.
# Rises slowly from move 1, bumps around move 19 and sits on a 1.5 plateau
# once the usual 40-move control has been passed.

MOVE_CURVE_RAMP: float = 80.0
MOVE_CURVE_BUMP: float = 0.5
MOVE_CURVE_PEAK: float = 19.0
MOVE_CURVE_WIDTH: float = 90.0
MOVE_CURVE_PLATEAU_MOVE: int = 40
MOVE_CURVE_PLATEAU: float = 1.5

# Spend-up factor used by the increment term when a moves-to-go boundary exists.
MOVES_TO_GO_SD: float = 8.5

# ---------------------------------------------------------------------------
# Sudden-death curve
# ---------------------------------------------------------------------------
# sd = 1 + SD_GROWTH * mn / (SD_HALF + mn)

SD_GROWTH: float = 15.0
SD_HALF: float = 500.0

# ---------------------------------------------------------------------------
# Increment usage
# ---------------------------------------------------------------------------
# incUsage = INC_USAGE_BASE + INC_USAGE_BUMP * gauss(mn, INC_USAGE_PEAK, INC_USAGE_WIDTH)

INC_USAGE_BASE: float = 54.0
INC_USAGE_BUMP: float = 44.0
INC_USAGE_PEAK: float = 19.0
INC_USAGE_WIDTH: float = 405.0

# ---------------------------------------------------------------------------
# Pondering
# ---------------------------------------------------------------------------
# Optimum is inflated by optimum // PONDER_DIVISOR when pondering is on.

PONDER_DIVISOR: int = 4

# ---------------------------------------------------------------------------
# Option defaults and bounds
# ---------------------------------------------------------------------------

DEFAULT_MOVE_OVERHEAD: int = 30
MAX_MOVE_OVERHEAD: int = 5_000

DEFAULT_NODESTIME: int = 0
MAX_NODESTIME: int = 10_000
