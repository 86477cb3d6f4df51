"""
Position signals for time management, read from a python-chess board.

These are deliberately cheap: the time manager runs once per move, before
the search, and only needs a rough idea of how much is left to play.
"""

import chess

from timeman.complexity import TimeSignal
from timeman.constants import NON_PAWN_PIECE_TYPES, PIECE_VALUES


def game_ply(board: chess.Board) -> int:
    """
    Half-moves played since the start of the game.

    Derived from the FEN fullmove number rather than the move stack, so a
    board set up from a mid-game FEN still reports its real ply.

    Example:
        >>> game_ply(chess.Board())
        0
        >>> game_ply(chess.Board("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"))
        1
    """
    return 2 * (board.fullmove_number - 1) + (1 if board.turn == chess.BLACK else 0)


def non_pawn_material(board: chess.Board) -> int:
    """Knights, bishops, rooks and queens of both sides, in centipawns."""
    total = 0
    for piece_type in NON_PAWN_PIECE_TYPES:
        count = len(board.pieces(piece_type, chess.WHITE)) + len(board.pieces(piece_type, chess.BLACK))
        total += count * PIECE_VALUES[piece_type]
    return total


def material_eval(board: chess.Board) -> int:
    """Material balance in centipawns from the side-to-move's perspective."""
    score = 0
    for piece_type, value in PIECE_VALUES.items():
        score += value * (len(board.pieces(piece_type, chess.WHITE)) - len(board.pieces(piece_type, chess.BLACK)))
    return score if board.turn == chess.WHITE else -score


def position_signal(board: chess.Board, signal_kind: TimeSignal) -> int | None:
    """
    The value the selected time-signal strategy expects for this board.

    Returns non-pawn material for MATERIAL, the material evaluation for EVAL,
    and None for NONE.
    """
    signal_kind = TimeSignal(signal_kind)
    if signal_kind is TimeSignal.MATERIAL:
        return non_pawn_material(board)
    if signal_kind is TimeSignal.EVAL:
        return material_eval(board)
    return None
