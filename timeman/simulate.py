"""
Replay a whole game's clock through the time manager.

Useful for eyeballing a curve change before spending hours of self-play on
it: every side spends a fixed fraction of its optimum budget per move, gets
its increment back, and has its clock refilled at each time-control boundary.
"""

import math
from dataclasses import dataclass

import chess

from timeman.complexity import TimeSignal
from timeman.constants import STARTING_NON_PAWN_MATERIAL
from timeman.manager import Limits, TimeManager
from timeman.options import EngineOptions


@dataclass(frozen=True)
class TimeControl:
    """
    A time control in milliseconds.

    Attributes:
        base_ms:           Clock at the start of the game (and of each session).
        increment_ms:      Increment per move.
        moves_per_session: Moves per session for "40/120" controls; 0 = sudden death.
    """

    base_ms: int
    increment_ms: int = 0
    moves_per_session: int = 0

    @classmethod
    def parse(cls, text: str) -> "TimeControl":
        """
        Parse "60+1" (seconds + increment seconds) or "40/120[+inc]".

        Raises:
            ValueError: The text is not a time control we understand.
        """
        original = text
        text = text.strip()
        moves = 0
        if "/" in text:
            moves_text, text = text.split("/", 1)
            moves = int(moves_text)
        base_text, _, inc_text = text.partition("+")
        base = float(base_text)
        inc = float(inc_text) if inc_text else 0.0
        if moves < 0 or not math.isfinite(base) or not math.isfinite(inc) or base <= 0 or inc < 0:
            raise ValueError(f"invalid time control: {original!r}")
        return cls(int(base * 1000), int(inc * 1000), moves)

    def __str__(self) -> str:
        text = f"{self.base_ms / 1000:g}"
        if self.increment_ms:
            text += f"+{self.increment_ms / 1000:g}"
        if self.moves_per_session:
            text = f"{self.moves_per_session}/{text}"
        return text


@dataclass(frozen=True)
class SimulatedMove:
    """One row of a simulated game, for the side that moves first."""

    move_number: int
    clock_ms: int
    optimum: int
    maximum: int
    spent_ms: int


def _material_at(move_number: int, moves: int) -> int:
    # Material drains linearly from the full board to a bare-king ending.
    return STARTING_NON_PAWN_MATERIAL * max(0, moves - move_number) // max(1, moves)


def simulate_game(
    control: TimeControl,
    moves: int = 80,
    options: EngineOptions | None = None,
    spend_fraction: float = 1.0,
) -> list[SimulatedMove]:
    """
    Simulate White's clock over a game of the given length.

    Args:
        control:        Time control to replay.
        moves:          Number of full moves to play.
        options:        Engine options (overhead, ponder, time signal).
        spend_fraction: Share of the optimum budget actually spent per move.

    Returns:
        One SimulatedMove per move played.
    """
    manager = TimeManager(options)
    clock = control.base_ms
    rows: list[SimulatedMove] = []

    for move_number in range(1, moves + 1):
        ply = 2 * (move_number - 1)
        movestogo = 0
        if control.moves_per_session:
            movestogo = control.moves_per_session - (move_number - 1) % control.moves_per_session

        limits = Limits.from_clock(chess.WHITE, clock, control.increment_ms, movestogo, start_time=0)
        signal = None
        if manager.options.time_signal is TimeSignal.MATERIAL:
            signal = _material_at(move_number, moves)
        optimum, maximum = manager.init(limits, chess.WHITE, ply, signal)

        spent = min(clock, int(optimum * spend_fraction))
        rows.append(SimulatedMove(move_number, clock, optimum, maximum, spent))

        clock = clock - spent + control.increment_ms
        if control.moves_per_session and movestogo == 1:
            clock += control.base_ms

    return rows
