"""
Time manager: per-move optimum and maximum budgets for the search driver.

The search driver owns one TimeManager per match and calls init() once per
move, before the search starts. init() reads the clock for the side to move,
asks the curve engine for both budgets and stores them together with the
search start instant. The driver then polls:

    elapsed() >= optimum()  ->  do not start another depth iteration
    elapsed() >= maximum()  ->  abort the search now

Node-time mode:
    With a non-zero "nodestime" option (or Limits.npmsec) the budgets are
    expressed in search nodes instead of milliseconds. The node budget for the
    whole match is fixed the first time the mode is seen, as npmsec * clock,
    and afterwards only changes through spend_nodes(): the wall clock the GUI
    reports is ignored. This makes the engine's time usage reproducible on
    any hardware, at the cost of real time losses if npmsec is set higher
    than the engine's real speed.

Threading model:
    None. One search controller owns the manager; concurrent games need one
    manager each.
"""

import logging
import time
from dataclasses import dataclass, field

import chess

from timeman.complexity import move_context
from timeman.constants import PONDER_DIVISOR
from timeman.curves import BudgetKind, remaining
from timeman.options import EngineOptions

_log = logging.getLogger(__name__)


def now_ms() -> int:
    """Monotonic clock in whole milliseconds."""
    return int(time.monotonic() * 1000)


def _per_side() -> dict[bool, int]:
    return {chess.WHITE: 0, chess.BLACK: 0}


@dataclass
class Limits:
    """
    Clock state for the current move, as parsed from a UCI "go" command.

    Attributes:
        time:       Remaining time per side in ms, keyed by chess.WHITE/BLACK.
        inc:        Increment per side in ms.
        movestogo:  Moves until the next time control; 0 = sudden death.
        start_time: now_ms() instant at which the search began.
        npmsec:     Nodes per ms. Non-zero forces node-time mode for this call
                    regardless of the "nodestime" option.
    """

    time: dict[bool, int] = field(default_factory=_per_side)
    inc: dict[bool, int] = field(default_factory=_per_side)
    movestogo: int = 0
    start_time: int = field(default_factory=now_ms)
    npmsec: int = 0

    @classmethod
    def from_clock(
        cls,
        us: bool,
        time_ms: int,
        inc_ms: int = 0,
        movestogo: int = 0,
        start_time: int | None = None,
        npmsec: int = 0,
    ) -> "Limits":
        """Limits with only the side to move's clock filled in."""
        limits = cls(movestogo=movestogo, npmsec=npmsec)
        limits.time[us] = time_ms
        limits.inc[us] = inc_ms
        if start_time is not None:
            limits.start_time = start_time
        return limits


class TimeManager:
    """
    Stateful owner of the per-move time budgets.

    Attributes:
        options:         EngineOptions read on every init() call.
        start_time:      Search start instant of the last init() call.
        optimum_time:    Soft budget of the last call (ms or nodes).
        maximum_time:    Hard budget of the last call (ms or nodes).
        available_nodes: Node budget for the match in node-time mode; 0 until
                         the mode is first used.
        npmsec:          Nodes per ms in effect for the last call, 0 = wall clock.
        node_increment:  Increment of the last call converted to nodes.
    """

    def __init__(self, options: EngineOptions | None = None) -> None:
        self.options: EngineOptions = options if options is not None else EngineOptions()
        self.reset()

    def reset(self) -> None:
        """Forget everything about the current match (UCI "ucinewgame")."""
        self.start_time: int = 0
        self.optimum_time: int = 0
        self.maximum_time: int = 0
        self.available_nodes: int = 0
        self.npmsec: int = 0
        self.node_increment: int = 0

    def init(
        self,
        limits: Limits,
        us: bool,
        ply: int,
        signal: float | None = None,
    ) -> tuple[int, int]:
        """
        Compute the optimum and maximum budgets for the side to move.

        We support four kinds of time controls, all read from limits:

            inc == 0 and movestogo == 0:  x basetime              [sudden death]
            inc == 0 and movestogo != 0:  x moves in y minutes
            inc >  0 and movestogo == 0:  x basetime + z increment
            inc >  0 and movestogo != 0:  x moves in y minutes + z increment

        Args:
            limits: Clock state for this move. Not modified.
            us:     Side to move (chess.WHITE or chess.BLACK).
            ply:    Half-moves since the start of the game.
            signal: Position signal for the configured "Time Signal"
                    strategy (non-pawn material or evaluation, in cp), or
                    None if unknown.

        Returns:
            (optimum_time, maximum_time) in ms, or in nodes in node-time mode.
        """
        options = self.options
        move_overhead = options.move_overhead
        npmsec = limits.npmsec or options.nodestime

        my_time = limits.time.get(us, 0)
        my_inc = limits.inc.get(us, 0)

        self.npmsec = npmsec
        if npmsec:
            if not self.available_nodes:  # Only once at game start
                self.available_nodes = npmsec * my_time
                _log.info("timeman: node budget fixed at %d nodes (%d nodes/ms)", self.available_nodes, npmsec)

            my_time = self.available_nodes
            my_inc *= npmsec
            self.node_increment = my_inc

        self.start_time = limits.start_time

        context = move_context(options.time_signal, ply, signal)

        self.optimum_time = remaining(
            BudgetKind.OPTIMUM, my_time, my_inc, move_overhead,
            limits.movestogo, context.move_number, context.complexity,
        )
        self.maximum_time = remaining(
            BudgetKind.MAXIMUM, my_time, my_inc, move_overhead,
            limits.movestogo, context.move_number, context.complexity,
        )

        if options.ponder:
            self.optimum_time += self.optimum_time // PONDER_DIVISOR

        _log.debug(
            "timeman: ply=%d mn=%d complexity=%.2f time=%d inc=%d mtg=%d -> optimum=%d maximum=%d%s",
            ply,
            context.move_number,
            context.complexity,
            my_time,
            my_inc,
            limits.movestogo,
            self.optimum_time,
            self.maximum_time,
            " nodes" if npmsec else " ms",
        )

        return self.optimum_time, self.maximum_time

    def optimum(self) -> int:
        return self.optimum_time

    def maximum(self) -> int:
        return self.maximum_time

    def elapsed(self, nodes_searched: int = 0) -> int:
        """
        Time spent on the current search, in the unit of the budgets.

        In node-time mode this is simply the node count the driver reports;
        otherwise it is the wall-clock time since start_time.
        """
        if self.npmsec:
            return nodes_searched
        return now_ms() - self.start_time

    def spend_nodes(self, nodes_searched: int) -> None:
        """
        Charge a finished node-time search against the match node budget.

        The increment (already converted to nodes) is credited and the nodes
        actually searched are debited. Has no effect in wall-clock mode.
        """
        if not self.npmsec:
            return
        # Never back to 0: that would re-fix the budget from the clock next move.
        self.available_nodes = max(1, self.available_nodes + self.node_increment - nodes_searched)
        _log.debug("timeman: %d nodes left after spending %d", self.available_nodes, nodes_searched)
