"""Tests for TimeManager: scenarios, ponder, node-time mode and state handling."""

import math

import chess
import pytest

from timeman.complexity import TimeSignal, move_context
from timeman.curves import BudgetKind, remaining
from timeman.manager import Limits, TimeManager, now_ms
from timeman.options import EngineOptions


def _manager(**kwargs) -> TimeManager:
    kwargs.setdefault("move_overhead", 0)
    return TimeManager(EngineOptions(**kwargs))


def test_sudden_death_game_start():
    manager = _manager()
    limits = Limits.from_clock(chess.WHITE, 60_000)

    optimum, maximum = manager.init(limits, chess.WHITE, 1)

    assert 0 < optimum < 6_000
    assert optimum < maximum < 30_000
    assert (manager.optimum(), manager.maximum()) == (optimum, maximum)


def test_one_move_to_go_uses_almost_everything():
    manager = _manager()
    limits = Limits.from_clock(chess.BLACK, 1_000, movestogo=1)

    optimum, maximum = manager.init(limits, chess.BLACK, 1)

    assert maximum == 1_000
    assert optimum < maximum


def test_reads_clock_of_side_to_move():
    manager = _manager()
    limits = Limits(time={chess.WHITE: 1_000, chess.BLACK: 600_000})

    white_opt, _ = manager.init(limits, chess.WHITE, 20)
    black_opt, _ = manager.init(limits, chess.BLACK, 20)

    assert white_opt < black_opt


@pytest.mark.parametrize("overhead", [3_000, 4_000, 5_000])
def test_overhead_swallowing_clock_gives_zero_budgets(overhead):
    manager = _manager(move_overhead=overhead)
    limits = Limits.from_clock(chess.WHITE, 3_000, inc_ms=100)

    assert manager.init(limits, chess.WHITE, 40) == (0, 0)


def test_exhausted_clock_gives_zero_budgets():
    manager = _manager()
    limits = Limits.from_clock(chess.WHITE, 0, inc_ms=2_000)

    assert manager.init(limits, chess.WHITE, 40) == (0, 0)


@pytest.mark.parametrize("movestogo", [0, 1, 10, 40])
@pytest.mark.parametrize("inc", [0, 1_000])
@pytest.mark.parametrize("ply", [1, 30, 90])
def test_ponder_inflates_optimum_only(movestogo, inc, ply):
    limits = Limits.from_clock(chess.WHITE, 120_000, inc_ms=inc, movestogo=movestogo)

    base_opt, base_max = _manager().init(limits, chess.WHITE, ply)
    ponder_opt, ponder_max = _manager(ponder=True).init(limits, chess.WHITE, ply)

    assert ponder_opt == base_opt + base_opt // 4
    assert ponder_opt == base_opt * 5 // 4
    assert ponder_max == base_max


@pytest.mark.parametrize("ponder", [False, True])
@pytest.mark.parametrize("time_signal", list(TimeSignal))
def test_maximum_never_below_optimum(ponder, time_signal):
    manager = _manager(ponder=ponder, time_signal=time_signal)
    signals = {TimeSignal.MATERIAL: 6_400, TimeSignal.EVAL: 250, TimeSignal.NONE: None}

    for my_time in (0, 1, 50, 1_000, 60_000, 10_000_000):
        for inc in (0, 100, 5_000):
            for movestogo in (0, 1, 2, 10, 40):
                for ply in (0, 1, 30, 80, 200):
                    limits = Limits.from_clock(chess.WHITE, my_time, inc, movestogo)
                    optimum, maximum = manager.init(limits, chess.WHITE, ply, signals[time_signal])
                    assert maximum >= optimum >= 0


def test_node_time_fixes_budget_once_per_match():
    manager = _manager(nodestime=1_000)

    first = manager.init(Limits.from_clock(chess.WHITE, 10_000), chess.WHITE, 10)
    assert manager.available_nodes == 10_000_000

    second = manager.init(Limits.from_clock(chess.WHITE, 2_500), chess.WHITE, 10)
    assert manager.available_nodes == 10_000_000
    assert second == first

    context = move_context(TimeSignal.MATERIAL, 10)
    expected = remaining(BudgetKind.OPTIMUM, 10_000_000, 0, 0, 0, context.move_number, context.complexity)
    assert first[0] == expected


def test_node_time_scales_increment():
    manager = _manager(nodestime=1_000)
    limits = Limits.from_clock(chess.WHITE, 10_000, inc_ms=100)

    manager.init(limits, chess.WHITE, 10)

    assert manager.node_increment == 100_000
    assert limits.inc[chess.WHITE] == 100
    assert limits.time[chess.WHITE] == 10_000


def test_limits_npmsec_overrides_option():
    manager = _manager()
    manager.init(Limits.from_clock(chess.WHITE, 10_000, npmsec=500), chess.WHITE, 10)

    assert manager.available_nodes == 5_000_000
    assert manager.npmsec == 500


def test_spend_nodes_charges_match_budget():
    manager = _manager(nodestime=1_000)
    manager.init(Limits.from_clock(chess.WHITE, 10_000, inc_ms=100), chess.WHITE, 10)

    manager.spend_nodes(2_000_000)

    assert manager.available_nodes == 10_000_000 + 100_000 - 2_000_000


def test_spend_nodes_never_rearms_budget():
    manager = _manager(nodestime=1_000)
    manager.init(Limits.from_clock(chess.WHITE, 10_000), chess.WHITE, 10)

    manager.spend_nodes(50_000_000)
    assert manager.available_nodes == 1

    manager.init(Limits.from_clock(chess.WHITE, 10_000), chess.WHITE, 12)
    assert manager.available_nodes == 1


def test_spend_nodes_ignored_on_wall_clock():
    manager = _manager()
    manager.init(Limits.from_clock(chess.WHITE, 10_000), chess.WHITE, 10)

    manager.spend_nodes(123_456)

    assert manager.available_nodes == 0


def test_reset_starts_a_new_match():
    manager = _manager(nodestime=1_000)
    manager.init(Limits.from_clock(chess.WHITE, 10_000), chess.WHITE, 10)

    manager.reset()
    assert manager.available_nodes == 0
    assert (manager.optimum(), manager.maximum()) == (0, 0)

    manager.init(Limits.from_clock(chess.WHITE, 20_000), chess.WHITE, 0)
    assert manager.available_nodes == 20_000_000


def test_options_are_read_at_call_time():
    options = EngineOptions(move_overhead=0)
    manager = TimeManager(options)
    limits = Limits.from_clock(chess.WHITE, 60_000)

    base_opt, _ = manager.init(limits, chess.WHITE, 20)
    options.set_option("Ponder", "true")
    ponder_opt, _ = manager.init(limits, chess.WHITE, 20)

    assert ponder_opt == base_opt + base_opt // 4


def test_start_time_and_elapsed():
    manager = _manager()
    start = now_ms() - 50
    manager.init(Limits.from_clock(chess.WHITE, 60_000, start_time=start), chess.WHITE, 1)

    assert manager.start_time == start
    assert manager.elapsed() >= 50


def test_elapsed_counts_nodes_in_node_time():
    manager = _manager(nodestime=100)
    manager.init(Limits.from_clock(chess.WHITE, 60_000), chess.WHITE, 1)

    assert manager.elapsed(nodes_searched=4_321) == 4_321


def test_less_material_spends_less():
    manager = _manager(time_signal=TimeSignal.MATERIAL)
    limits = Limits.from_clock(chess.WHITE, 60_000)

    full, _ = manager.init(limits, chess.WHITE, 40, 6_400)
    bare, _ = manager.init(limits, chess.WHITE, 40, 0)

    assert bare < full


def test_lopsided_eval_spends_less():
    manager = _manager(time_signal=TimeSignal.EVAL)
    limits = Limits.from_clock(chess.WHITE, 60_000)

    balanced, _ = manager.init(limits, chess.WHITE, 80, 0)
    winning, _ = manager.init(limits, chess.WHITE, 80, 900)
    losing, _ = manager.init(limits, chess.WHITE, 80, -900)

    assert winning < balanced
    assert winning == losing


@pytest.mark.parametrize("time_signal", [TimeSignal.EVAL, TimeSignal.MATERIAL])
@pytest.mark.parametrize("signal", [math.inf, -math.inf, 10**400, -(10**400), math.nan])
@pytest.mark.parametrize("ponder", [False, True])
def test_extreme_signal_still_yields_budgets(time_signal, signal, ponder):
    manager = _manager(time_signal=time_signal, ponder=ponder)

    for movestogo in (0, 1, 40):
        limits = Limits.from_clock(chess.WHITE, 60_000, inc_ms=500, movestogo=movestogo)
        optimum, maximum = manager.init(limits, chess.WHITE, 40, signal)
        assert maximum >= optimum >= 0
        assert maximum <= 60_000
