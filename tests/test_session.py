import asyncio

import pytest

from windsight.data.factor_simulator import MAX_HISTORY_POINTS
from windsight.data.unit_registry import UnknownUnitError
from windsight.utils.session import MonitoringSession


def test_new_session_is_initialised():
    session = MonitoringSession(1, seed=0)
    assert session.unit.id == 1
    assert session.tick_index == 0
    assert len(session.factors) == 4
    assert len(session.power_curve) == 107
    assert not session.running


def test_tick_advances_factors():
    seen = []
    session = MonitoringSession(6, seed=0, on_tick=lambda s: seen.append(s.tick_index))
    before = session.factors
    session.tick()
    session.tick()
    assert session.tick_index == 2
    assert seen == [1, 2]
    assert session.factors is not before
    assert all(len(f.history) == MAX_HISTORY_POINTS for f in session.factors)


def test_select_unit_replaces_state():
    session = MonitoringSession(1, seed=0)
    session.tick()
    old_factors = session.factors
    session.select_unit(6)
    assert session.unit.id == 6
    assert session.tick_index == 0
    assert session.factors is not old_factors
    assert session.factor("generator").deviation_score == 100


def test_select_unknown_unit_keeps_state():
    session = MonitoringSession(2, seed=0)
    factors = session.factors
    with pytest.raises(UnknownUnitError):
        session.select_unit(99)
    assert session.unit.id == 2
    assert session.factors is factors


def test_factor_lookup():
    session = MonitoringSession(1, seed=0)
    assert session.factor("rotor").name == "Rotor Speed"
    with pytest.raises(KeyError):
        session.factor("vibration")


def test_distribution_on_demand():
    session = MonitoringSession(6, seed=0)
    snapshot = session.distribution("generator")
    assert snapshot.reference_mean == 70.0
    assert snapshot.actual_std_dev == pytest.approx(2.0 * snapshot.reference_std_dev)


def test_sessions_are_isolated():
    a = MonitoringSession(1, seed=0)
    b = MonitoringSession(1, seed=0)
    assert a.rng is not b.rng
    b_factors = b.factors
    a.tick()
    assert b.factors is b_factors
    assert b.tick_index == 0


def test_run_for_ticks():
    session = MonitoringSession(3, interval=0, seed=0)
    asyncio.run(session.run_for(4))
    assert session.tick_index == 4


def test_start_and_stop():
    async def scenario():
        session = MonitoringSession(1, interval=0.01, seed=0)
        session.start()
        assert session.running
        await asyncio.sleep(0.1)
        assert session.tick_index >= 1
        session.stop()
        assert not session.running
        stopped_at = session.tick_index
        await asyncio.sleep(0.05)
        return stopped_at, session.tick_index

    stopped_at, after = asyncio.run(scenario())
    assert after == stopped_at


def test_start_twice_keeps_single_ticker():
    async def scenario():
        session = MonitoringSession(1, interval=0.01, seed=0)
        session.start()
        task = session._task
        session.start()
        same = session._task is task
        session.stop()
        return same

    assert asyncio.run(scenario())


def test_unit_change_cancels_stale_ticker():
    async def scenario():
        session = MonitoringSession(1, interval=0.01, seed=0)
        session.start()
        await asyncio.sleep(0.05)
        old_task = session._task
        session.select_unit(6)
        await asyncio.sleep(0.05)
        result = (old_task.cancelled(), session.running, session._task is not old_task, session.unit.id)
        session.stop()
        return result

    cancelled, running, replaced, unit_id = asyncio.run(scenario())
    assert cancelled
    assert running
    assert replaced
    assert unit_id == 6


def test_failing_on_tick_keeps_ticker_alive(capsys):
    def render(session):
        raise RuntimeError("render failed")

    async def scenario():
        session = MonitoringSession(1, interval=0.01, seed=0, on_tick=render)
        session.start()
        await asyncio.sleep(0.1)
        result = (session.tick_index, session.running)
        session.stop()
        return result

    ticks, running = asyncio.run(scenario())
    assert ticks >= 2
    assert running
    out = capsys.readouterr().out
    assert "[Session] Tick 1 on Unit 1 failed: RuntimeError('render failed')" in out


def test_failing_on_tick_propagates_from_direct_tick():
    def render(session):
        raise RuntimeError("render failed")

    session = MonitoringSession(1, seed=0, on_tick=render)
    with pytest.raises(RuntimeError):
        session.tick()
    assert session.tick_index == 1
