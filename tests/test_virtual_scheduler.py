"""Tests for the deterministic VirtualScheduler."""
import pytest

from core.scheduling import VirtualScheduler


def test_single_shot_fires_once_at_deadline(virtual_scheduler):
    fired = []
    handle = virtual_scheduler.single_shot(2.0, lambda: fired.append(virtual_scheduler.now()))

    assert handle.is_active()
    virtual_scheduler.advance(1.999)
    assert fired == []

    virtual_scheduler.advance_to(2.0)
    assert fired == [2.0]
    assert not handle.is_active()

    virtual_scheduler.advance(10.0)
    assert fired == [2.0]


def test_now_moves_to_target(virtual_scheduler):
    virtual_scheduler.advance(1.5)
    assert virtual_scheduler.now() == 1.5
    virtual_scheduler.advance_to(4.0)
    assert virtual_scheduler.now() == 4.0


def test_callbacks_fire_in_deadline_order(virtual_scheduler):
    order = []
    virtual_scheduler.single_shot(3.0, lambda: order.append("c"))
    virtual_scheduler.single_shot(1.0, lambda: order.append("a"))
    virtual_scheduler.single_shot(2.0, lambda: order.append("b"))

    assert virtual_scheduler.advance(5.0) == 3
    assert order == ["a", "b", "c"]


def test_equal_deadlines_fire_in_creation_order(virtual_scheduler):
    order = []
    for name in "xyz":
        virtual_scheduler.single_shot(1.0, lambda n=name: order.append(n))

    virtual_scheduler.advance(1.0)
    assert order == ["x", "y", "z"]


def test_cancel_prevents_firing(virtual_scheduler):
    fired = []
    handle = virtual_scheduler.single_shot(1.0, lambda: fired.append(True))
    handle.cancel()
    handle.cancel()

    assert not handle.is_active()
    assert virtual_scheduler.pending_count() == 0
    virtual_scheduler.advance(2.0)
    assert fired == []


def test_recurring_fires_every_interval_without_drift(virtual_scheduler):
    times = []
    virtual_scheduler.schedule_recurring(0.1, lambda: times.append(virtual_scheduler.now()))

    virtual_scheduler.advance_to(10.0)

    assert len(times) == 100
    assert times[0] == pytest.approx(0.1)
    assert times[-1] == 10.0
    for k, t in enumerate(times, start=1):
        assert t == pytest.approx(k * 0.1, abs=1e-12)


def test_recurring_cancel_from_inside_callback(virtual_scheduler):
    count = []
    handle = None

    def tick():
        count.append(1)
        if len(count) == 3:
            handle.cancel()

    handle = virtual_scheduler.schedule_recurring(1.0, tick)
    virtual_scheduler.advance(10.0)

    assert len(count) == 3
    assert virtual_scheduler.pending_count() == 0


def test_recurring_keeps_creation_order_on_ties(virtual_scheduler):
    order = []
    virtual_scheduler.schedule_recurring(1.0, lambda: order.append("tick"))
    # Created later but due at the same instant as the second tick
    virtual_scheduler.advance(0.5)
    virtual_scheduler.single_shot(1.5, lambda: order.append("shot"))

    virtual_scheduler.advance_to(2.0)
    assert order == ["tick", "tick", "shot"]


def test_callbacks_scheduled_while_advancing_fire_if_due(virtual_scheduler):
    order = []

    def first():
        order.append(("first", virtual_scheduler.now()))
        virtual_scheduler.single_shot(0.0, lambda: order.append(("zero", virtual_scheduler.now())))
        virtual_scheduler.single_shot(1.0, lambda: order.append(("later", virtual_scheduler.now())))
        virtual_scheduler.single_shot(5.0, lambda: order.append(("beyond", virtual_scheduler.now())))

    virtual_scheduler.single_shot(1.0, first)
    virtual_scheduler.advance_to(3.0)

    assert order == [("first", 1.0), ("zero", 1.0), ("later", 2.0)]
    assert virtual_scheduler.pending_count() == 1
    assert virtual_scheduler.next_deadline() == 6.0


def test_callback_exception_is_logged_and_isolated(virtual_scheduler, caplog):
    fired = []

    def broken():
        raise RuntimeError("kaput")

    virtual_scheduler.single_shot(1.0, broken, description="broken timer")
    virtual_scheduler.single_shot(2.0, lambda: fired.append(True))

    with caplog.at_level("ERROR"):
        virtual_scheduler.advance(3.0)

    assert fired == [True]
    assert "broken timer" in caplog.text


def test_invalid_arguments():
    scheduler = VirtualScheduler(start_time=5.0)
    with pytest.raises(ValueError):
        scheduler.single_shot(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.schedule_recurring(0.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.single_shot(1.0, None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)
    with pytest.raises(ValueError):
        scheduler.advance_to(4.0)


def test_handle_description_and_repr(virtual_scheduler):
    def my_callback():
        pass

    named = virtual_scheduler.single_shot(1.0, lambda: None, description="phase advance")
    derived = virtual_scheduler.single_shot(1.0, my_callback)

    assert named.description == "phase advance"
    assert "my_callback" in derived.description
    assert "active" in repr(named)
