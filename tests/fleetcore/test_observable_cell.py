"""
Tests for fleetcore.state.cell — ObservableCell notification rules.
"""

import logging

import pytest

from fleetcore.state import ObservableCell, ReentrantWriteError


def test_set_notifies_with_new_and_old():
    cell = ObservableCell(1, name="counter")
    seen = []
    cell.subscribe(lambda new, old: seen.append((new, old)))

    assert cell.set(2) is True
    assert cell.get() == 2
    assert seen == [(2, 1)]


def test_equal_write_is_noop():
    cell = ObservableCell("a")
    seen = []
    cell.subscribe(lambda new, old: seen.append(new))

    assert cell.set("a") is False
    assert seen == []


def test_custom_equality_is_used():
    cell = ObservableCell("Fleet", equals=lambda a, b: a.lower() == b.lower())
    seen = []
    cell.subscribe(lambda new, old: seen.append(new))

    assert cell.set("FLEET") is False
    assert cell.get() == "Fleet"
    assert seen == []


def test_listeners_run_in_subscription_order():
    cell = ObservableCell(0)
    order = []
    cell.subscribe(lambda new, old: order.append("first"))
    cell.subscribe(lambda new, old: order.append("second"))
    cell.set(1)
    assert order == ["first", "second"]


def test_unsubscribe_stops_delivery():
    cell = ObservableCell(0)
    seen = []
    unsubscribe = cell.subscribe(lambda new, old: seen.append(new))
    cell.set(1)
    unsubscribe()
    unsubscribe()
    cell.set(2)
    assert seen == [1]
    assert cell.listener_count == 0


def test_failing_listener_is_logged_and_delivery_continues(caplog):
    cell = ObservableCell(0, name="flaky")
    seen = []

    def broken(new, old):
        raise RuntimeError("boom")

    cell.subscribe(broken)
    cell.subscribe(lambda new, old: seen.append(new))

    with caplog.at_level(logging.ERROR, logger="fleet.state"):
        assert cell.set(5) is True

    assert seen == [5]
    assert "flaky" in caplog.text


def test_write_from_own_notification_raises():
    cell = ObservableCell(0, name="loop")
    cell.subscribe(lambda new, old: cell.set(new + 1))

    with pytest.raises(ReentrantWriteError):
        cell.set(1)
    assert cell.get() == 1


def test_listener_may_write_another_cell():
    source = ObservableCell(0)
    derived = ObservableCell(0)
    source.subscribe(lambda new, old: derived.set(new * 2))

    source.set(4)
    assert derived.get() == 8


def test_update_applies_function():
    cell = ObservableCell(3)
    assert cell.update(lambda value: value + 1) is True
    assert cell.get() == 4


def test_subscribe_rejects_non_callable():
    with pytest.raises(TypeError):
        ObservableCell(0).subscribe("nope")


# ── Deferred work ────────────────────────────────────────────

def test_defer_from_listener_runs_after_notification():
    cell = ObservableCell(0, name="deferred")
    seen = []

    def listener(new, old):
        seen.append(new)
        if new == 1:
            cell.defer(lambda: cell.set(2))
            assert cell.get() == 1

    cell.subscribe(listener)
    assert cell.set(1) is True

    assert seen == [1, 2]
    assert cell.get() == 2
    assert not cell.is_notifying


def test_defer_outside_notification_runs_immediately():
    cell = ObservableCell(0)
    calls = []
    cell.defer(lambda: calls.append("ran"))
    assert calls == ["ran"]


def test_failing_deferred_callback_is_logged(caplog):
    cell = ObservableCell(0, name="flaky-deferred")

    def explode():
        raise RuntimeError("boom")

    cell.subscribe(lambda new, old: cell.defer(explode))

    with caplog.at_level(logging.ERROR, logger="fleet.state"):
        assert cell.set(1) is True

    assert "flaky-deferred" in caplog.text
