import pytest

from falling_blocks.game import ManualScheduler


def test_repeating_task_fires_per_interval():
    scheduler = ManualScheduler()
    calls = []
    scheduler.call_every(100, lambda: calls.append(scheduler.now_ms))
    assert scheduler.advance(99) == 0
    assert scheduler.advance(1) == 1
    assert scheduler.advance(350) == 3
    assert calls == [100, 200, 300, 400]
    assert scheduler.now_ms == 450


def test_cancelled_task_never_fires():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.call_every(100, lambda: calls.append(1))
    task.cancel()
    scheduler.advance(1000)
    assert calls == []
    assert scheduler.pending == 0


def test_reschedule_from_inside_callback():
    scheduler = ManualScheduler()
    fired = []
    state = {}

    def slow():
        fired.append(("slow", scheduler.now_ms))
        state["task"].cancel()
        state["task"] = scheduler.call_every(50, fast)

    def fast():
        fired.append(("fast", scheduler.now_ms))

    state["task"] = scheduler.call_every(100, slow)
    scheduler.advance(210)
    assert fired == [("slow", 100), ("fast", 150), ("fast", 200)]
    assert scheduler.pending == 1


def test_cancel_other_task_during_advance():
    scheduler = ManualScheduler()
    calls = []
    later = scheduler.call_every(20, lambda: calls.append("later"))
    scheduler.call_every(10, lambda: (calls.append("first"), later.cancel()))
    scheduler.advance(40)
    assert "later" not in calls


def test_rejects_bad_arguments():
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)
