from blinker import Signal
from typing import Dict


class EventBus:
    """Name-keyed notifications built on blinker Signal objects."""

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so lambdas and bound methods of short-lived adapters stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


EVENT_BOARD_CHANGED = "board_changed"                  # payload: reason=str
EVENT_LINES_CLEARED = "lines_cleared"                  # payload: lines=int, score=int
EVENT_DROP_INTERVAL_CHANGED = "drop_interval_changed"  # payload: interval=int
EVENT_SESSION_ENDED = "session_ended"                  # payload: score=int, lines=int
