"""Simple publish/subscribe in-process event bus.

Subscribe by event_type (string) and receive callables with a single
positional argument (the event object). A failing subscriber is logged and
skipped so the remaining subscribers still see the event.
"""
from typing import Callable, Dict, List, Any
import logging

_logger = logging.getLogger("skyscene.event_bus")

STATE_RESOLVED = "state_resolved"


class EventBus:
    def __init__(self):
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: str, callback: Callable[[Any], None]) -> None:
        self._subs.setdefault(event_type, []).append(callback)
        _logger.debug("Subscribed %s to %s", callback, event_type)

    def unsubscribe(self, event_type: str, callback: Callable[[Any], None]) -> None:
        listeners = self._subs.get(event_type)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def subscribers(self, event_type: str) -> int:
        return len(self._subs.get(event_type, []))

    def post(self, event_type: str, event: Any = None) -> int:
        """Deliver `event` synchronously; returns how many subscribers failed."""
        failures = 0
        for cb in list(self._subs.get(event_type, [])):
            try:
                cb(event)
            except Exception:
                failures += 1
                _logger.exception("Error dispatching event %s to %s", event_type, cb)
        return failures
