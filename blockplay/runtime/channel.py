"""
Output Channel

Ordered, append-only log of everything the running program (or the run
controller) shows to the user. ``reset()`` is the only operation that
removes events.

Event ids come from one counter for the lifetime of the channel, so they
keep increasing across resets and are never reused.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputEvent:
    """One captured emission."""
    id: int
    text: str
    timestamp: datetime

    @property
    def display_time(self) -> str:
        return self.timestamp.strftime("%H:%M:%S")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
        }


ChannelListener = Callable[[Optional[OutputEvent]], None]


class OutputChannel:
    """
    Ordered event log observed by the UI.

    Listeners get each appended event, and ``None`` after a reset.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._events: List[OutputEvent] = []
        self._ids = itertools.count(1)
        self._clock = clock
        self._listeners: List[ChannelListener] = []

    def append(self, text: str) -> OutputEvent:
        event = OutputEvent(
            id=next(self._ids),
            text="" if text is None else str(text),
            timestamp=self._clock(),
        )
        self._events.append(event)
        self._notify(event)
        return event

    def length(self) -> int:
        return len(self._events)

    def reset(self) -> None:
        cleared = len(self._events)
        self._events.clear()
        logger.debug("Output channel reset (%d events cleared)", cleared)
        self._notify(None)

    def events(self) -> List[OutputEvent]:
        """Snapshot of the current events."""
        return list(self._events)

    def texts(self) -> List[str]:
        return [e.text for e in self._events]

    def subscribe(self, listener: ChannelListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChannelListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def to_dict(self) -> Dict[str, Any]:
        return {"events": [e.to_dict() for e in self._events]}

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[OutputEvent]:
        return iter(list(self._events))

    def _notify(self, event: Optional[OutputEvent]) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("Output listener %r failed", listener, exc_info=True)
