"""Change notification hook for forms.

Forms are plain mutable state. A UI layer that wants to re-render on
changes subscribes a listener here; the form calls every listener after
each atomic step, once the value, touched and error maps are consistent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)

__all__ = ["ChangeKind", "FormEvent", "Listener", "ObserverList"]


class ChangeKind(str, Enum):
    """What kind of step produced a notification."""

    REGISTER = "register"
    UPDATE = "update"
    RESET = "reset"
    CLEAR = "clear"
    UNTOUCH = "untouch"
    ERRORS = "errors"


@dataclass(frozen=True)
class FormEvent:
    """A change notification.

    Attributes:
        kind: Step that produced the change
        keys: Field keys affected, in registration order
    """

    kind: ChangeKind
    keys: Tuple[str, ...] = ()


Listener = Callable[[FormEvent], None]


class ObserverList:
    """Ordered set of listeners notified synchronously."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Add a listener.

        Returns:
            A callable that removes the listener again (safe to call twice)
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, event: FormEvent) -> None:
        # Snapshot so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Error notifying listener %r of %s", listener, event.kind.value)
