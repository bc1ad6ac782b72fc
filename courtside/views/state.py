"""Loading/error/result state shared by all views.

View logic stays free of Textual so it can be driven by widgets and by
tests alike; widgets subscribe to a view and re-render on every change.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from ..chat.errors import describe_failure, error_kind

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[], None]


class SlotStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class QuerySlot(Generic[T]):
    """State machine for one query: idle -> loading -> success | error.

    Every run takes a sequence number. A completion that is not the latest
    issued for this slot is dropped, so a slow stale response can never
    overwrite a newer one.
    """

    def __init__(self, name: str, on_change: Optional[Listener] = None) -> None:
        self.name = name
        self._on_change = on_change
        self.status = SlotStatus.IDLE
        self.result: Optional[T] = None
        self.error: Optional[BaseException] = None
        self.error_kind: Optional[str] = None
        self.error_message: Optional[str] = None
        self.last_updated: Optional[datetime] = None
        self._succeeded = False
        self._issued = 0

    @property
    def loading(self) -> bool:
        return self.status is SlotStatus.LOADING

    @property
    def has_result(self) -> bool:
        return self._succeeded

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _is_stale(self, seq: int) -> bool:
        if seq != self._issued:
            logger.debug("Dropping stale %s response (#%d, latest #%d)", self.name, seq, self._issued)
            return True
        return False

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        silent: bool = False,
        replace_when: Optional[Callable[[T], bool]] = None,
    ) -> bool:
        """Run ``operation`` and record its outcome. Never raises.

        Args:
            operation: Zero-argument coroutine factory for the query.
            silent: Background refresh. When a previous result exists the
                slot stays in SUCCESS while loading and failures are only
                logged, unless the slot is LOADING for a superseded
                foreground run when this one finishes.
            replace_when: If given and it returns False for a new result,
                an existing result is kept (e.g. an empty refresh).

        Returns:
            True if a new result was stored.
        """
        self._issued += 1
        seq = self._issued
        background = silent and self._succeeded

        if not background:
            self.status = SlotStatus.LOADING
            self.error = None
            self.error_kind = None
            self.error_message = None
            self._changed()

        try:
            value = await operation()
        except Exception as exc:
            if self._is_stale(seq):
                return False
            # Quiet only while no superseded foreground run holds the slot in LOADING
            if background and not self.loading:
                logger.warning("Background refresh of %s failed: %s", self.name, exc)
                return False
            logger.error("Query %s failed: %s", self.name, exc)
            self.status = SlotStatus.ERROR
            self.error = exc
            self.error_kind = error_kind(exc)
            self.error_message = describe_failure(exc)
            self._changed()
            return False

        if self._is_stale(seq):
            return False

        if replace_when is not None and self._succeeded and not replace_when(value):
            self.status = SlotStatus.SUCCESS
            self._changed()
            return False

        self.result = value
        self.status = SlotStatus.SUCCESS
        self.last_updated = datetime.now()
        self._succeeded = True
        self._changed()
        return True

    def reset(self) -> None:
        """Back to idle; any in-flight response will be dropped."""
        self._issued += 1
        self.status = SlotStatus.IDLE
        self.result = None
        self.error = None
        self.error_kind = None
        self.error_message = None
        self._succeeded = False
        self._changed()


class ViewModel:
    """Base for views: owns slots and tells subscribers when anything changes."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
