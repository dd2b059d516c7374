"""
View State Machine

Tracks which scale the camera shows (ground / system / galactic) and the
mode it came from. Any mode can switch to any other on explicit request;
there is no terminal state.

Subscribers are notified after every switch with (current, previous) and
use the previous mode to pick where the camera transition starts.
"""

from __future__ import annotations
import logging
from typing import Callable, Optional

from core.types import ViewMode

logger = logging.getLogger(__name__)

ViewListener = Callable[[ViewMode, Optional[ViewMode]], None]


class ViewStateMachine:
    """
    Owner of the current/previous view mode.

    Usage:
        views = ViewStateMachine(initial=ViewMode.GROUND)
        views.subscribe(rig.on_view_change)
        views.request(ViewMode.GALACTIC)
    """

    def __init__(self, initial: ViewMode = ViewMode.GROUND):
        self._current: ViewMode = initial
        self._previous: Optional[ViewMode] = None
        self._listeners: list[ViewListener] = []

    @property
    def current(self) -> ViewMode:
        return self._current

    @property
    def previous(self) -> Optional[ViewMode]:
        return self._previous

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def request(self, mode: ViewMode) -> bool:
        """
        Switch to mode.

        Returns:
            True if the mode changed, False if it was already current
        """
        mode = ViewMode(mode)
        if mode is self._current:
            return False

        self._previous = self._current
        self._current = mode
        logger.info("View mode %s -> %s", self._previous.value, mode.value)

        for listener in list(self._listeners):
            listener(self._current, self._previous)
        return True
