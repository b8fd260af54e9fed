from __future__ import annotations

import logging
from typing import Callable, List

from .models import BoardState, Theme

logger = logging.getLogger(__name__)

ThemeListener = Callable[[Theme], None]


class DisplayModeSignal:
    """Process-wide light/dark flag that styling code listens to."""

    def __init__(self, theme: Theme = Theme.LIGHT) -> None:
        self.theme = theme
        self._listeners: List[ThemeListener] = []

    def connect(self, listener: ThemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def disconnect() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return disconnect

    def set(self, theme: Theme) -> None:
        self.theme = theme
        for listener in list(self._listeners):
            try:
                listener(theme)
            except Exception:
                logger.exception("Display mode listener %r failed", listener)

    def broadcast(self, state: BoardState) -> None:
        self.set(state.theme)


display_mode = DisplayModeSignal()
