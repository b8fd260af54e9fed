"""Drag-to-column relocation.

A :class:`DragSession` tracks one gesture from pick-up to release. Hovering
is visual feedback only; the board hears about a gesture once, when a card
is dropped on a list. Cancelled gestures never reach the board.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

DropHandler = Callable[[Optional[str], str, str], object]


class DragError(Exception):
    """The gesture events arrived in an order the protocol does not allow."""


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING = "hovering"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


ACTIVE_PHASES = (DragPhase.DRAGGING, DragPhase.HOVERING)


class DragSession:
    def __init__(self, on_drop: DropHandler) -> None:
        self.on_drop = on_drop
        self.phase = DragPhase.IDLE
        self.card_id: Optional[str] = None
        self.hover_list_id: Optional[str] = None
        self.target_list_id: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.phase in ACTIVE_PHASES

    def start(self, card_id: str) -> None:
        if self.active:
            raise DragError(f"already dragging {self.card_id}")
        self.phase = DragPhase.DRAGGING
        self.card_id = card_id
        self.hover_list_id = None
        self.target_list_id = None

    def enter(self, list_id: str) -> None:
        self._require_active("enter")
        self.phase = DragPhase.HOVERING
        self.hover_list_id = list_id

    def leave(self, list_id: str) -> None:
        self._require_active("leave")
        # a late leave from the previous list must not clear the current one
        if self.hover_list_id == list_id:
            self.phase = DragPhase.DRAGGING
            self.hover_list_id = None

    def drop(self, list_id: str) -> None:
        """Release over ``list_id``'s drop target and forward the move."""
        self._require_active("drop")
        card_id = self.card_id
        self.phase = DragPhase.DROPPED
        self.hover_list_id = None
        self.target_list_id = list_id
        self.on_drop(None, card_id, list_id)

    def cancel(self) -> None:
        """Release outside any drop target."""
        self._require_active("cancel")
        self.phase = DragPhase.CANCELLED
        self.hover_list_id = None

    def _require_active(self, event: str) -> None:
        if not self.active:
            raise DragError(f"cannot {event} while {self.phase.value}")
