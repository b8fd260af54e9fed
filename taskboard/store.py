"""The board store: one authoritative board, changed only through operations.

Every operation builds a new immutable :class:`BoardState`, commits it and
then notifies subscribers (persistence, the display-mode signal) exactly
once. Unknown card ids are never an error; the operation commits the
unchanged board.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, List, Optional

from .models import BoardList, BoardState, Card
from .persistence import STORAGE_KEY, BoardPersistence
from .seed import DEFAULT_LIST_COLOR
from .signals import DisplayModeSignal, display_mode
from .storage import KeyValueStorage
from .utils import IdGenerator, now_ms

logger = logging.getLogger(__name__)

Listener = Callable[[BoardState], None]


# === Transitions (pure) ===


def set_card_list(state: BoardState, card_id: str, new_list_id: str) -> BoardState:
    return replace(
        state,
        cards=tuple(
            replace(c, list_id=new_list_id) if c.id == card_id else c for c in state.cards
        ),
    )


def add_card(state: BoardState, card: Card) -> BoardState:
    return replace(state, cards=state.cards + (card,))


def update_card(state: BoardState, card_id: str, title: str, description: str) -> BoardState:
    return replace(
        state,
        cards=tuple(
            replace(c, title=title, description=description) if c.id == card_id else c
            for c in state.cards
        ),
    )


def delete_card(state: BoardState, card_id: str) -> BoardState:
    return replace(state, cards=tuple(c for c in state.cards if c.id != card_id))


def add_list(state: BoardState, list_id: str, title: str) -> BoardState:
    new_list = BoardList(
        id=list_id, title=title, color_var=DEFAULT_LIST_COLOR, order=len(state.lists)
    )
    return replace(state, lists=state.lists + (new_list,))


def toggle_theme(state: BoardState) -> BoardState:
    return replace(state, theme=state.theme.flipped())


def set_search_term(state: BoardState, term: str) -> BoardState:
    return replace(state, search_term=term)


# === Store ===


class BoardStore:
    def __init__(
        self,
        state: Optional[BoardState] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._state = state if state is not None else BoardState()
        self._clock = clock or now_ms
        self._card_ids = IdGenerator("card", self._clock)
        self._list_ids = IdGenerator("list", self._clock)
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> BoardState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with each committed board. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, operation: str, transition: Callable[[BoardState], BoardState]) -> BoardState:
        # read, transition, commit and notify run as one step per operation
        with self._lock:
            state = transition(self._state)
            self._state = state
            logger.debug(
                "%s committed (%d lists, %d cards)", operation, len(state.lists), len(state.cards)
            )
            for listener in list(self._listeners):
                try:
                    listener(state)
                except Exception:
                    logger.exception("Board listener %r failed after %s", listener, operation)
            return state

    # === Card operations ===

    def set_card_list(self, card_id: str, new_list_id: str) -> BoardState:
        return self._apply("set_card_list", lambda s: set_card_list(s, card_id, new_list_id))

    def add_card(self, list_id: str, title: str, description: str) -> BoardState:
        def transition(state: BoardState) -> BoardState:
            card = Card(
                id=self._card_ids.next({c.id for c in state.cards}),
                list_id=list_id,
                title=title,
                description=description,
                created_at=self._clock(),
            )
            return add_card(state, card)

        return self._apply("add_card", transition)

    def update_card(self, card_id: str, new_title: str, new_description: str) -> BoardState:
        return self._apply(
            "update_card", lambda s: update_card(s, card_id, new_title, new_description)
        )

    def delete_card(self, card_id: str) -> BoardState:
        return self._apply("delete_card", lambda s: delete_card(s, card_id))

    def reorder_cards(
        self, source_list_id: Optional[str], card_id: str, target_list_id: str
    ) -> BoardState:
        # source_list_id is accepted for drop handlers that know it; the card's id is enough
        return self.set_card_list(card_id, target_list_id)

    # === List operations ===

    def add_list(self, title: str) -> BoardState:
        def transition(state: BoardState) -> BoardState:
            list_id = self._list_ids.next({l.id for l in state.lists})
            return add_list(state, list_id, title)

        return self._apply("add_list", transition)

    # === Board settings ===

    def toggle_theme(self) -> BoardState:
        return self._apply("toggle_theme", toggle_theme)

    def set_search_term(self, term: str) -> BoardState:
        return self._apply("set_search_term", lambda s: set_search_term(s, term))

    # === Lookups ===

    def get_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self._state.cards if c.id == card_id), None)

    def get_list(self, list_id: str) -> Optional[BoardList]:
        return next((l for l in self._state.lists if l.id == list_id), None)


def create_store(
    storage: KeyValueStorage,
    key: str = STORAGE_KEY,
    signal: DisplayModeSignal = display_mode,
) -> BoardStore:
    """Load the saved board (or the seed) and wire persistence and theme broadcast."""
    persistence = BoardPersistence(storage, key)
    store = BoardStore(persistence.load())
    store.subscribe(persistence)
    store.subscribe(signal.broadcast)
    return store
