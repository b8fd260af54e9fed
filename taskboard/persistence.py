"""Load and save the whole board under a single storage key.

Reading never fails: anything unreadable falls back to the seed board.
Writing is best effort: a failed write is logged and the in-memory board
stays as it is.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from .models import BoardDoc, BoardState
from .seed import seed_state
from .storage import KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

STORAGE_KEY = "kanban-board-state"


def dump_state(state: BoardState) -> str:
    return BoardDoc.from_state(state).model_dump_json()


def parse_state(raw: str) -> BoardState:
    """Parse a stored document. Raises ``ValidationError`` if it is not one."""
    return BoardDoc.model_validate_json(raw).to_state()


def load_state(storage: KeyValueStorage, key: str = STORAGE_KEY) -> BoardState:
    try:
        raw = storage.get(key)
    except StorageError as exc:
        logger.warning("Could not read saved board %r, using seed board: %s", key, exc)
        return seed_state()
    if not raw:
        logger.debug("No saved board under %r, using seed board", key)
        return seed_state()
    try:
        state = parse_state(raw)
    except ValidationError as exc:
        logger.warning(
            "Saved board %r is unreadable, using seed board (%d errors)", key, exc.error_count()
        )
        return seed_state()
    logger.info("Loaded board %r: %d lists, %d cards", key, len(state.lists), len(state.cards))
    return state


def save_state(storage: KeyValueStorage, state: BoardState, key: str = STORAGE_KEY) -> bool:
    try:
        storage.set(key, dump_state(state))
    except StorageError as exc:
        logger.warning("Could not save board %r, keeping changes in memory only: %s", key, exc)
        return False
    return True


class BoardPersistence:
    """Store subscriber that writes every committed snapshot."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> BoardState:
        return load_state(self.storage, self.key)

    def __call__(self, state: BoardState) -> None:
        save_state(self.storage, state, self.key)
