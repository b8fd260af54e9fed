"""Fallback board used when nothing readable has been saved yet."""
from typing import Optional

from .models import BoardList, BoardState, Card, Theme
from .utils import now_ms

DEFAULT_LIST_COLOR = "--color-list-yellow"
DEFAULT_CARD_DESCRIPTION = "Add a description here."

SEED_LISTS = (
    BoardList(id="list-1", title="To Do", color_var="--color-list-red", order=0),
    BoardList(id="list-2", title="In Progress", color_var="--color-list-blue", order=1),
    BoardList(id="list-3", title="Done", color_var="--color-list-green", order=2),
)

# (id, list id, title, description, age in milliseconds)
_SEED_CARDS = (
    (
        "card-1",
        "list-1",
        "Sketch the board architecture",
        "Lay out the board and its main pieces: lists, cards and the edit dialog.",
        3_600_000,
    ),
    (
        "card-2",
        "list-1",
        "Wire up persistence",
        "Save the board on every change and load it back on start.",
        1_800_000,
    ),
    (
        "card-3",
        "list-2",
        "Build drag and drop",
        "Let cards be dragged from one column and dropped on another.",
        600_000,
    ),
    (
        "card-4",
        "list-3",
        "Add light and dark themes",
        "Offer a theme switch and apply it across the board.",
        7_200_000,
    ),
)


def seed_state(now: Optional[int] = None) -> BoardState:
    now = now_ms() if now is None else now
    cards = tuple(
        Card(id=cid, list_id=lid, title=title, description=desc, created_at=now - age)
        for cid, lid, title, desc, age in _SEED_CARDS
    )
    return BoardState(lists=SEED_LISTS, cards=cards, theme=Theme.LIGHT, search_term="")
