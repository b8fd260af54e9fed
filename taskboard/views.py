"""Read-side projections of a board. None of these modify the board."""
from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import BoardList, BoardState, Card


def matches(card: Card, term: str) -> bool:
    needle = term.lower()
    return needle in card.title.lower() or needle in card.description.lower()


def filter_cards(cards: Iterable[Card], term: str) -> List[Card]:
    """Cards whose title or description contains ``term``, ignoring case."""
    if not term:
        return list(cards)
    return [c for c in cards if matches(c, term)]


def sorted_lists(lists: Iterable[BoardList]) -> List[BoardList]:
    # sorted() is stable, so equal orders keep insertion order
    return sorted(lists, key=lambda l: l.order)


def cards_for_list(cards: Iterable[Card], list_id: str) -> List[Card]:
    return sorted(
        (c for c in cards if c.list_id == list_id), key=lambda c: c.created_at, reverse=True
    )


def board_view(state: BoardState) -> List[Tuple[BoardList, List[Card]]]:
    """Columns to display: lists in order, each with its filtered cards newest first.

    Cards pointing at a list that no longer exists are not shown anywhere.
    """
    visible = filter_cards(state.cards, state.search_term)
    return [(l, cards_for_list(visible, l.id)) for l in sorted_lists(state.lists)]
