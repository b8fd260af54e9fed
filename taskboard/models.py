from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# === Domain objects held by the board store ===


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def flipped(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


@dataclass(frozen=True)
class BoardList:
    id: str
    title: str
    color_var: str
    order: int


@dataclass(frozen=True)
class Card:
    id: str
    list_id: str
    title: str
    description: str
    created_at: int  # epoch milliseconds


@dataclass(frozen=True)
class BoardState:
    lists: tuple[BoardList, ...] = ()
    cards: tuple[Card, ...] = ()
    theme: Theme = Theme.LIGHT
    search_term: str = ""


# === Persisted document ===
# Field names match the stored JSON layout exactly.


class ListDoc(BaseModel):
    id: str
    title: str
    colorVar: str
    order: int


class CardDoc(BaseModel):
    id: str
    listId: str
    title: str
    description: str
    createdAt: int


class BoardDoc(BaseModel):
    lists: list[ListDoc]
    cards: list[CardDoc]
    theme: Theme
    searchTerm: str

    @classmethod
    def from_state(cls, state: BoardState) -> "BoardDoc":
        return cls(
            lists=[
                ListDoc(id=b.id, title=b.title, colorVar=b.color_var, order=b.order)
                for b in state.lists
            ],
            cards=[
                CardDoc(
                    id=c.id,
                    listId=c.list_id,
                    title=c.title,
                    description=c.description,
                    createdAt=c.created_at,
                )
                for c in state.cards
            ],
            theme=state.theme,
            searchTerm=state.search_term,
        )

    def to_state(self) -> BoardState:
        return BoardState(
            lists=tuple(
                BoardList(id=b.id, title=b.title, color_var=b.colorVar, order=b.order)
                for b in self.lists
            ),
            cards=tuple(
                Card(
                    id=c.id,
                    list_id=c.listId,
                    title=c.title,
                    description=c.description,
                    created_at=c.createdAt,
                )
                for c in self.cards
            ),
            theme=self.theme,
            search_term=self.searchTerm,
        )


# === API Schemas ===


class ListCreate(BaseModel):
    title: str = Field(min_length=1, max_length=140)


class CardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=8000)


class CardUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=8000)


class CardMove(BaseModel):
    toListId: str
    fromListId: Optional[str] = None


class SearchUpdate(BaseModel):
    term: str = ""


class ListOut(BaseModel):
    id: str
    title: str
    colorVar: str
    order: int


class CardOut(BaseModel):
    id: str
    listId: str
    title: str
    description: str
    createdAt: int
    createdLabel: str


class ColumnOut(BaseModel):
    column: ListOut
    count: int
    cards: list[CardOut]


class BoardOut(BaseModel):
    lists: list[ListOut]
    cards: list[CardOut]
    theme: Theme
    searchTerm: str


class BoardViewOut(BaseModel):
    columns: list[ColumnOut]
    theme: Theme
    searchTerm: str
