from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Response

from .config import Settings
from .models import (
    BoardList,
    BoardOut,
    BoardState,
    BoardViewOut,
    Card,
    CardCreate,
    CardMove,
    CardOut,
    CardUpdate,
    ColumnOut,
    ListCreate,
    ListOut,
    SearchUpdate,
)
from .seed import DEFAULT_CARD_DESCRIPTION
from .storage import open_storage
from .store import BoardStore, create_store
from .utils import format_card_date
from .views import board_view, sorted_lists

VERSION = "1.0.0"

app = FastAPI(title="Taskboard API", version=VERSION)

_store: Optional[BoardStore] = None


def get_store() -> BoardStore:
    """The process-wide board, built from settings on first use."""
    global _store
    if _store is None:
        settings = Settings.from_env()
        _store = create_store(open_storage(settings), settings.storage_key)
    return _store


# === Helpers ===


def list_out(board_list: BoardList) -> ListOut:
    return ListOut(
        id=board_list.id,
        title=board_list.title,
        colorVar=board_list.color_var,
        order=board_list.order,
    )


def card_out(card: Card) -> CardOut:
    return CardOut(
        id=card.id,
        listId=card.list_id,
        title=card.title,
        description=card.description,
        createdAt=card.created_at,
        createdLabel=format_card_date(card.created_at),
    )


def board_out(state: BoardState) -> BoardOut:
    return BoardOut(
        lists=[list_out(l) for l in sorted_lists(state.lists)],
        cards=[card_out(c) for c in state.cards],
        theme=state.theme,
        searchTerm=state.search_term,
    )


def require_card(store: BoardStore, card_id: str) -> Card:
    card = store.get_card(card_id)
    if card is None:
        raise HTTPException(status_code=404, detail="card_not_found")
    return card


def require_list(store: BoardStore, list_id: str, status_code: int = 404) -> BoardList:
    board_list = store.get_list(list_id)
    if board_list is None:
        raise HTTPException(status_code=status_code, detail="list_not_found")
    return board_list


# === Health & metadata ===


@app.get("/v1/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/v1/version")
def version() -> dict:
    return {"version": VERSION}


# === Board ===


@app.get("/v1/board", response_model=BoardOut)
def get_board(store: BoardStore = Depends(get_store)):
    return board_out(store.state)


@app.get("/v1/board/view", response_model=BoardViewOut)
def get_board_view(store: BoardStore = Depends(get_store)):
    state = store.state
    columns = [
        ColumnOut(column=list_out(l), count=len(cards), cards=[card_out(c) for c in cards])
        for l, cards in board_view(state)
    ]
    return BoardViewOut(columns=columns, theme=state.theme, searchTerm=state.search_term)


@app.post("/v1/theme:toggle", response_model=BoardOut)
def toggle_theme(store: BoardStore = Depends(get_store)):
    return board_out(store.toggle_theme())


@app.put("/v1/search", response_model=BoardOut)
def set_search(payload: SearchUpdate, store: BoardStore = Depends(get_store)):
    return board_out(store.set_search_term(payload.term))


# === List endpoints ===


@app.post("/v1/lists", response_model=ListOut, status_code=201)
def create_list(payload: ListCreate, store: BoardStore = Depends(get_store)):
    title = payload.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="title_required")
    state = store.add_list(title)
    return list_out(state.lists[-1])


# === Card endpoints ===


@app.post("/v1/lists/{list_id}/cards", response_model=CardOut, status_code=201)
def create_card(list_id: str, payload: CardCreate, store: BoardStore = Depends(get_store)):
    require_list(store, list_id)
    title = payload.title.strip()
    if not title:
        raise HTTPException(status_code=422, detail="title_required")
    description = payload.description if payload.description is not None else DEFAULT_CARD_DESCRIPTION
    state = store.add_card(list_id, title, description)
    return card_out(state.cards[-1])


@app.patch("/v1/cards/{card_id}", response_model=CardOut)
def update_card(card_id: str, payload: CardUpdate, store: BoardStore = Depends(get_store)):
    card = require_card(store, card_id)
    title = card.title
    if payload.title is not None:
        title = payload.title.strip()
        if not title:
            raise HTTPException(status_code=422, detail="title_required")
    description = payload.description if payload.description is not None else card.description
    store.update_card(card_id, title, description)
    return card_out(require_card(store, card_id))


@app.post("/v1/cards/{card_id}:move", response_model=CardOut)
def move_card(card_id: str, payload: CardMove, store: BoardStore = Depends(get_store)):
    require_card(store, card_id)
    require_list(store, payload.toListId, status_code=409)
    store.reorder_cards(payload.fromListId, card_id, payload.toListId)
    return card_out(require_card(store, card_id))


@app.delete("/v1/cards/{card_id}", status_code=204)
def delete_card(card_id: str, store: BoardStore = Depends(get_store)):
    store.delete_card(card_id)
    return Response(status_code=204)
