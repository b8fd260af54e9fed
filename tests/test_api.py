import json

from taskboard.persistence import STORAGE_KEY


def test_get_board_returns_seed(client):
    body = client.get("/v1/board").json()
    assert [l["id"] for l in body["lists"]] == ["list-1", "list-2", "list-3"]
    assert len(body["cards"]) == 4
    assert body["theme"] == "light"
    assert body["searchTerm"] == ""


def test_create_list(client, storage):
    resp = client.post("/v1/lists", json={"title": "  Backlog "})
    assert resp.status_code == 201
    assert resp.json()["title"] == "Backlog"
    assert resp.json()["order"] == 3
    assert resp.json()["colorVar"] == "--color-list-yellow"
    saved = json.loads(storage.get(STORAGE_KEY))
    assert saved["lists"][-1]["id"] == resp.json()["id"]


def test_blank_titles_are_rejected(client):
    assert client.post("/v1/lists", json={"title": ""}).status_code == 422
    assert client.post("/v1/lists", json={"title": "   "}).status_code == 422
    assert client.post("/v1/lists/list-1/cards", json={"title": " "}).status_code == 422
    assert len(client.get("/v1/board").json()["lists"]) == 3


def test_create_card(client):
    resp = client.post("/v1/lists/list-2/cards", json={"title": "Write docs"})
    assert resp.status_code == 201
    card = resp.json()
    assert card["listId"] == "list-2"
    assert card["description"] == "Add a description here."
    assert card["createdLabel"]


def test_create_card_in_unknown_list(client):
    resp = client.post("/v1/lists/nope/cards", json={"title": "x"})
    assert resp.status_code == 404


def test_update_card(client):
    resp = client.patch("/v1/cards/card-1", json={"title": "Renamed", "description": "new"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Renamed"
    assert resp.json()["listId"] == "list-1"
    assert client.patch("/v1/cards/missing", json={"title": "x"}).status_code == 404


def test_update_card_title_only_keeps_description(client):
    before = client.get("/v1/board").json()["cards"][0]
    resp = client.patch("/v1/cards/card-1", json={"title": "  Renamed  "})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Renamed"
    assert resp.json()["description"] == before["description"]


def test_update_card_description_only_keeps_title(client):
    before = client.get("/v1/board").json()["cards"][0]
    resp = client.patch("/v1/cards/card-1", json={"description": "only this"})
    assert resp.status_code == 200
    assert resp.json()["title"] == before["title"]
    assert resp.json()["description"] == "only this"


def test_update_card_rejects_blank_title(client):
    before = client.get("/v1/board").json()["cards"][0]
    assert client.patch("/v1/cards/card-1", json={"title": "   "}).status_code == 422
    assert client.patch("/v1/cards/card-1", json={"title": ""}).status_code == 422
    assert client.get("/v1/board").json()["cards"][0] == before


def test_move_card(client):
    resp = client.post("/v1/cards/card-3:move", json={"toListId": "list-3"})
    assert resp.status_code == 200
    assert resp.json()["listId"] == "list-3"
    assert client.post("/v1/cards/missing:move", json={"toListId": "list-3"}).status_code == 404
    assert client.post("/v1/cards/card-3:move", json={"toListId": "nope"}).status_code == 409


def test_delete_card_is_idempotent(client):
    assert client.delete("/v1/cards/card-2").status_code == 204
    assert client.delete("/v1/cards/card-2").status_code == 204
    ids = [c["id"] for c in client.get("/v1/board").json()["cards"]]
    assert "card-2" not in ids


def test_theme_and_search(client, signal):
    assert client.post("/v1/theme:toggle").json()["theme"] == "dark"
    assert signal.theme.value == "dark"
    body = client.put("/v1/search", json={"term": "PERSIST"}).json()
    assert body["searchTerm"] == "PERSIST"
    view = client.get("/v1/board/view").json()
    counts = {col["column"]["id"]: col["count"] for col in view["columns"]}
    assert counts == {"list-1": 1, "list-2": 0, "list-3": 0}


def test_board_view_orders_cards_newest_first(client):
    view = client.get("/v1/board/view").json()
    first_column = view["columns"][0]
    assert first_column["column"]["id"] == "list-1"
    assert [c["id"] for c in first_column["cards"]] == ["card-2", "card-1"]
