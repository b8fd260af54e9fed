import pytest
from fastapi.testclient import TestClient

from taskboard.main import app, get_store
from taskboard.seed import seed_state
from taskboard.signals import DisplayModeSignal
from taskboard.storage import MemoryStorage
from taskboard.store import BoardStore, create_store


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def signal():
    return DisplayModeSignal()


@pytest.fixture
def store(storage, signal):
    return create_store(storage, signal=signal)


@pytest.fixture
def seeded():
    return BoardStore(seed_state(now=10_000_000))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
