# shared fixtures for backend api tests
# provides a seeded mock store with a pinned clock and ids, plus httpx test clients

import random
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from mediview.main import app
from mediview.services.ids import SequentialIdGenerator
from mediview.services.store import MockStore, get_store


# pinned clock and seed; every generated value is reproducible
NOW = datetime(2024, 9, 1, 12, 0, tzinfo=timezone.utc)
SEED = 42

# roster ids are always sequential
ANA_ID = "pat_1"
BRUNO_ID = "pat_2"
CARLA_ID = "pat_3"
EDUARDA_ID = "pat_5"
UNKNOWN_ID = "pat_999"

ROSTER_NAMES = [
    "Ana Silva",
    "Bruno Costa",
    "Carla Dias",
    "Daniel Martins",
    "Eduarda Ferreira",
    "Fábio Gomes",
    "Gabriela Lima",
    "Hugo Mendes",
]


def make_store(seed=SEED) -> MockStore:
    store = MockStore(seed=seed, ids=SequentialIdGenerator(), now=NOW)
    store.populate()
    return store


@pytest.fixture
def store():
    """fresh seeded store for each test"""
    return make_store()


@pytest.fixture
def rng():
    return random.Random(SEED)


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def profile(store):
    """fully generated profile for the first roster patient"""
    return store.require_profile(ANA_ID)


@pytest_asyncio.fixture
async def client(store):
    """httpx async test client with the store dependency overridden"""

    async def override_get_store():
        return store

    app.dependency_overrides[get_store] = override_get_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
