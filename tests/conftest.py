import asyncio

import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.deps import get_explainer, get_repository
from backend.import_schemes import seed_catalog
from data.memory_repository_impl import InMemoryComplianceRepository


@pytest.fixture
def repo():
    return InMemoryComplianceRepository()


@pytest.fixture
def seeded_repo(repo):
    asyncio.run(seed_catalog(repo))
    return repo


@pytest.fixture
def client(seeded_repo):
    # no ``with`` block: skip the lifespan so the real database is never touched
    app.dependency_overrides[get_repository] = lambda: seeded_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


class FakeExplainer:
    def __init__(self, reply="• What it means: ...", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def explain(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def fake_explainer(client):
    explainer = FakeExplainer()
    app.dependency_overrides[get_explainer] = lambda: explainer
    return explainer
