import sys
import os

import pytest

# project root = repo root containing backend/
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
BACKEND_ROOT = os.path.join(PROJECT_ROOT, "backend")

# Add PROJECT_ROOT and BACKEND_ROOT to sys.path
for path in [PROJECT_ROOT, BACKEND_ROOT]:
    if path not in sys.path:
        sys.path.insert(0, path)


class FakeLLMClient:
    """Records prompts and returns a canned answer."""

    def __init__(self, answer: str = "", error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def store():
    from backend.app.services.store import MemoryDatasetStore
    return MemoryDatasetStore()


@pytest.fixture
def llm():
    return FakeLLMClient(
        answer="1. Sales grow with price.\n2. Use a scatter plot of price vs sales.\n3. Check missing ages."
    )


@pytest.fixture
def client(store, llm):
    from fastapi.testclient import TestClient
    from backend.app.main import app
    from backend.app.core.deps import get_llm_client, get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_llm_client] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_llm():
    return FakeLLMClient
