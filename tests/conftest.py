"""
Pytest fixtures for Hangman tests.
"""

import pytest

from hangman.core.categories import Category
from hangman.core.session import GameSession


@pytest.fixture(autouse=True)
def offline_env(monkeypatch):
    """Keep every test offline regardless of the developer's environment."""
    monkeypatch.setenv("OFFLINE_MODE", "true")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


def one_word(word: str, key: str = "test") -> Category:
    return Category(key=key, label=key.title(), words=(word,))


@pytest.fixture
def cat_session() -> GameSession:
    """Session whose only candidate word is CAT."""
    return GameSession(one_word("CAT"))


@pytest.fixture
def dog_session() -> GameSession:
    """Session whose only candidate word is DOG."""
    return GameSession(one_word("DOG"))


@pytest.fixture
def events():
    """Listener that records every emitted event."""
    seen = []

    def listener(event):
        seen.append(event)

    listener.seen = seen
    return listener
