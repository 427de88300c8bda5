"""
Shared fixtures for the itemstore test suite.
"""

import datetime as dt
import itertools

import pytest

from itemstore.config import Settings, reset_settings
from itemstore.errors import BackendError
from itemstore.persistence.store import ItemRepository


class FakeRepository(ItemRepository):
    """In-memory repository with switchable failures."""

    def __init__(self):
        self.committed = []
        self.pending_inserts = []
        self.pending_deletes = set()
        self.fail_fetch = False
        self.fail_save = False
        self.fail_delete = False
        self.fetch_calls = 0
        self.save_calls = 0
        self.closed = False

    def insert(self, item):
        self.pending_inserts.append(item)

    def delete(self, item_id):
        if self.fail_delete:
            raise BackendError("delete", RuntimeError("disk gone"))
        self.pending_deletes.add(item_id)

    def save(self):
        self.save_calls += 1
        if self.fail_save:
            raise BackendError("save", RuntimeError("disk full"))
        self.committed.extend(self.pending_inserts)
        self.committed = [i for i in self.committed if i.id not in self.pending_deletes]
        self.pending_inserts = []
        self.pending_deletes = set()

    def fetch_sorted(self):
        self.fetch_calls += 1
        if self.fail_fetch:
            raise BackendError("fetch", RuntimeError("fetch exploded"))
        visible = list(self.committed)
        if self.autosave_enabled:
            visible.extend(self.pending_inserts)
            visible = [i for i in visible if i.id not in self.pending_deletes]
        # stable sort keeps insertion order reversed for equal timestamps
        return sorted(reversed(visible), key=lambda i: i.timestamp, reverse=True)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from a developer's .env and the real database."""
    for name in list(Settings.model_fields):
        monkeypatch.delenv("ITEMSTORE_" + name.upper(), raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def fake_opener(fake_repo):
    """Opener that hands out ``fake_repo`` and records its calls."""
    calls = []

    def opener(**kwargs):
        calls.append(kwargs)
        return fake_repo

    opener.calls = calls
    return opener


@pytest.fixture
def failing_opener():
    calls = []

    def opener(**kwargs):
        calls.append(kwargs)
        raise BackendError("open", OSError("permission denied"))

    opener.calls = calls
    return opener


@pytest.fixture
def clock():
    """Strictly increasing UTC timestamps, one second apart."""
    start = dt.datetime(2024, 1, 1, 12, 0, 0, tzinfo=dt.timezone.utc)
    ticks = itertools.count()
    return lambda: start + dt.timedelta(seconds=next(ticks))
