import pytest

from ssx.server.assistant.controller import ConversationController
from ssx.server.session.persistence import SessionPersistence, SQLiteKeyValueStore
from ssx.server.session.store import SessionStore


@pytest.fixture
def kv(tmp_path):
    store = SQLiteKeyValueStore(str(tmp_path / "ssx_store.db"))
    store.init()
    return store


@pytest.fixture
def persistence(kv):
    return SessionPersistence(kv)


@pytest.fixture
def store(persistence):
    session_store = SessionStore(persistence)
    session_store.initialize()
    return session_store


@pytest.fixture
def controller(store):
    return ConversationController(store, reply_delay=0)
