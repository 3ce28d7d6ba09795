import pytest

from ssx.server.session.errors import CorruptPersistedState
from ssx.server.session.persistence import SESSIONS_KEY, SessionPersistence, SQLiteKeyValueStore


def test_db_path_gets_db_suffix(tmp_path):
    kv = SQLiteKeyValueStore(str(tmp_path / "device_store"))
    assert kv.db_path.endswith("device_store.db")


def test_put_replaces_value(kv):
    assert kv.get("missing") is None

    kv.put("key", b"first")
    kv.put("key", b"second")

    assert kv.get("key") == b"second"


def test_load_empty_store_returns_no_sessions(persistence):
    assert persistence.load() == []


def test_save_then_load_in_a_new_instance(tmp_path, store):
    store.append_message(store.state.active_id, "user", "hello")

    reopened = SQLiteKeyValueStore(str(tmp_path / "ssx_store.db"))
    sessions = SessionPersistence(reopened).load()

    assert len(sessions) == 1
    assert sessions[0].id == store.state.active_id
    assert [message.content for message in sessions[0].messages] == ["hello"]
    assert sessions[0].title == "hello"


@pytest.mark.parametrize(
    "raw",
    [
        b"{not json",
        b'{"id": "sess_1"}',
        b'[{"id": "sess_1", "title": "x", "created_at": "2025-01-01T00:00:00Z",'
        b' "messages": [{"id": "m", "role": "system", "content": "c", "timestamp": "2025-01-01T00:00:00Z"}]}]',
        b'[{"id": "sess_1", "title": "x", "created_at": "2025-01-01T00:00:00", "messages": []}]',
    ],
)
def test_malformed_value_raises_corrupt_state(kv, persistence, raw):
    kv.put(SESSIONS_KEY, raw)

    with pytest.raises(CorruptPersistedState):
        persistence.load()


def test_init_moves_damaged_database_aside(tmp_path):
    db_path = tmp_path / "damaged.db"
    db_path.write_bytes(b"this is not a sqlite database " * 64)

    kv = SQLiteKeyValueStore(str(db_path))
    kv.init()

    assert kv.get(SESSIONS_KEY) is None
    assert (tmp_path / "damaged.corrupt.db").exists()

    kv.put(SESSIONS_KEY, b"[]")
    assert kv.get(SESSIONS_KEY) == b"[]"
