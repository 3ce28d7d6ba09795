from ssx.config.loader import get_bool_env, get_int_env, get_str_env


def test_get_str_env(monkeypatch):
    monkeypatch.delenv("SSX_TEST_STR", raising=False)
    assert get_str_env("SSX_TEST_STR", "fallback") == "fallback"

    monkeypatch.setenv("SSX_TEST_STR", "  ")
    assert get_str_env("SSX_TEST_STR", "fallback") == "fallback"

    monkeypatch.setenv("SSX_TEST_STR", " data/ssx.db ")
    assert get_str_env("SSX_TEST_STR", "fallback") == "data/ssx.db"


def test_get_bool_env(monkeypatch):
    monkeypatch.setenv("SSX_TEST_BOOL", "Yes")
    assert get_bool_env("SSX_TEST_BOOL") is True

    monkeypatch.setenv("SSX_TEST_BOOL", "off")
    assert get_bool_env("SSX_TEST_BOOL", True) is False

    monkeypatch.setenv("SSX_TEST_BOOL", "maybe")
    assert get_bool_env("SSX_TEST_BOOL", True) is True


def test_get_int_env(monkeypatch):
    monkeypatch.setenv("SSX_REPLY_DELAY_MS", "0")
    assert get_int_env("SSX_REPLY_DELAY_MS", 200) == 0

    monkeypatch.setenv("SSX_REPLY_DELAY_MS", "soon")
    assert get_int_env("SSX_REPLY_DELAY_MS", 200) == 200
