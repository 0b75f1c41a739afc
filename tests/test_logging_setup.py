import logging
import os
import time

import pytest

from screenmatch.core.config import ConfigManager
from screenmatch.core.logging_setup import _level_from_str, prune_old_sessions, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


def test_level_from_str():
    assert _level_from_str("debug") == logging.DEBUG
    assert _level_from_str("warn") == logging.WARNING
    assert _level_from_str(None) == logging.INFO
    assert _level_from_str("bogus") == logging.INFO


def test_setup_logging_creates_session(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.delenv("SM_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    session = setup_logging(cfg, level="DEBUG")
    assert session.parent == tmp_path / "logs"
    assert (session / "session_info.txt").read_text(encoding="utf-8").startswith("SCREENMATCH")
    assert logging.getLogger().level == logging.DEBUG
    logging.getLogger("screenmatch.test").info("hello")
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello" in (session / "screenmatch.log").read_text(encoding="utf-8")


def test_prune_keeps_most_recent(tmp_path):
    now = time.time()
    for i in range(5):
        d = tmp_path / f"session-2024010{i}_000000"
        d.mkdir()
        os.utime(d, (now - 100 + i, now - 100 + i))
    (tmp_path / "other").mkdir()
    prune_old_sessions(tmp_path, keep=3)
    left = sorted(p.name for p in tmp_path.iterdir())
    assert left == ["other", "session-20240102_000000", "session-20240103_000000", "session-20240104_000000"]
