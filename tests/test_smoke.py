"""Minimal smoke tests to ensure modules import and core managers work."""

import screenmatch
from screenmatch.core.config import ConfigManager
from screenmatch.core.registry import TemplateRegistry


def test_package_exports():
    assert screenmatch.__version__
    for name in ("VisionEngine", "FeatureEngine", "TemplateRegistry", "MatchResult"):
        assert hasattr(screenmatch, name)


def test_config_defaults_and_save(tmp_path, monkeypatch):
    for key in ("LOG_LEVEL", "STRATEGY", "SM_LOG_LEVEL", "SM_STRATEGY"):
        monkeypatch.delenv(key, raising=False)
    cfg_path = tmp_path / "config.ini"
    cfg = ConfigManager(str(cfg_path))
    # Defaults present
    assert cfg.get("log_level") == "INFO"
    assert cfg.get("strategy") == "correlation"
    assert cfg.get_int("capture_monitor") == 1
    # Modify and save
    cfg.config["DEFAULT"]["log_level"] = "DEBUG"
    cfg.save()
    # Reload and verify persistence
    cfg2 = ConfigManager(str(cfg_path))
    assert cfg2.get("log_level") == "DEBUG"


def test_config_env_overrides_file(tmp_path, monkeypatch):
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    monkeypatch.setenv("SM_STRATEGY", "feature")
    assert cfg.get("strategy") == "feature"
    monkeypatch.setenv("SM_STRATEGY", "")
    monkeypatch.delenv("STRATEGY", raising=False)
    assert cfg.get("strategy") == "correlation"
    assert cfg.get("missing_key", "fallback") == "fallback"


def test_config_get_int_fallback(tmp_path, monkeypatch):
    monkeypatch.delenv("SM_CAPTURE_MONITOR", raising=False)
    monkeypatch.delenv("CAPTURE_MONITOR", raising=False)
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    cfg.config["DEFAULT"]["capture_monitor"] = "two"
    assert cfg.get_int("capture_monitor", 1) == 1


def test_registry_basic_ops():
    reg = TemplateRegistry()
    assert reg.get(1) is None
    reg.add(1, [[1, 2], [3, 4]])  # not an ndarray: ignored
    assert len(reg) == 0
