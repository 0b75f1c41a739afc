"""core.config
Configuration core: load/save helpers for config.ini.

This module provides a tiny ConfigManager used by the engine, the CLI and the
logging setup to read and persist simple key/value settings. It purposely
keeps a small API: ConfigManager.load(), get(key, fallback), get_int(),
and save().
"""

import os
from configparser import ConfigParser
from pathlib import Path
from typing import Optional


DEFAULTS = {
    "log_level": "INFO",
    "strategy": "correlation",
    "capture_monitor": "1",
    # Match passes slower than this are logged as warnings by the engine
    "slow_match_threshold_ms": "250",
}


class ConfigManager:
    """Simple configuration manager backed by an INI file.

    Behaviour:
    - Uses a single DEFAULT section for lookups.
    - Creates the file with sensible defaults if it does not exist.
    - Defaults to a per-user config path (%APPDATA% on Windows,
      XDG_CONFIG_HOME or ~/.config on other systems) unless an explicit
      path is provided.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        if config_path:
            self.config_path = Path(config_path)
        else:
            if os.name == "nt":
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            else:
                base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            self.config_path = base.joinpath("ScreenMatch", "config.ini")

        self.config = ConfigParser()
        self.load()

    def load(self) -> None:
        """Load configuration from disk, filling in defaults when needed."""
        if self.config_path.exists():
            self.config.read(self.config_path)

        missing = [key for key in DEFAULTS if key not in self.config["DEFAULT"]]
        for key in missing:
            self.config["DEFAULT"][key] = DEFAULTS[key]

        # Persist defaults added to an existing file
        if self.config_path.exists() and missing:
            self.save()

    def get(self, key: str, fallback=None):
        """Get a configuration value.

        Precedence is env > config.ini > fallback. Environment candidates are
        SM_<KEY> then <KEY>; empty environment values are ignored.
        """
        for ek in (f"SM_{str(key).upper()}", str(key).upper()):
            val = os.environ.get(ek)
            if val is not None and str(val) != "":
                return val
        return self.config["DEFAULT"].get(key, fallback)

    def get_int(self, key: str, fallback: int = 0) -> int:
        """Integer lookup; unparsable values fall back."""
        try:
            return int(str(self.get(key, fallback)).strip())
        except (TypeError, ValueError):
            return fallback

    def save(self) -> None:
        """Persist current configuration to disk (creates parent directories)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as fh:
            self.config.write(fh)
