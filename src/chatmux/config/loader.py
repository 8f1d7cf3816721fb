from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")
CONFIG_PATH_ENV = "CHATMUX_CONFIG"


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the application config (``$CHATMUX_CONFIG`` or config.toml by default).

    Returns an empty dict when the file is missing so callers can fall back to
    environment variables.
    """
    if path is None:
        path = os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    target = Path(path)
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        return tomllib.load(handle)


__all__ = ["load_raw_config", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
