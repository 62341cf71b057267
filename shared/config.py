"""
shared.config
-------------

Settings resolution shared by all tools.

Precedence: tool defaults < user config file < command-line overrides.

The user config file (``deskmate.json``) is optional and only ever read;
DeskMate keeps no state between runs. Each tool reads its own section:

    {
        "batch_transfer": {"NAMING_PREFIX": "Doc_"},
        "antivirus": {"PROCESS_TIMEOUT": 3600}
    }
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

CONFIG_NAME = "deskmate.json"


def get_config_dir() -> Path:
    """Return the default config directory (~/.config/deskmate)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "deskmate"


def get_log_path(config_dir: Optional[Path] = None) -> Path:
    """Default background log file."""
    base_dir = Path(config_dir) if config_dir else get_config_dir()
    return base_dir / "deskmate.log"


def load_persistent_config(
    config_name: str = CONFIG_NAME, config_dir: Optional[Path] = None
) -> Dict[str, Any]:
    """Load a JSON config file; missing or malformed files yield {}."""

    base_dir = Path(config_dir) if config_dir else get_config_dir()
    config_path = base_dir / config_name

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, UnicodeDecodeError, ValueError, TypeError):
        return {}


def merge_settings(
    *,
    defaults: Optional[Dict[str, Any]] = None,
    persistent: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge defaults + persistent + overrides (overrides win, None is ignored)."""

    merged: Dict[str, Any] = {}

    if defaults:
        merged.update(defaults)

    if persistent:
        merged.update(persistent)

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value

    return merged


def build_settings(
    section: str,
    *,
    defaults: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    config_name: str = CONFIG_NAME,
    config_dir: Optional[Path] = None,
    normalize_fn: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Build the settings of one tool.

    Only keys known to ``defaults`` are taken from the tool's section of
    the config file, so a typo in the file cannot inject unknown settings.
    """
    stored = load_persistent_config(config_name=config_name, config_dir=config_dir)
    section_data = stored.get(section)
    if not isinstance(section_data, dict):
        section_data = {}
    if defaults is not None:
        section_data = {k: v for k, v in section_data.items() if k in defaults}

    merged = merge_settings(
        defaults=defaults,
        persistent=section_data,
        overrides=overrides,
    )

    if callable(normalize_fn):
        return normalize_fn(merged)

    return merged
