"""
config.py
---------

Settings for the cache cleaner.

Supports:
- Default settings
- The "cache_cleaner" section of deskmate.json
- Command-line / menu overrides
"""

from shared.config import build_settings as shared_build_settings
from shared.path_utils import normalize_path

SECTION = "cache_cleaner"

# ------------------------------------------------------------
# Default settings
# ------------------------------------------------------------
DEFAULTS = {
    "BROWSER": "Firefox",
    # Explicit folder to empty instead of the browser's standard location
    "CACHE_PATH": "",

    # Logging
    "LOG_FILE": "",
    "LOG_TO_CONSOLE": False,
    "LOG_FORMAT": "text",  # "text" or "jsonl"
}


def _normalize(settings):
    settings["BROWSER"] = str(settings.get("BROWSER") or DEFAULTS["BROWSER"]).strip()
    path = str(settings.get("CACHE_PATH") or "").strip()
    settings["CACHE_PATH"] = normalize_path(path) if path else ""
    return settings


def build_settings(config_dir=None, overrides=None):
    return shared_build_settings(
        SECTION,
        defaults=DEFAULTS,
        overrides=overrides or {},
        config_dir=config_dir,
        normalize_fn=_normalize,
    )
