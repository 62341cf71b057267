"""
config.py
---------

Settings for the antivirus check.

Supports:
- Default settings
- The "antivirus" section of deskmate.json
- Command-line / menu overrides
"""

from shared.config import build_settings as shared_build_settings

from .commands import default_os_name

SECTION = "antivirus"

# ------------------------------------------------------------
# Default settings
# ------------------------------------------------------------
DEFAULTS = {
    # Empty = derived from the running platform
    "OS_NAME": "",
    "SKIP_PRIVILEGE_CHECK": False,

    # Seconds; 0 waits for the commands indefinitely
    "PROCESS_TIMEOUT": 0,

    # Logging
    "LOG_FILE": "",
    "LOG_TO_CONSOLE": False,
    "LOG_FORMAT": "text",  # "text" or "jsonl"
}


def _normalize(settings):
    settings["OS_NAME"] = str(settings.get("OS_NAME") or "").strip() or default_os_name()
    try:
        timeout = float(settings.get("PROCESS_TIMEOUT") or 0)
    except (TypeError, ValueError):
        timeout = 0
    settings["PROCESS_TIMEOUT"] = max(0, timeout)
    return settings


def build_settings(config_dir=None, overrides=None):
    return shared_build_settings(
        SECTION,
        defaults=DEFAULTS,
        overrides=overrides or {},
        config_dir=config_dir,
        normalize_fn=_normalize,
    )
