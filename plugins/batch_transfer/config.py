"""
config.py
---------

Settings for batch rename / move.

Supports:
- Default settings
- The "batch_transfer" section of deskmate.json
- Command-line / menu overrides
"""

from shared.batch import DEFAULT_PREFIX, TransferAction
from shared.config import build_settings as shared_build_settings
from shared.path_utils import normalize_path

SECTION = "batch_transfer"

# ------------------------------------------------------------
# Default settings
# ------------------------------------------------------------
DEFAULTS = {
    "INPUT_DIRECTORY": "",
    "OUTPUT_DIRECTORY": "",
    # Comma separated, e.g. "txt,jpg,.PNG"
    "EXTENSIONS": "",
    "ACTION": "Rename",  # "Rename" (copy) or "Move"
    "NAMING_PREFIX": DEFAULT_PREFIX,
    "DRY_RUN": False,

    # Logging
    "LOG_FILE": "",
    "LOG_TO_CONSOLE": False,
    "LOG_FORMAT": "text",  # "text" or "jsonl"
}


def _normalize(settings):
    for key in ("INPUT_DIRECTORY", "OUTPUT_DIRECTORY"):
        path = str(settings.get(key) or "").strip()
        settings[key] = normalize_path(path) if path else ""
    extensions = settings.get("EXTENSIONS") or ""
    if isinstance(extensions, (list, tuple)):
        # deskmate.json may hold ["txt", "jpg"]
        extensions = ",".join(str(ext) for ext in extensions)
    settings["EXTENSIONS"] = str(extensions).strip()

    if isinstance(settings.get("ACTION"), TransferAction):
        settings["ACTION"] = settings["ACTION"].label
    settings["ACTION"] = str(settings.get("ACTION") or DEFAULTS["ACTION"]).strip()

    # A blank prefix falls back to the default.
    settings["NAMING_PREFIX"] = str(settings.get("NAMING_PREFIX") or "").strip() or DEFAULT_PREFIX
    settings["DRY_RUN"] = bool(settings.get("DRY_RUN"))
    return settings


def build_settings(config_dir=None, overrides=None):
    return shared_build_settings(
        SECTION,
        defaults=DEFAULTS,
        overrides=overrides or {},
        config_dir=config_dir,
        normalize_fn=_normalize,
    )
