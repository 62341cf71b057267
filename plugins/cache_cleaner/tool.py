"""
tool.py
-------

Entry point for the cache cleaner.

Provides:
- CLI mode (``deskmate clean-cache firefox``)
- Menu integration (form_config)
- Settings loading
- Logging setup
- Background deletion with progress
"""

import argparse
import os

from shared import (
    CliReporter,
    get_log_path,
    logger_from_settings,
    run_with_progress,
    scan_and_delete,
)
from .browsers import BROWSERS, canonical_browser, expected_cache_path
from .config import build_settings

TOOL_INFO = {
    "id": "cache_cleaner",
    "name": "Clean Cache",
    "description": "Delete the cached files of Firefox, Chrome or Edge.",
    "order": 1,
}

# ------------------------------------------------------------
# Menu form (questions asked by the interactive front-end)
# ------------------------------------------------------------
form_config = {
    "title": "Select Browser",
    "fields": [
        {
            "id": "BROWSER",
            "name": "Select the browser cache to clean:",
            "type": "select",
            "options": list(BROWSERS),
            "default": "Firefox",
            "required": True,
        },
    ],
}


def locate_cache(settings):
    """
    Return (cache_dir, None) or (None, error_message).
    """
    browser = canonical_browser(settings["BROWSER"])

    if settings.get("CACHE_PATH"):
        path = os.path.abspath(settings["CACHE_PATH"])
    else:
        path = expected_cache_path(browser)
        if path is None:
            return None, f"{browser} cache folder not found!"

    if not os.path.isdir(path):
        return None, f"Cache folder not found:\n{path}"
    return path, None


def clean_cache(browser, cache_dir, reporter, logger):
    """Empty ``cache_dir`` on a worker thread; returns an exit status."""
    logger.log(f"Cleaning {browser} cache: {cache_dir}")

    worker = run_with_progress(
        lambda w: scan_and_delete(cache_dir, on_progress=w.emit_progress, logger=logger),
        on_progress=reporter.progress,
        on_error=reporter.error,
        logger=logger,
    )
    logger.flush()

    if worker.error is not None:
        return 1

    reporter.done(f"Cache cleaned for {browser}!")
    return 0


# ------------------------------------------------------------
# Main entry point
# ------------------------------------------------------------
def run(overrides=None, config_dir=None, reporter=None):
    """
    Main entry point used by the launcher and the menu.

    Parameters:
        overrides: dict of settings overrides (BROWSER, CACHE_PATH, ...)
        config_dir: directory holding deskmate.json and the log file
        reporter: progress renderer (defaults to plain terminal output)

    Returns:
        0 on success, 1 on failure
    """
    settings = build_settings(config_dir=config_dir, overrides=overrides)
    reporter = reporter or CliReporter(title=f"Cleaning Cache - {settings['BROWSER']}")

    try:
        browser = canonical_browser(settings["BROWSER"])
        cache_dir, error = locate_cache(settings)
    except ValueError as e:
        reporter.error(str(e))
        return 1

    if error:
        reporter.error(error)
        return 1

    logger = logger_from_settings(settings, get_log_path(config_dir))
    return clean_cache(browser, cache_dir, reporter, logger)


# ------------------------------------------------------------
# Standardized entry point for launcher + direct execution
# ------------------------------------------------------------
def register_cli(subparsers):
    """
    Register this tool with the launcher CLI.
    """
    parser = subparsers.add_parser("clean-cache", help="Clean a browser cache folder")
    _add_arguments(parser)
    parser.set_defaults(func=_run_from_args)


def _add_arguments(parser):
    parser.add_argument(
        "browser",
        nargs="?",
        type=str.title,
        choices=list(BROWSERS),
        help="Browser whose cache is cleaned (default: Firefox)",
    )
    parser.add_argument("--path", dest="CACHE_PATH", help="Clean this folder instead of the standard location")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask before emptying a --path folder")
    parser.add_argument("--config-dir", help="Config directory")
    parser.add_argument("--log-file", dest="LOG_FILE", help="Log file path")
    parser.add_argument("--log-console", dest="LOG_TO_CONSOLE", action="store_true", default=None, help="Mirror log lines to the console")
    parser.add_argument("--json", dest="LOG_FORMAT", action="store_const", const="jsonl", help="JSON log output")


def _ask_confirmation(cache_dir):
    print(f"Delete every file under:\n{cache_dir}\nProceed?")
    try:
        answer = input("[y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _run_from_args(args):
    overrides = {"BROWSER": args.browser}
    for key in ("CACHE_PATH", "LOG_FILE", "LOG_TO_CONSOLE", "LOG_FORMAT"):
        overrides[key] = getattr(args, key, None)

    # Only an explicit --path needs the user's go-ahead.
    if args.CACHE_PATH and not args.yes:
        settings = build_settings(config_dir=args.config_dir, overrides=overrides)
        if os.path.isdir(settings["CACHE_PATH"]):
            if not _ask_confirmation(os.path.abspath(settings["CACHE_PATH"])):
                print("Cancelled.")
                return 1

    return run(overrides=overrides, config_dir=args.config_dir)


def main():
    """
    Standard entry point so the launcher can call this tool.
    """
    parser = argparse.ArgumentParser(description="DeskMate cache cleaner")
    _add_arguments(parser)
    args = parser.parse_args()
    return _run_from_args(args)


if __name__ == "__main__":
    raise SystemExit(main())
