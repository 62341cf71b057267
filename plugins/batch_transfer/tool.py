"""
tool.py
-------

Entry point for batch rename / move.

Provides:
- CLI mode (``deskmate batch-transfer IN OUT --ext txt,jpg``)
- Menu integration (form_config, confirm_message)
- Dry run listing of the planned names
- Background transfer with progress
"""

import argparse
import os

from shared import (
    CliReporter,
    DEFAULT_PREFIX,
    TransferAction,
    get_log_path,
    logger_from_settings,
    normalize_extensions,
    plan_batch,
    run_with_progress,
    scan_and_transfer,
    scan_matching_files,
)
from .config import DEFAULTS, build_settings

TOOL_INFO = {
    "id": "batch_transfer",
    "name": "Auto Rename/Move Files",
    "description": "Copy or move files by extension into one folder with numbered names.",
    "order": 3,
}

# ------------------------------------------------------------
# Menu form (questions asked by the interactive front-end)
# ------------------------------------------------------------
form_config = {
    "title": "Rename or Move",
    "fields": [
        {
            "id": "ACTION",
            "name": "Do you want to Rename or Move files?",
            "type": "select",
            "options": ["Rename", "Move"],
            "default": "Rename",
            "required": True,
        },
        {
            "id": "INPUT_DIRECTORY",
            "name": "Select Input Folder:",
            "type": "directory",
            "required": True,
        },
        {
            "id": "OUTPUT_DIRECTORY",
            "name": "Select Output Folder:",
            "type": "directory",
            "required": True,
        },
        {
            "id": "EXTENSIONS",
            "name": "Enter file extensions (comma separated, e.g. txt,jpg,png):",
            "type": "text",
            "required": True,
        },
        {
            "id": "NAMING_PREFIX",
            "name": (
                "Enter naming pattern for new files (e.g. File_, Doc_, Image_):\n"
                "Files will be named with this pattern + sequential number (01, 02, ...)"
            ),
            "type": "text",
            "default": DEFAULTS["NAMING_PREFIX"],
        },
    ],
}


def validate_settings(settings):
    """
    Return (action, extensions, None) or (None, None, error_message).
    """
    try:
        action = TransferAction.parse(settings["ACTION"])
    except ValueError as e:
        return None, None, str(e)

    input_dir = settings["INPUT_DIRECTORY"]
    output_dir = settings["OUTPUT_DIRECTORY"]
    if not input_dir or not output_dir:
        return None, None, "Please select both an input and an output folder."
    if not os.path.isdir(input_dir):
        return None, None, f"Input folder not found:\n{input_dir}"
    if os.path.exists(output_dir) and not os.path.isdir(output_dir):
        return None, None, f"Output path is not a folder:\n{output_dir}"

    extensions = normalize_extensions(settings["EXTENSIONS"])
    if not extensions:
        return None, None, "Please enter at least one file extension."

    return action, extensions, None


def confirm_message(settings):
    """Summary shown before anything is written."""
    action = TransferAction.parse(settings["ACTION"])
    extensions = list(normalize_extensions(settings["EXTENSIONS"]))
    prefix = str(settings.get("NAMING_PREFIX") or "").strip() or DEFAULT_PREFIX
    return (
        f"{action.label} files with extensions {extensions}\n"
        f"from:\n{os.path.abspath(settings['INPUT_DIRECTORY'])}\n"
        f"to:\n{os.path.abspath(settings['OUTPUT_DIRECTORY'])}\n"
        f"Naming pattern: {prefix}\n"
        "Proceed?"
    )


def preview_batch(settings, extensions, reporter, logger):
    """List the planned destination names without touching any file."""
    try:
        files = scan_matching_files(settings["INPUT_DIRECTORY"], extensions, logger=logger)
    except OSError as e:
        logger.error(f"Scan failed: {e}")
        logger.flush()
        reporter.error(str(e))
        return 1

    plan = plan_batch(files, settings["OUTPUT_DIRECTORY"], settings["NAMING_PREFIX"])
    for source, target in plan:
        reporter.output(f"{source} -> {target}\n")
    logger.flush()
    reporter.done(f"Dry run: {len(plan)} file(s) would be processed.")
    return 0


def transfer_files(settings, action, extensions, reporter, logger):
    """Scan and transfer on a worker thread; returns an exit status."""
    logger.log(
        f"{action.label}: {settings['INPUT_DIRECTORY']} -> {settings['OUTPUT_DIRECTORY']} "
        f"({', '.join(extensions)}, prefix {settings['NAMING_PREFIX']!r})"
    )

    worker = run_with_progress(
        lambda w: scan_and_transfer(
            settings["INPUT_DIRECTORY"],
            settings["OUTPUT_DIRECTORY"],
            extensions,
            action,
            prefix=settings["NAMING_PREFIX"],
            on_progress=w.emit_progress,
            on_info=w.emit_info,
            logger=logger,
        ),
        on_progress=reporter.progress,
        on_info=reporter.info,
        on_error=reporter.error,
        logger=logger,
    )
    logger.flush()

    if worker.error is not None:
        return 1

    reporter.done(worker.result.summary())
    return 0


# ------------------------------------------------------------
# Main entry point
# ------------------------------------------------------------
def run(overrides=None, config_dir=None, reporter=None):
    """
    Main entry point used by the launcher and the menu.

    Parameters:
        overrides: dict of settings overrides (INPUT_DIRECTORY, EXTENSIONS, ...)
        config_dir: directory holding deskmate.json and the log file
        reporter: progress renderer (defaults to plain terminal output)

    Returns:
        0 on success, 1 on failure
    """
    settings = build_settings(config_dir=config_dir, overrides=overrides)

    action, extensions, error = validate_settings(settings)
    if reporter is None:
        label = action.label if action else settings["ACTION"]
        reporter = CliReporter(title=f"{label} Files")
    if error:
        reporter.error(error)
        return 1

    logger = logger_from_settings(settings, get_log_path(config_dir))

    if settings["DRY_RUN"]:
        return preview_batch(settings, extensions, reporter, logger)
    return transfer_files(settings, action, extensions, reporter, logger)


# ------------------------------------------------------------
# Standardized entry point for launcher + direct execution
# ------------------------------------------------------------
def register_cli(subparsers):
    """
    Register this tool with the launcher CLI.
    """
    parser = subparsers.add_parser(
        "batch-transfer",
        help="Copy or move files by extension into one folder with numbered names",
    )
    _add_arguments(parser)
    parser.set_defaults(func=_run_from_args)


def _add_arguments(parser):
    parser.add_argument("input", nargs="?", help="Folder scanned recursively")
    parser.add_argument("output", nargs="?", help="Folder receiving the renamed files")
    parser.add_argument("--ext", dest="EXTENSIONS", help="Comma separated extensions, e.g. txt,jpg,png")
    parser.add_argument("--prefix", dest="NAMING_PREFIX", help="Name prefix (default: DeskMate_)")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--copy", dest="ACTION", action="store_const", const="Rename", help="Copy under the new name (default)")
    mode.add_argument("--move", dest="ACTION", action="store_const", const="Move", help="Move instead of copying")

    parser.add_argument("-n", "--dry-run", dest="DRY_RUN", action="store_true", default=None, help="Only list the planned names")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    parser.add_argument("--config-dir", help="Config directory")
    parser.add_argument("--log-file", dest="LOG_FILE", help="Log file path")
    parser.add_argument("--log-console", dest="LOG_TO_CONSOLE", action="store_true", default=None, help="Mirror log lines to the console")
    parser.add_argument("--json", dest="LOG_FORMAT", action="store_const", const="jsonl", help="JSON log output")


def _ask_confirmation(settings):
    print(confirm_message(settings))
    try:
        answer = input("[y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _run_from_args(args):
    overrides = {
        "INPUT_DIRECTORY": args.input,
        "OUTPUT_DIRECTORY": args.output,
    }
    for key in ("EXTENSIONS", "NAMING_PREFIX", "ACTION", "DRY_RUN", "LOG_FILE", "LOG_TO_CONSOLE", "LOG_FORMAT"):
        overrides[key] = getattr(args, key, None)

    settings = build_settings(config_dir=args.config_dir, overrides=overrides)
    _, _, error = validate_settings(settings)

    # Only a real run on a valid request needs the user's go-ahead.
    if not error and not settings["DRY_RUN"] and not args.yes:
        if not _ask_confirmation(settings):
            print("Cancelled.")
            return 1

    return run(overrides=overrides, config_dir=args.config_dir)


def main():
    """
    Standard entry point so the launcher can call this tool.
    """
    parser = argparse.ArgumentParser(description="DeskMate batch rename / move")
    _add_arguments(parser)
    args = parser.parse_args()
    return _run_from_args(args)


if __name__ == "__main__":
    raise SystemExit(main())
