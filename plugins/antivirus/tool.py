"""
tool.py
-------

Entry point for the antivirus check.

Provides:
- CLI mode (``deskmate antivirus --os linux``)
- Menu integration (form_config, precheck)
- Privilege precondition
- Streaming of the command output
"""

import argparse

from shared import (
    CliReporter,
    get_log_path,
    is_elevated,
    logger_from_settings,
    run_process,
    run_with_progress,
)
from .commands import OS_CHOICES, build_command, canonical_os, default_os_name
from .config import build_settings

TOOL_INFO = {
    "id": "antivirus",
    "name": "Antivirus Check",
    "description": "Run the system's integrity and malware scan commands.",
    "order": 2,
}

PRIVILEGE_MESSAGE = (
    "The Antivirus Check feature requires administrator/root privileges.\n"
    "Please restart the application with elevated permissions and try again.\n\n"
    "Windows: Right-click and 'Run as administrator'\n"
    "Linux/Mac: Run using 'sudo' or as root user."
)

# ------------------------------------------------------------
# Menu form (questions asked by the interactive front-end)
# ------------------------------------------------------------
form_config = {
    "title": "Antivirus Check",
    "fields": [
        {
            "id": "OS_NAME",
            "name": "Select your operating system:",
            "type": "select",
            "options": list(OS_CHOICES),
            "default": default_os_name(),
            "required": True,
        },
    ],
}


def precheck(settings=None):
    """Error message when the check cannot run at all, else None."""
    if settings and settings.get("SKIP_PRIVILEGE_CHECK"):
        return None
    if not is_elevated():
        return PRIVILEGE_MESSAGE
    return None


def run_commands(os_name, argv, reporter, logger, timeout=None):
    """Run ``argv`` on a worker thread, streaming its output; returns an exit status."""
    logger.log(f"Antivirus check ({os_name}): {argv}")

    worker = run_with_progress(
        lambda w: run_process(argv, on_line=w.emit_output, timeout=timeout),
        on_output=reporter.output,
        on_error=reporter.error,
        logger=logger,
    )

    result = worker.result
    if worker.error is not None or result is None:
        logger.flush()
        return 1

    if not result.launched:
        logger.error(f"Could not start {argv[0]}")
        logger.flush()
        return 1

    if result.timed_out:
        logger.error(f"Antivirus check timed out after {timeout} seconds")
        logger.flush()
        reporter.error(f"Antivirus check timed out after {timeout:g} seconds.")
        return 1

    logger.log(f"Antivirus check finished with exit code {result.exit_code}")
    logger.flush()
    reporter.done(f"Antivirus check finished (exit code {result.exit_code}).")
    return 0 if result.exit_code == 0 else 1


# ------------------------------------------------------------
# Main entry point
# ------------------------------------------------------------
def run(overrides=None, config_dir=None, reporter=None):
    """
    Main entry point used by the launcher and the menu.

    Parameters:
        overrides: dict of settings overrides (OS_NAME, PROCESS_TIMEOUT, ...)
        config_dir: directory holding deskmate.json and the log file
        reporter: output renderer (defaults to plain terminal output)

    Returns:
        0 when the commands ran and succeeded, 1 otherwise
    """
    settings = build_settings(config_dir=config_dir, overrides=overrides)
    reporter = reporter or CliReporter(title="Antivirus Check")

    error = precheck(settings)
    if error:
        reporter.error(error)
        return 1

    try:
        os_name = canonical_os(settings["OS_NAME"])
        argv = build_command(os_name)
    except ValueError as e:
        reporter.error(str(e))
        return 1

    logger = logger_from_settings(settings, get_log_path(config_dir))
    timeout = settings["PROCESS_TIMEOUT"] or None
    return run_commands(os_name, argv, reporter, logger, timeout=timeout)


# ------------------------------------------------------------
# Standardized entry point for launcher + direct execution
# ------------------------------------------------------------
def register_cli(subparsers):
    """
    Register this tool with the launcher CLI.
    """
    parser = subparsers.add_parser("antivirus", help="Run the antivirus check commands")
    _add_arguments(parser)
    parser.set_defaults(func=_run_from_args)


def _add_arguments(parser):
    parser.add_argument(
        "--os",
        dest="OS_NAME",
        type=str.title,
        choices=list(OS_CHOICES),
        help="Command set to run (default: current platform)",
    )
    parser.add_argument("--timeout", dest="PROCESS_TIMEOUT", type=float, help="Kill the commands after this many seconds")
    parser.add_argument(
        "--skip-privilege-check",
        dest="SKIP_PRIVILEGE_CHECK",
        action="store_true",
        default=None,
        help="Run even without administrator/root rights",
    )
    parser.add_argument("--config-dir", help="Config directory")
    parser.add_argument("--log-file", dest="LOG_FILE", help="Log file path")
    parser.add_argument("--log-console", dest="LOG_TO_CONSOLE", action="store_true", default=None, help="Mirror log lines to the console")
    parser.add_argument("--json", dest="LOG_FORMAT", action="store_const", const="jsonl", help="JSON log output")


def _run_from_args(args):
    overrides = {}
    for key in (
        "OS_NAME",
        "PROCESS_TIMEOUT",
        "SKIP_PRIVILEGE_CHECK",
        "LOG_FILE",
        "LOG_TO_CONSOLE",
        "LOG_FORMAT",
    ):
        overrides[key] = getattr(args, key, None)

    return run(overrides=overrides, config_dir=args.config_dir)


def main():
    """
    Standard entry point so the launcher can call this tool.
    """
    parser = argparse.ArgumentParser(description="DeskMate antivirus check")
    _add_arguments(parser)
    args = parser.parse_args()
    return _run_from_args(args)


if __name__ == "__main__":
    raise SystemExit(main())
