#!/usr/bin/env python3
"""
launcher.py
-----------
Master entry point for DeskMate.
Discovers the tools under plugins/ and exposes them as subcommands.
Provides the interactive menu and an environment doctor.
"""

import argparse
import importlib
import importlib.util
import os
import sys
from pathlib import Path

import plugins
from deskmate import __version__
from shared import get_config_dir, is_elevated
from shared.config import CONFIG_NAME

PLUGINS_DIR = Path(plugins.__file__).resolve().parent

# Rich+Questionary menu
try:
    import deskmate.textui
    TEXTUI_AVAILABLE = True
except ImportError:
    TEXTUI_AVAILABLE = False

TOOLS = {}


def _is_interactive_tty() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def discover_tools():
    """
    Scans plugins/ subdirectories for 'tool.py' and loads them as modules.
    """
    base_path = PLUGINS_DIR

    if not base_path.exists():
        return TOOLS

    for item in sorted(os.listdir(base_path)):
        item_path = base_path / item

        # Skip non-directories and special folders
        if not item_path.is_dir() or item.startswith('.') or item.startswith('__'):
            continue

        tool_file = item_path / "tool.py"
        if tool_file.exists():
            try:
                module_name = f"plugins.{item}.tool"
                module = importlib.import_module(module_name)
                TOOLS[item] = module
            except Exception as e:  # pylint: disable=broad-exception-caught
                print(f"[WARN] Failed to load tool '{item}': {e}")
    return TOOLS


def ordered_tools():
    """(name, module) pairs in menu order."""
    def _order(entry):
        name, module = entry
        info = getattr(module, "TOOL_INFO", {})
        return (info.get("order", 99), name)

    return sorted(TOOLS.items(), key=_order)


def run_tui_menu(config_dir=None) -> int:
    """
    Launches the interactive menu (rich + questionary).
    """
    if not TEXTUI_AVAILABLE:
        print("[ERROR] Menu libraries not found. Please install: pip install rich questionary")
        return 1
    return deskmate.textui.launch_tui(ordered_tools(), config_dir=config_dir)


def run_doctor(config_dir=None) -> int:
    """Basic environment + discovery checks.

    Returns:
        int: process exit code (0 success, 1 issues)
    """
    print("=" * 60)
    print("DESKMATE DOCTOR")
    print("=" * 60)

    issues = []
    warnings = []

    py_ver = sys.version_info
    print(f"[CHECK] Python: {py_ver.major}.{py_ver.minor}.{py_ver.micro}")
    if py_ver < (3, 8):
        issues.append("Python 3.8+ is required")

    print(f"[CHECK] Platform: {sys.platform}")
    print(f"[CHECK] Interactive TTY: {_is_interactive_tty()}")

    print("[CHECK] Discovered tools:")
    if not TOOLS:
        issues.append("No tools discovered")
        print("  [ERROR] none")
    else:
        for name, module in ordered_tools():
            ok_register = hasattr(module, "register_cli")
            ok_run = hasattr(module, "run")
            ok_form = hasattr(module, "form_config")
            print(f"  [OK] {name} (register_cli={ok_register}, run={ok_run}, form={ok_form})")
            if not ok_register:
                warnings.append(f"{name}: missing register_cli")
            if not ok_run:
                issues.append(f"{name}: missing run")
            if not ok_form:
                warnings.append(f"{name}: missing form_config; not shown in the menu")

    print("[CHECK] Menu support:")
    for lib in ("rich", "questionary"):
        if importlib.util.find_spec(lib) is not None:
            print(f"  [OK] {lib} installed")
        else:
            warnings.append(f"{lib} not installed; interactive menu unavailable")
            print(f"  [WARN] {lib} not installed (install: pip install {lib})")

    elevated = is_elevated()
    print(f"[CHECK] Administrator/root: {elevated}")
    if not elevated:
        warnings.append("Antivirus Check needs administrator/root privileges")

    base_dir = Path(config_dir) if config_dir else get_config_dir()
    config_file = base_dir / CONFIG_NAME
    print(f"[CHECK] Config dir: {base_dir}")
    print(f"  {'[OK]' if config_file.exists() else '[INFO]'} {CONFIG_NAME}: "
          f"{'found' if config_file.exists() else 'not present (defaults in use)'}")

    print("=" * 60)
    if issues:
        print(f"RESULT: {len(issues)} issue(s) found")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("RESULT: All checks passed")

    if warnings:
        print(f"Warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")
    print("=" * 60)

    return 0 if not issues else 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="deskmate",
        description="DeskMate - cache cleaning, antivirus check and batch rename/move",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available Tools")

    # Register tool CLIs
    for name, module in ordered_tools():
        if hasattr(module, "register_cli"):
            try:
                module.register_cli(subparsers)
            except Exception as e:  # pylint: disable=broad-exception-caught
                print(f"[WARN] Failed to register CLI for '{name}': {e}")

    # Built-in commands
    menu_parser = subparsers.add_parser("menu", help="Show interactive menu")
    menu_parser.add_argument("--config-dir", help="Config directory")
    doctor_parser = subparsers.add_parser("doctor", help="Run environment validation checks")
    doctor_parser.add_argument("--config-dir", help="Config directory")
    return parser


def main(argv=None) -> int:
    discover_tools()
    parser = build_parser()

    if argv is None:
        argv = sys.argv[1:]

    # If no arguments provided, launch the menu when possible
    if not argv:
        if TEXTUI_AVAILABLE and _is_interactive_tty():
            try:
                return run_tui_menu()
            except KeyboardInterrupt:
                return 0

        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    if args.command == "menu":
        if not _is_interactive_tty():
            print("[ERROR] The menu requires an interactive terminal")
            return 1
        try:
            return run_tui_menu(config_dir=args.config_dir)
        except KeyboardInterrupt:
            return 0

    if args.command == "doctor":
        return run_doctor(config_dir=args.config_dir)

    # Execute the selected tool's function
    if hasattr(args, "func"):
        try:
            return args.func(args) or 0
        except KeyboardInterrupt:
            print("\n[INFO] Interrupted.")
            return 130

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
