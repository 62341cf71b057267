#!/usr/bin/env python3
"""textui.py

Interactive menu for DeskMate.

Uses:
- `rich` for terminal rendering (panels, tables, progress bar)
- `questionary` for interactive prompts (menus, inputs, confirmations)

Both libraries are highly compatible across Windows/macOS/Linux.

Each tool module describes its questions in ``form_config``; the menu
asks them, optionally shows the tool's ``confirm_message`` and then calls
the tool's ``run()`` with a RichReporter.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, Tuple

import questionary
from questionary import Style as QStyle
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

GREY_THEME = {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "title": "bold white",
    "muted": "dim white",
    "accent": "cyan",
    "panel_border": "dim white",
}

Q_STYLE = QStyle(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:cyan"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:cyan"),
        ("separator", "fg:gray"),
        ("instruction", "fg:gray"),
        ("text", ""),
        ("disabled", "fg:gray italic"),
    ]
)

CONSOLE = Console(theme=Theme(GREY_THEME))

BACK = "← Back"


# ---------------------------------------------------------------------------
# Screen management
# ---------------------------------------------------------------------------


def clear_screen():
    """Clear the terminal screen."""
    if os.name == "nt":
        os.system("cls")
    else:
        # \033[2J clears the screen, \033[H moves the cursor to top-left
        sys.stdout.write("\033[2J\033[H")
        sys.stdout.flush()


def print_header(title: str, console: Console = CONSOLE):
    """Print a styled header."""
    console.print()
    console.print(
        Panel(
            Text(title, style="bold white"),
            border_style="cyan",
            padding=(0, 2),
        )
    )


def print_info(message: str, console: Console = CONSOLE):
    console.print(f"[cyan]ℹ[/cyan] {message}", highlight=False)


def print_success(message: str, console: Console = CONSOLE):
    console.print(f"[green]✓[/green] {message}", highlight=False)


def print_warning(message: str, console: Console = CONSOLE):
    console.print(f"[yellow]⚠[/yellow] {message}", highlight=False)


def print_error(message: str, console: Console = CONSOLE):
    console.print(f"[red]✗[/red] {message}", highlight=False)


def print_error_panel(message: str, title: str = "Error", console: Console = CONSOLE):
    console.print(
        Panel(
            Text(message),
            title=f"[red]{title}[/red]",
            border_style="red",
            padding=(1, 2),
        )
    )


def print_tools_table(tools: List[Tuple[str, Any]], console: Console = CONSOLE):
    table = Table(show_header=True, header_style="bold cyan", border_style="dim white")
    table.add_column("Tool")
    table.add_column("Description", style="muted")
    for _, module in tools:
        info = getattr(module, "TOOL_INFO", {})
        table.add_row(info.get("name", ""), info.get("description", ""))
    console.print(table)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def _required(text: str):
    return bool(text and text.strip()) or "This field is required."


def prompt_select(
    message: str, choices: List[Tuple[str, Any]], back_option: bool = True
) -> Optional[Any]:
    """Show a selection menu. Returns the value associated with the choice."""
    display_choices = [c[0] for c in choices]
    if back_option:
        display_choices.append(BACK)

    result = questionary.select(
        message,
        choices=display_choices,
        style=Q_STYLE,
    ).ask()

    if result is None or result == BACK:
        return None
    for label, value in choices:
        if label == result:
            return value
    return None


def prompt_select_option(message: str, options: List[str], default: str = "") -> Optional[str]:
    """Select from a list of string options. None when cancelled."""
    return questionary.select(
        message,
        choices=options,
        default=default if default in options else None,
        style=Q_STYLE,
    ).ask()


def prompt_text(message: str, default: str = "", required: bool = False) -> Optional[str]:
    """Prompt for text input. None when cancelled."""
    return questionary.text(
        message,
        default=default,
        validate=_required if required else None,
        style=Q_STYLE,
    ).ask()


def prompt_path(message: str, default: str = "", is_dir: bool = False, required: bool = False) -> Optional[str]:
    """Prompt for a file/directory path with completion. None when cancelled."""
    return questionary.path(
        message,
        default=default,
        only_directories=is_dir,
        validate=_required if required else None,
        style=Q_STYLE,
    ).ask()


def prompt_confirm(message: str, default: bool = False) -> bool:
    """Yes/no confirmation."""
    result = questionary.confirm(
        message,
        default=default,
        style=Q_STYLE,
    ).ask()
    return bool(result)


def pause():
    questionary.press_any_key_to_continue("Press any key to return to the menu...").ask()


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


def ask_field(field: dict) -> Optional[str]:
    """Ask one form field; None when the user cancelled."""
    message = field.get("name", field["id"])
    default = str(field.get("default", "") or "")
    required = bool(field.get("required"))
    kind = field.get("type", "text")

    if kind == "select":
        return prompt_select_option(message, list(field.get("options", [])), default)
    if kind in ("directory", "file"):
        answer = prompt_path(message, default, is_dir=(kind == "directory"), required=required)
        return os.path.expanduser(answer.strip()) if answer is not None else None
    return prompt_text(message, default, required=required)


def run_form(form: dict) -> Optional[Dict[str, str]]:
    """Ask every field of ``form`` in order. None when any answer is cancelled."""
    values: Dict[str, str] = {}
    for field in form.get("fields", []):
        answer = ask_field(field)
        if answer is None:
            return None
        values[field["id"]] = answer
    return values


# ---------------------------------------------------------------------------
# Progress rendering
# ---------------------------------------------------------------------------


class RichReporter:
    """
    Renders worker events with rich.

    Percent updates drive one progress bar; process output lines are
    printed verbatim above it.
    """

    def __init__(self, title: str = "", console: Console = CONSOLE):
        self.title = title
        self.console = console
        self.progress_bar: Optional[Progress] = None
        self.task_id = None
        self.failed = False

    def _ensure_progress(self):
        if self.progress_bar is None:
            self.progress_bar = Progress(
                SpinnerColumn(),
                TextColumn("[bold]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                TimeElapsedColumn(),
                console=self.console,
            )
            self.task_id = self.progress_bar.add_task(self.title or "Working", total=100)
            self.progress_bar.start()
        return self.progress_bar

    def _stop(self):
        if self.progress_bar is not None:
            self.progress_bar.stop()
            self.progress_bar = None

    def progress(self, info):
        percent = getattr(info, "percent", info)
        self._ensure_progress().update(self.task_id, completed=percent)

    def output(self, line: str):
        self.console.print(Text(line.rstrip("\n")), highlight=False)

    def info(self, message: str):
        print_info(message, console=self.console)

    def done(self, message: str = "Done"):
        self._stop()
        print_success(message, console=self.console)

    def error(self, message: str):
        self.failed = True
        self._stop()
        print_error(message, console=self.console)


# ---------------------------------------------------------------------------
# Tool execution
# ---------------------------------------------------------------------------


def run_tool(module, config_dir=None, console: Console = CONSOLE) -> Optional[int]:
    """
    Ask the tool's questions and run it. Returns the tool's exit status,
    or None when the user backed out before anything ran.
    """
    info = getattr(module, "TOOL_INFO", {})
    form = getattr(module, "form_config", {"title": info.get("name", ""), "fields": []})
    print_header(form.get("title") or info.get("name", "Tool"), console=console)

    precheck = getattr(module, "precheck", None)
    if callable(precheck):
        problem = precheck()
        if problem:
            print_error_panel(problem, title="Administrator Privileges Required", console=console)
            return None

    values = run_form(form)
    if values is None:
        return None

    confirm_message = getattr(module, "confirm_message", None)
    if callable(confirm_message):
        if not prompt_confirm(confirm_message(values), default=False):
            print_info("Cancelled.", console=console)
            return None

    reporter = RichReporter(title=info.get("name", ""), console=console)
    return module.run(overrides=values, config_dir=config_dir, reporter=reporter)


def show_main_menu(tools: List[Tuple[str, Any]], config_dir=None):
    """Main menu loop: one entry per tool, then Exit."""
    while True:
        clear_screen()
        print_header("DeskMate")
        print_tools_table(tools)
        CONSOLE.print()

        choices = [
            (getattr(module, "TOOL_INFO", {}).get("name", name), module)
            for name, module in tools
        ]
        choices.append(("Exit", None))

        selected = prompt_select("Choose a tool:", choices, back_option=False)
        if selected is None:
            print_info("Goodbye!")
            return

        run_tool(selected, config_dir=config_dir)
        CONSOLE.print()
        pause()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def launch_tui(tools: List[Tuple[str, Any]], config_dir=None) -> int:
    """Launch the menu."""
    try:
        show_main_menu(tools, config_dir=config_dir)
    except KeyboardInterrupt:
        CONSOLE.print()
        print_info("Interrupted. Goodbye!")
    return 0
