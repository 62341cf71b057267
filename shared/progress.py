"""
shared/progress.py
------------------

Plain terminal rendering of progress and process output.

This is the non-interactive ProgressReporter: it renders the events that
a worker produces (percent updates, process output lines, informational
messages, completion, failure). The interactive menu uses the rich-based
reporter in deskmate.textui instead.

Features:
- Terminal-width aware progress bar on a TTY
- Newline-delimited "[ 42%] message" updates when stdout is redirected
"""

import shutil
import sys


def _truncate_left(text: str, max_len: int) -> str:
    if max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[-max_len:]
    return "..." + text[-(max_len - 3) :]


def _clamp_percent(percent) -> int:
    try:
        pct = int(percent)
    except (TypeError, ValueError):
        pct = 0
    return max(0, min(100, pct))


def format_progress_line(width: int, percent: int, message: str) -> str:
    """Render "<message> [####----] 42%" to exactly fit ``width`` columns."""
    width = max(20, int(width or 0))
    pct = _clamp_percent(percent)
    label = f"{pct:3d}%"

    desired_msg = max(10, width // 2)
    inner_bar = max(10, width - len(label) - 4 - desired_msg)  # 4 = spaces + brackets
    filled = inner_bar * pct // 100

    bar = "[" + "#" * filled + "-" * (inner_bar - filled) + "]"
    msg_width = max(0, width - len(bar) - len(label) - 2)
    msg = _truncate_left(message or "", msg_width).ljust(msg_width)
    line = f"{msg} {bar} {label}"
    return line[:width]


def draw_progress_bar(percent, message="", stream=None):
    """
    Draw a progress bar for an integer percent.

    On a TTY the bar is redrawn in place. Otherwise one
    "[ 42%] message" line is printed per call.
    """
    stream = stream or sys.stdout
    pct = _clamp_percent(percent)

    if not stream.isatty():
        print(f"[{pct:3d}%] {message}".rstrip(), file=stream, flush=True)
        return

    width = shutil.get_terminal_size((80, 20)).columns
    stream.write("\r" + format_progress_line(width, pct, message))
    stream.flush()


def finish_progress(message="Done", stream=None):
    """Finish progress tracking and print a completion message."""
    stream = stream or sys.stdout
    stream.write("\n" + message + "\n")
    stream.flush()


class CliReporter:
    """
    Renders worker events on stdout.

    Percent updates that do not change the displayed value are dropped;
    the final 100% is always drawn.
    """

    def __init__(self, title="", stream=None):
        self.title = title
        self.stream = stream or sys.stdout
        self.last_percent = None
        self.failed = False

    def progress(self, info):
        pct = _clamp_percent(getattr(info, "percent", info))
        if pct == self.last_percent:
            return
        self.last_percent = pct
        draw_progress_bar(pct, self.title, stream=self.stream)

    def output(self, line):
        self.stream.write(line)
        self.stream.flush()

    def info(self, message):
        print(f"[INFO] {message}", file=self.stream, flush=True)

    def done(self, message="Done"):
        if self.last_percent is not None:
            finish_progress(message, stream=self.stream)
        else:
            print(message, file=self.stream, flush=True)

    def error(self, message):
        self.failed = True
        if self.last_percent is not None:
            self.stream.write("\n")
        print(f"[ERROR] {message}", file=self.stream, flush=True)
