"""
shared/logger.py
----------------

Buffered, thread-safe logger used by every DeskMate tool.

Background workers record per-item failures here (files that could not be
copied, moved or deleted) without surfacing them to the user.

Features:
- Thread-safe buffered writes
- Automatic flushing at threshold
- Levels (INFO / WARNING / ERROR)
- Optional console mirroring
- Text and JSONL formats
- Memory-only mode when no log path is given
- Callback support for log streaming
"""

import json
import os
import threading
from collections import deque
from datetime import datetime


class BufferedLogger:
    """
    A thread-safe logger that buffers log lines and appends them to disk
    in batches.

    Worker threads call log()/error() while the foreground thread may call
    flush() at any time.
    """

    def __init__(
        self,
        log_path=None,
        buffer_limit=200,
        mirror_to_console=False,
        log_format="text",
        on_line=None,
        keep_lines=500,
    ):
        """
        Args:
            log_path: Path to the log file, or None to keep lines in memory only
            buffer_limit: Number of lines before auto-flush
            mirror_to_console: If True, also print log lines to console
            log_format: "text" or "jsonl"
            on_line: Optional callback invoked with the final rendered line
            keep_lines: Number of recent lines kept in ``recent``
        """
        self.log_path = log_path
        self.buffer_limit = buffer_limit
        self.buffer = []
        self.lock = threading.Lock()
        self.mirror = mirror_to_console
        self.log_format = (log_format or "text").lower()
        self.on_line = on_line
        self.recent = deque(maxlen=keep_lines)

        if self.log_path:
            folder = os.path.dirname(os.path.abspath(self.log_path))
            os.makedirs(folder, exist_ok=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.flush()

    def _flush_locked(self):
        """Internal flush (requires lock already held)"""
        if not self.buffer:
            return

        text = "\n".join(self.buffer) + "\n"
        self.buffer.clear()

        if not self.log_path:
            return

        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError:
            # Logging must never crash the tool
            pass

    def _render(self, level, msg):
        now = datetime.now()

        if self.log_format == "jsonl":
            payload = {
                "ts": now.isoformat(timespec="seconds"),
                "level": level,
                "msg": str(msg),
            }
            return json.dumps(payload, ensure_ascii=False)

        ts = now.strftime("%Y-%m-%d %H:%M:%S")
        return f"[{ts}] {level:<7} {msg}"

    def write(self, level, msg):
        """
        Append a timestamped message at the given level.
        Auto-flush when buffer_limit is reached.
        """
        line = self._render(level, msg)

        if self.mirror:
            print(line, flush=True)

        if self.on_line is not None:
            try:
                self.on_line(line)
            except Exception:
                pass

        with self.lock:
            self.recent.append(line)
            self.buffer.append(line)
            if len(self.buffer) >= self.buffer_limit:
                self._flush_locked()

    def log(self, msg):
        self.write("INFO", msg)

    info = log

    def warning(self, msg):
        self.write("WARNING", msg)

    def error(self, msg):
        self.write("ERROR", msg)

    def flush(self):
        """
        Flush all buffered log lines to disk.
        Safe to call multiple times.
        """
        with self.lock:
            self._flush_locked()


def logger_from_settings(settings, default_path):
    """
    Build the logger of a tool run from its LOG_* settings.

    LOG_FILE overrides ``default_path``; LOG_TO_CONSOLE mirrors lines to
    stdout; LOG_FORMAT selects "text" or "jsonl".
    """
    return BufferedLogger(
        log_path=settings.get("LOG_FILE") or default_path,
        mirror_to_console=bool(settings.get("LOG_TO_CONSOLE")),
        log_format=settings.get("LOG_FORMAT", "text"),
    )
