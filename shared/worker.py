"""
shared/worker.py
----------------

Background worker thread with ordered progress reporting.

Every long-running DeskMate operation (scan + delete, scan + transfer,
external process run) executes on exactly one dedicated worker thread.
The worker never touches the display: it puts events on a queue and the
foreground thread consumes them in the order they were produced.

Usage:
    from shared import run_with_progress, scan_and_delete

    result = run_with_progress(
        lambda worker: scan_and_delete(root, on_progress=worker.emit_progress),
        on_progress=lambda info: print(info.percent),
        on_done=lambda result: print("done", result),
    )

Queue messages:
    ("state", WorkerState)
    ("progress", ProgressInfo)
    ("output", line)
    ("info", message)
    ("log", message)
    ("done", result)
    ("error", error_message)
"""

import threading
from dataclasses import dataclass
from enum import Enum, auto
from queue import Empty, Queue
from typing import Any, Callable, Dict, Optional


TERMINAL_EVENTS = ("done", "error")


# ------------------------------------------------------------
# Worker State Enum
# ------------------------------------------------------------
class WorkerState(Enum):
    """Possible states of a worker thread."""
    IDLE = auto()
    PROCESSING = auto()
    DONE = auto()
    ERROR = auto()


# ------------------------------------------------------------
# Progress Info Dataclass
# ------------------------------------------------------------
@dataclass
class ProgressInfo:
    """Container for one progress event."""
    percent: int = 0
    message: str = ""
    current: int = 0
    total: int = 0
    phase: str = ""


def percent_of(done: int, total: int) -> int:
    """
    Integer percent complete, rounded. An empty work set is complete.

    Example:
        percent_of(1, 3) -> 33
        percent_of(2, 3) -> 67
        percent_of(0, 0) -> 100
    """
    if total <= 0:
        return 100
    return int(round(done / total * 100))


# ------------------------------------------------------------
# Base Worker Thread
# ------------------------------------------------------------
class BaseWorker(threading.Thread):
    """
    Base class for threaded workers with progress reporting.

    Subclasses override do_work(). Whatever do_work() leaves in
    ``self.result`` is sent with the final "done" event. An exception
    escaping do_work() becomes an "error" event instead.
    """

    def __init__(
        self,
        settings: Optional[Dict[str, Any]] = None,
        queue: Optional[Queue] = None,
        logger: Optional[Any] = None,
    ):
        super().__init__()
        self.settings = settings or {}
        self.queue = queue
        self.logger = logger

        self.state = WorkerState.IDLE
        self.result: Any = None
        self.error: Optional[str] = None

    # --------------------------------------------------------
    # State Management
    # --------------------------------------------------------
    def _set_state(self, state: WorkerState):
        """Update worker state and emit to queue."""
        self.state = state
        self.emit("state", state)

    # --------------------------------------------------------
    # Queue Communication
    # --------------------------------------------------------
    def emit(self, kind: str, payload: Any):
        """Emit a message to the queue."""
        if self.queue is not None:
            self.queue.put((kind, payload))

    def emit_progress(
        self,
        percent: int,
        message: str = "",
        current: int = 0,
        total: int = 0,
        phase: str = "",
    ):
        """Emit a percent-complete update."""
        info = ProgressInfo(
            percent=max(0, min(100, int(percent))),
            message=message,
            current=current,
            total=total,
            phase=phase,
        )
        self.emit("progress", info)

    def emit_output(self, line: str):
        """Emit one line of external process output."""
        self.emit("output", line)

    def emit_info(self, message: str):
        """Emit an informational message meant for the user."""
        self.emit("info", message)
        if self.logger:
            self.logger.log(message)

    def emit_log(self, message: str):
        """Emit log message and optionally write to logger."""
        self.emit("log", message)
        if self.logger:
            self.logger.log(message)

    def emit_done(self, result: Any = None):
        """Emit completion with results."""
        self._set_state(WorkerState.DONE)
        self.emit("done", self.result if result is None else result)

    def emit_error(self, error: str):
        """Emit error message."""
        self.error = error
        self._set_state(WorkerState.ERROR)
        self.emit("error", error)
        if self.logger:
            self.logger.error(error)

    # --------------------------------------------------------
    # Thread Entry Point
    # --------------------------------------------------------
    def run(self):
        """Thread entry point. Override do_work() instead of this."""
        try:
            self._set_state(WorkerState.PROCESSING)
            self.do_work()
        except Exception as e:  # pylint: disable=broad-exception-caught
            self.emit_error(str(e) or e.__class__.__name__)
            return
        self.emit_done()

    def do_work(self):
        """Override this method with your work logic."""
        raise NotImplementedError("Subclasses must implement do_work()")


# ------------------------------------------------------------
# Simple Function-Based Worker
# ------------------------------------------------------------
class FunctionWorker(BaseWorker):
    """
    Worker that executes a provided function with itself as argument.

    Usage:
        def my_task(worker):
            worker.emit_progress(50)
            return {"count": 1}

        worker = FunctionWorker(work_func=my_task, queue=my_queue)
        worker.start()
    """

    def __init__(
        self,
        work_func: Callable[["FunctionWorker"], Any],
        settings: Optional[Dict[str, Any]] = None,
        queue: Optional[Queue] = None,
        logger: Optional[Any] = None,
    ):
        super().__init__(settings, queue, logger)
        self.work_func = work_func

    def do_work(self):
        self.result = self.work_func(self)


# ------------------------------------------------------------
# Foreground helpers
# ------------------------------------------------------------
def start_worker(
    work_fn: Callable[[FunctionWorker], Any],
    events: Queue,
    logger: Optional[Any] = None,
    settings: Optional[Dict[str, Any]] = None,
) -> FunctionWorker:
    """Start work_fn on its own thread, reporting into ``events``."""
    worker = FunctionWorker(work_fn, settings=settings, queue=events, logger=logger)
    worker.start()
    return worker


def drain_events(
    events: Queue,
    handlers: Dict[str, Callable[[Any], None]],
    timeout: Optional[float] = None,
) -> bool:
    """
    Dispatch every pending event to its handler, in queue order.

    Waits up to ``timeout`` seconds for the first event (no wait when
    None). Returns True once a terminal ("done" or "error") event has
    been handled.
    """
    try:
        if timeout:
            item = events.get(timeout=timeout)
        else:
            item = events.get_nowait()
    except Empty:
        return False

    finished = False
    while True:
        kind, payload = item
        handler = handlers.get(kind)
        if handler is not None:
            handler(payload)
        if kind in TERMINAL_EVENTS:
            finished = True
        try:
            item = events.get_nowait()
        except Empty:
            break
    return finished


def run_with_progress(
    work_fn: Callable[[FunctionWorker], Any],
    on_progress: Optional[Callable[[ProgressInfo], None]] = None,
    on_done: Optional[Callable[[Any], None]] = None,
    *,
    on_output: Optional[Callable[[str], None]] = None,
    on_info: Optional[Callable[[str], None]] = None,
    on_error: Optional[Callable[[str], None]] = None,
    on_log: Optional[Callable[[str], None]] = None,
    logger: Optional[Any] = None,
    poll_interval: float = 0.05,
) -> FunctionWorker:
    """
    Run work_fn on a dedicated worker thread and dispatch its events on
    the calling thread until the work finishes.

    work_fn receives the worker and reports through worker.emit_progress,
    worker.emit_output and worker.emit_info. Its return value is passed to
    on_done. If it raises, on_error receives the message instead.

    Returns the finished worker (``worker.result`` / ``worker.error``).
    """
    handlers = {
        "progress": on_progress,
        "done": on_done,
        "output": on_output,
        "info": on_info,
        "error": on_error,
        "log": on_log,
    }
    handlers = {kind: fn for kind, fn in handlers.items() if fn is not None}

    events: Queue = Queue()
    worker = start_worker(work_fn, events, logger=logger)

    finished = False
    while not finished:
        finished = drain_events(events, handlers, timeout=poll_interval)
        if not finished and not worker.is_alive() and events.empty():
            break

    worker.join()
    return worker
