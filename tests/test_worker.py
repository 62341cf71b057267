import threading
from queue import Queue

from shared.worker import (
    ProgressInfo,
    WorkerState,
    drain_events,
    percent_of,
    run_with_progress,
    start_worker,
)


def test_percent_of_rounds_and_treats_empty_as_complete():
    assert percent_of(1, 3) == 33
    assert percent_of(2, 3) == 67
    assert percent_of(3, 3) == 100
    assert percent_of(0, 0) == 100


def test_events_arrive_in_emission_order_then_done():
    seen = []

    def work(worker):
        for pct in (10, 50, 100):
            worker.emit_progress(pct)
        worker.emit_info("halfway")
        return "result"

    worker = run_with_progress(
        work,
        on_progress=lambda info: seen.append(("progress", info.percent)),
        on_done=lambda result: seen.append(("done", result)),
        on_info=lambda msg: seen.append(("info", msg)),
    )

    assert seen == [("progress", 10), ("progress", 50), ("progress", 100), ("info", "halfway"), ("done", "result")]
    assert worker.result == "result"
    assert worker.error is None
    assert worker.state is WorkerState.DONE


def test_work_runs_on_another_thread():
    caller = threading.get_ident()
    worker = run_with_progress(lambda w: threading.get_ident())
    assert worker.result != caller


def test_exception_becomes_error_event():
    errors, done = [], []

    def work(worker):
        worker.emit_progress(40)
        raise OSError("cannot list directory")

    worker = run_with_progress(work, on_done=done.append, on_error=errors.append)

    assert errors == ["cannot list directory"]
    assert done == []
    assert worker.state is WorkerState.ERROR
    assert worker.error == "cannot list directory"


def test_progress_is_clamped():
    events = Queue()
    worker = start_worker(lambda w: w.emit_progress(150), events)
    worker.join()

    received = []
    finished = drain_events(events, {"progress": received.append})

    assert finished
    assert received == [ProgressInfo(percent=100)]


def test_drain_events_without_terminal_event_is_not_finished():
    events = Queue()
    events.put(("output", "line\n"))
    lines = []
    assert drain_events(events, {"output": lines.append}) is False
    assert lines == ["line\n"]
