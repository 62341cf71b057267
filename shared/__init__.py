"""
shared
------

Core of DeskMate: scanning, batch transfer, recursive deletion, external
process streaming, and the background worker that runs them.

Command surface used by the tools:

    scan_and_delete(root, on_progress=...)
    scan_and_transfer(root, dest, extensions, action, prefix, on_progress=...)
    run_process(argv, on_line=...)
"""

from .scanner import (
    iter_files,
    iter_files_chunked,
    collect_files,
    collect_files_chunked,
    count_files,
    normalize_extensions,
    ScanFilter,
    DEFAULT_CHUNK_SIZE,
)

from .worker import (
    BaseWorker,
    FunctionWorker,
    WorkerState,
    ProgressInfo,
    percent_of,
    start_worker,
    drain_events,
    run_with_progress,
)

from .batch import (
    TransferAction,
    NamingPattern,
    BatchResult,
    plan_batch,
    process_batch,
    scan_matching_files,
    scan_and_transfer,
    DEFAULT_PREFIX,
)

from .deleter import (
    DeleteResult,
    delete_files,
    scan_and_delete,
)

from .task_runner import (
    ProcessResult,
    run_process,
)

from .progress import (
    draw_progress_bar,
    finish_progress,
    CliReporter,
)

from .logger import (
    BufferedLogger,
    logger_from_settings,
)

from .path_utils import (
    get_extension,
    ensure_directory,
    normalize_path,
    copy_overwrite,
    move_overwrite,
)

from .privilege import (
    is_elevated,
)

from .config import (
    get_config_dir,
    get_log_path,
    load_persistent_config,
    merge_settings,
    build_settings,
)

__all__ = [
    # Scanner
    "iter_files",
    "iter_files_chunked",
    "collect_files",
    "collect_files_chunked",
    "count_files",
    "normalize_extensions",
    "ScanFilter",
    "DEFAULT_CHUNK_SIZE",
    # Worker
    "BaseWorker",
    "FunctionWorker",
    "WorkerState",
    "ProgressInfo",
    "percent_of",
    "start_worker",
    "drain_events",
    "run_with_progress",
    # Batch transfer
    "TransferAction",
    "NamingPattern",
    "BatchResult",
    "plan_batch",
    "process_batch",
    "scan_matching_files",
    "scan_and_transfer",
    "DEFAULT_PREFIX",
    # Deletion
    "DeleteResult",
    "delete_files",
    "scan_and_delete",
    # Process runner
    "ProcessResult",
    "run_process",
    # Progress
    "draw_progress_bar",
    "finish_progress",
    "CliReporter",
    # Logger
    "BufferedLogger",
    "logger_from_settings",
    # Path Utils
    "get_extension",
    "ensure_directory",
    "normalize_path",
    "copy_overwrite",
    "move_overwrite",
    # Privilege
    "is_elevated",
    # Config
    "get_config_dir",
    "get_log_path",
    "load_persistent_config",
    "merge_settings",
    "build_settings",
]
