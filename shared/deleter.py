"""
shared/deleter.py
-----------------

Best-effort recursive file deletion (used to empty browser cache folders).

Only regular files are removed; the directory tree itself is left in
place. A file that cannot be deleted (locked, permission denied, already
gone) is skipped without interrupting the run.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .scanner import collect_files
from .worker import percent_of


@dataclass
class DeleteResult:
    """Outcome of one deletion run."""
    total: int = 0
    deleted: int = 0
    failed: int = 0


def delete_files(
    files: Sequence[Union[str, Path]],
    on_progress: Optional[Callable[[int], None]] = None,
    logger=None,
) -> DeleteResult:
    """
    Delete every file in ``files``.

    on_progress receives round(attempted / total * 100) after every delete
    attempt, successful or not. An empty list reports 100 once.
    """
    total = len(files)
    result = DeleteResult(total=total)

    if total == 0:
        if on_progress:
            on_progress(100)
        return result

    for attempted, path in enumerate(files, start=1):
        try:
            os.remove(path)
        except FileNotFoundError:
            # removed by someone else in the meantime
            result.deleted += 1
        except OSError as e:
            result.failed += 1
            if logger:
                logger.warning(f"Could not delete {path}: {e}")
        else:
            result.deleted += 1

        if on_progress:
            on_progress(percent_of(attempted, total))

    return result


def scan_and_delete(
    root: Union[str, Path],
    on_progress: Optional[Callable[[int], None]] = None,
    logger=None,
) -> DeleteResult:
    """
    Delete all regular files under ``root``, keeping its directories.

    Raises:
        OSError: a directory under ``root`` cannot be listed
    """
    files = collect_files(root)
    if logger:
        logger.log(f"Deleting {len(files)} file(s) under {root}")

    result = delete_files(files, on_progress=on_progress, logger=logger)

    if logger:
        logger.log(
            f"Deleted {result.deleted} of {result.total} file(s) under {root}"
            + (f" ({result.failed} skipped)" if result.failed else "")
        )
    return result
