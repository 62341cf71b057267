"""
shared/batch.py
---------------

Batch copy/move with sequential naming.

Every file of a scan result is written to one destination directory as
``<prefix><NN><original extension>``, NN being a 1-based counter padded
to two digits and assigned in scan order:

    a.TXT, c.txt  --(prefix "Doc_")-->  Doc_01.TXT, Doc_02.txt

Existing destination files are overwritten. A file that cannot be
transferred is logged and skipped; the batch always runs to the end.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .path_utils import copy_overwrite, ensure_directory, get_extension, move_overwrite
from .scanner import DEFAULT_CHUNK_SIZE, ScanFilter, collect_files_chunked
from .worker import percent_of

DEFAULT_PREFIX = "DeskMate_"
NO_FILES_MESSAGE = "No matching files found to {action}."


class TransferAction(Enum):
    """What happens to the source file."""
    COPY = "copy"
    MOVE = "move"

    @classmethod
    def parse(cls, value: Union[str, "TransferAction"]) -> "TransferAction":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        # "rename" is the menu label for copy-with-new-name
        if text in ("copy", "rename"):
            return cls.COPY
        if text == "move":
            return cls.MOVE
        raise ValueError(f"Unknown transfer action: {value!r}")

    @property
    def label(self) -> str:
        return "Rename" if self is TransferAction.COPY else "Move"


@dataclass(frozen=True)
class NamingPattern:
    """Destination names: prefix + zero-padded sequence + extension."""
    prefix: str = DEFAULT_PREFIX
    width: int = 2

    @classmethod
    def from_prefix(cls, prefix: Optional[str]) -> "NamingPattern":
        prefix = (prefix or "").strip()
        return cls(prefix or DEFAULT_PREFIX)

    def name_for(self, sequence: int, source: Union[str, Path]) -> str:
        return f"{self.prefix}{sequence:0{self.width}d}{get_extension(source)}"


@dataclass
class BatchResult:
    """Outcome of one batch run."""
    action: TransferAction
    matched: int = 0
    transferred: List[Tuple[Path, Path]] = field(default_factory=list)
    failed: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def transferred_count(self) -> int:
        return len(self.transferred)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def summary(self) -> str:
        if self.matched == 0:
            return f"{self.action.label} operation completed!"
        return (
            f"{self.action.label} operation completed! "
            f"{self.transferred_count} of {self.matched} file(s) processed"
            + (f", {self.failed_count} skipped." if self.failed else ".")
        )


def plan_batch(
    files: Sequence[Union[str, Path]],
    destination: Union[str, Path],
    prefix: Optional[str] = DEFAULT_PREFIX,
) -> List[Tuple[Path, Path]]:
    """Pair every file with its sequentially numbered destination path."""
    pattern = NamingPattern.from_prefix(prefix)
    destination = Path(destination)
    return [
        (Path(source), destination / pattern.name_for(count, source))
        for count, source in enumerate(files, start=1)
    ]


def process_batch(
    files: Sequence[Union[str, Path]],
    destination: Union[str, Path],
    action: Union[str, TransferAction],
    prefix: Optional[str] = DEFAULT_PREFIX,
    on_progress: Optional[Callable[[int], None]] = None,
    on_info: Optional[Callable[[str], None]] = None,
    logger=None,
) -> BatchResult:
    """
    Copy or move ``files`` into ``destination`` under sequential names.

    Files are handled strictly in list order. After each file (whether it
    succeeded or not) on_progress receives round(done / total * 100).
    An empty list sends a single "no files matched" message to on_info and
    a single 100 to on_progress.

    Per-file OSErrors are written to ``logger`` and recorded in
    ``BatchResult.failed``; they never stop the batch.
    """
    action = TransferAction.parse(action)
    transfer = copy_overwrite if action is TransferAction.COPY else move_overwrite

    result = BatchResult(action=action, matched=len(files))
    total = len(files)

    if total == 0:
        message = NO_FILES_MESSAGE.format(action=action.label.lower())
        if logger:
            logger.log(message)
        if on_info:
            on_info(message)
        if on_progress:
            on_progress(100)
        return result

    verb = action.value.upper()
    for count, (source, target) in enumerate(plan_batch(files, destination, prefix), start=1):
        try:
            transfer(source, target)
        except OSError as e:
            result.failed.append((source, str(e)))
            if logger:
                logger.error(f"{verb} failed: {source} -> {target}: {e}")
        else:
            result.transferred.append((source, target))
            if logger:
                logger.log(f"{verb}: {source} -> {target}")

        if on_progress:
            on_progress(percent_of(count, total))

    return result


def as_scan_filter(extensions: Union[str, Iterable[str], ScanFilter]) -> ScanFilter:
    if isinstance(extensions, ScanFilter):
        return extensions
    if isinstance(extensions, str):
        return ScanFilter.from_string(extensions)
    return ScanFilter(tuple(extensions))


def scan_matching_files(
    root: Union[str, Path],
    extensions: Union[str, Iterable[str], ScanFilter],
    logger=None,
) -> List[Path]:
    """
    Collect the files under ``root`` whose name ends with one of
    ``extensions`` (case-insensitive), in scan order.

    Raises:
        ValueError: ``extensions`` is empty
        OSError: a directory under ``root`` cannot be listed
    """
    file_filter = as_scan_filter(extensions)

    if logger:
        logger.log(f"Scanning {root} for {', '.join(file_filter.extensions)}")

    def on_chunk(_chunk, total_so_far):
        if logger:
            logger.log(f"Scan progress: {total_so_far} matching files found")

    return collect_files_chunked(
        root,
        chunk_size=DEFAULT_CHUNK_SIZE,
        callback=on_chunk,
        file_filter=file_filter,
    )


def scan_and_transfer(
    root: Union[str, Path],
    destination: Union[str, Path],
    extensions: Union[str, Iterable[str], ScanFilter],
    action: Union[str, TransferAction],
    prefix: Optional[str] = DEFAULT_PREFIX,
    on_progress: Optional[Callable[[int], None]] = None,
    on_info: Optional[Callable[[str], None]] = None,
    logger=None,
) -> BatchResult:
    """
    Scan ``root`` for files matching ``extensions`` and transfer them.

    The whole scan completes before the first file is written, so files
    landing in a destination inside ``root`` are never picked up again.
    The destination directory is created when there is something to write.
    """
    files = scan_matching_files(root, extensions, logger=logger)

    if files:
        ensure_directory(str(destination))

    return process_batch(
        files,
        destination,
        action,
        prefix=prefix,
        on_progress=on_progress,
        on_info=on_info,
        logger=logger,
    )
