"""
shared/scanner.py
-----------------

Directory scanning utilities used by the cache cleaner and the batch
rename/move tool.

Every scan yields absolute paths to *regular* files only. Directories and
special files (sockets, FIFOs, devices) are never returned. Symbolic links
to directories are not descended into.

A directory that cannot be listed fails the whole scan: the underlying
OSError is raised to the caller instead of being skipped.

Usage:
    from shared import iter_files, collect_files, ScanFilter

    for path in iter_files("/some/directory"):
        process(path)

    only_text = ScanFilter.from_string("txt, md")
    files = collect_files("/some/directory", file_filter=only_text)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

# ------------------------------------------------------------
# Default chunk size for directory scanning
# ------------------------------------------------------------
DEFAULT_CHUNK_SIZE = 500


def _raise_walk_error(err: OSError):
    raise err


# ------------------------------------------------------------
# Extension filter
# ------------------------------------------------------------
def normalize_extensions(values: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """
    Normalize user supplied extensions.

    Accepts a comma separated string ("txt, .JPG,png") or an iterable of
    strings. Entries are trimmed and lowercased, a leading dot is added
    when missing, empty entries and duplicates are dropped. Order is kept.

    Example:
        normalize_extensions("txt, .JPG") -> ('.txt', '.jpg')
    """
    if isinstance(values, str):
        values = values.split(",")

    result: List[str] = []
    for raw in values:
        ext = str(raw).strip().lower()
        if not ext or ext == ".":
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return tuple(result)


@dataclass(frozen=True)
class ScanFilter:
    """
    Case-insensitive filename suffix predicate.

    A file matches when its lowercase *filename* (not the full path) ends
    with one of ``extensions``.
    """
    extensions: Tuple[str, ...]

    def __post_init__(self):
        normalized = normalize_extensions(self.extensions)
        if not normalized:
            raise ValueError("ScanFilter requires at least one extension")
        object.__setattr__(self, "extensions", normalized)

    @classmethod
    def from_string(cls, text: str) -> "ScanFilter":
        return cls(normalize_extensions(text))

    def matches(self, name: str) -> bool:
        return name.lower().endswith(self.extensions)

    def __call__(self, path: Union[str, Path]) -> bool:
        return self.matches(os.path.basename(str(path)))


# ------------------------------------------------------------
# Core Generator - yields paths lazily
# ------------------------------------------------------------
def iter_files(
    root: Union[str, Path],
    file_filter: Optional[Callable[[Path], bool]] = None,
) -> Iterator[Path]:
    """
    Generator that yields absolute paths of regular files under root.

    Directories are visited top-down with entries in name order, so the
    result is deterministic for a given filesystem state.

    Args:
        root: Directory to scan
        file_filter: Optional predicate; only paths for which it returns
            True are yielded

    Raises:
        OSError: root or any subdirectory cannot be listed
    """
    root = os.path.abspath(str(root))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not os.path.isfile(path):
                continue
            if file_filter is not None and not file_filter(path):
                continue
            yield path


# ------------------------------------------------------------
# Chunked Generator - yields batches of paths
# ------------------------------------------------------------
def iter_files_chunked(
    root: Union[str, Path],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    file_filter: Optional[Callable[[Path], bool]] = None,
) -> Iterator[List[Path]]:
    """
    Generator that yields lists of up to chunk_size file paths.
    """
    chunk = []

    for path in iter_files(root, file_filter=file_filter):
        chunk.append(path)

        if len(chunk) >= chunk_size:
            yield chunk
            chunk = []

    # Final partial chunk
    if chunk:
        yield chunk


# ------------------------------------------------------------
# Collect All Files (with optional chunked callback)
# ------------------------------------------------------------
def collect_files(
    root: Union[str, Path],
    file_filter: Optional[Callable[[Path], bool]] = None,
) -> List[Path]:
    """Recursively collect all (optionally filtered) regular files under root."""
    return list(iter_files(root, file_filter=file_filter))


def collect_files_chunked(
    root: Union[str, Path],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    callback: Optional[Callable[[List[Path], int], None]] = None,
    file_filter: Optional[Callable[[Path], bool]] = None,
) -> List[Path]:
    """
    Collect files in chunks, optionally calling callback for each chunk.

    Args:
        root: Directory to scan
        chunk_size: Number of files per chunk
        callback: Optional function(chunk_list, total_so_far) called per chunk
        file_filter: Optional predicate applied to every regular file

    Returns:
        Complete list of matching files, in scan order
    """
    all_files: List[Path] = []

    for chunk in iter_files_chunked(root, chunk_size, file_filter=file_filter):
        all_files.extend(chunk)
        if callback:
            callback(chunk, len(all_files))

    return all_files


# ------------------------------------------------------------
# Count files (without collecting)
# ------------------------------------------------------------
def count_files(root: Union[str, Path]) -> int:
    """Count regular files under root without storing their paths."""
    count = 0
    for _ in iter_files(root):
        count += 1
    return count
