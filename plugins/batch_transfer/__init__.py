"""
batch_transfer package
----------------------

Copies or moves every file with one of the chosen extensions from an
input folder tree into one output folder, renaming them
``<prefix>01.ext``, ``<prefix>02.ext``, ...

Features:
- Case-insensitive extension filter
- Copy ("Rename") or move
- Dry run listing of the planned names
- Progress bar in CLI and interactive menu

Primary entry point:

    from plugins.batch_transfer.tool import run
"""

__all__ = ["run"]


def run(*args, **kwargs):
    """Lazy import wrapper for the run function."""
    from .tool import run as _run
    return _run(*args, **kwargs)
