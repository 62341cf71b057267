"""
cache_cleaner package
---------------------

Empties the cache folder of Firefox, Chrome or Edge.

Features:
- Fixed per-vendor cache locations (Firefox profile discovery)
- Best-effort deletion: locked files are skipped, folders are kept
- Progress bar in CLI and interactive menu

Primary entry point:

    from plugins.cache_cleaner.tool import run
"""

__all__ = ["run"]


def run(*args, **kwargs):
    """Lazy import wrapper for the run function."""
    from .tool import run as _run
    return _run(*args, **kwargs)
