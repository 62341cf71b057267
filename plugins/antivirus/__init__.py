"""
antivirus package
-----------------

Runs the operating system's integrity / malware check commands and
streams their output.

Features:
- Administrator/root precondition
- Fixed command pipelines for Windows, Linux and macOS
- Live output in CLI and interactive menu
- Optional timeout

Primary entry point:

    from plugins.antivirus.tool import run
"""

__all__ = ["run"]


def run(*args, **kwargs):
    """Lazy import wrapper for the run function."""
    from .tool import run as _run
    return _run(*args, **kwargs)
