"""
shared/privilege.py
-------------------

Administrator / root detection.

Windows: ``net session`` only succeeds from an elevated prompt.
Linux / macOS: ``id -u`` prints 0 for root.

Any other platform, or any failure to run the probe, counts as
"not elevated".
"""

import subprocess
import sys

PROBE_TIMEOUT = 15


def _probe_windows():
    proc = subprocess.run(
        ["cmd", "/c", "net session"],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        timeout=PROBE_TIMEOUT,
        check=False,
    )
    return proc.returncode == 0


def _probe_posix():
    proc = subprocess.run(
        ["id", "-u"],
        capture_output=True,
        text=True,
        timeout=PROBE_TIMEOUT,
        check=False,
    )
    lines = proc.stdout.splitlines()
    return bool(lines) and lines[0].strip() == "0"


def is_elevated(platform=None):
    """Return True when the current process runs with admin/root rights."""
    platform = (platform or sys.platform).lower()
    try:
        if platform.startswith("win"):
            return _probe_windows()
        if platform.startswith(("linux", "darwin")) or "nix" in platform:
            return _probe_posix()
    except (OSError, subprocess.SubprocessError):
        return False
    return False
