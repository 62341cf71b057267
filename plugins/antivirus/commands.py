"""
commands.py
-----------

Command pipelines run by the antivirus check, one per operating system.

Each pipeline is a single shell invocation so that the whole chain shares
one output stream.
"""

import sys

OS_CHOICES = ("Windows", "Linux", "Mac")

WINDOWS_PIPELINE = " && ".join(
    [
        "sfc /scannow",
        "DISM /Online /Cleanup-Image /RestoreHealth",
        "wmic startup get caption,command",
        "netstat -ano",
        "tasklist | findstr [PID]",
        "schtasks /query /fo LIST /v",
        "sc query type= service state= all",
        "netsh advfirewall reset",
        "netsh int ip reset",
        "netsh winsock reset",
    ]
)

LINUX_PIPELINE = (
    "sudo apt-get update && sudo apt-get install clamav -y"
    " && sudo freshclam && sudo clamscan -r /"
)

MAC_PIPELINE = (
    "echo 'No built-in AV scanner. "
    "Consider installing ClamAV or using third-party software.'"
)

COMMANDS = {
    "Windows": ["cmd", "/c", WINDOWS_PIPELINE],
    "Linux": ["/bin/bash", "-c", LINUX_PIPELINE],
    "Mac": ["/bin/bash", "-c", MAC_PIPELINE],
}


def canonical_os(name):
    for os_name in OS_CHOICES:
        if str(name).strip().lower() == os_name.lower():
            return os_name
    raise ValueError("Unsupported OS")


def default_os_name(platform=None):
    """OS_CHOICES entry matching the running platform (Linux otherwise)."""
    platform = (platform or sys.platform).lower()
    if platform.startswith("win"):
        return "Windows"
    if platform.startswith("darwin"):
        return "Mac"
    return "Linux"


def build_command(os_name):
    """Argument vector for ``os_name``; ValueError for an unknown OS."""
    return list(COMMANDS[canonical_os(os_name)])
