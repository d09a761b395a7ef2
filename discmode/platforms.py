"""
Platform Device Listers — turn OS disk-listing output into candidate paths.

One lister per host OS, all sharing the same shape:

    Windows   Get-Disk (PowerShell)      →  \\\\.\\PHYSICALDRIVE<number>
    macOS     diskutil list              →  /dev/diskN  (lines containing /dev/)
    Linux     lsblk -d                   →  /dev/<name>

Listers only parse.  They never open a device and never raise on odd
lines: a garbled line becomes a garbled path, which later fails to open and
is probed as UNKNOWN.  Blank lines are dropped.
"""

import logging
import platform
from typing import Optional

from .runner import CommandRunner, run_command

logger = logging.getLogger(__name__)


def _first_token(line: str) -> str:
    parts = line.split()
    return parts[0] if parts else ""


def _is_rule(line: str) -> bool:
    """Table underline such as "------ ----"."""
    tokens = line.split()
    return bool(tokens) and all(set(t) == {"-"} for t in tokens)


class DeviceLister:
    """Base lister: run ``command``, parse its stdout into device paths."""

    name = ""
    command = ""

    def parse(self, output: str) -> list[str]:
        raise NotImplementedError

    def candidates(self, run: CommandRunner = run_command) -> list[str]:
        output = run(self.command)
        paths = self.parse(output)
        logger.debug("%s: %d candidate(s) from '%s'", self.name, len(paths), self.command)
        return paths

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.command!r}>"


class WindowsLister(DeviceLister):
    name = "windows"
    command = (
        "powershell -NoProfile -Command "
        "\"Get-Disk | Select-Object Number | Format-Table\""
    )

    def parse(self, output: str) -> list[str]:
        # Format-Table: "Number" header, then a "------" rule line
        lines = [
            ln for ln in output.splitlines()
            if ln.strip() and not _is_rule(ln)
        ]
        return [f"\\\\.\\PHYSICALDRIVE{_first_token(ln)}" for ln in lines[1:]]


class MacLister(DeviceLister):
    name = "macos"
    command = "diskutil list"

    def parse(self, output: str) -> list[str]:
        return [
            _first_token(ln)
            for ln in output.split("\n")
            if "/dev/" in ln
        ]


class LinuxLister(DeviceLister):
    name = "linux"
    command = "lsblk -d"

    def parse(self, output: str) -> list[str]:
        lines = [ln for ln in output.split("\n") if ln.strip()]
        return [f"/dev/{_first_token(ln)}" for ln in lines[1:]]


LISTERS: dict[str, type[DeviceLister]] = {
    "Windows": WindowsLister,
    "Darwin": MacLister,
    "Linux": LinuxLister,
}


def get_lister(system: Optional[str] = None) -> DeviceLister:
    """Pick the lister for ``system`` (default: this host). Unknown systems get lsblk."""
    system = system or platform.system()
    return LISTERS.get(system, LinuxLister)()
