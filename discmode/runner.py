"""
Command Runner — run one shell command and hand back its stdout as text.

Windows goes through ``cmd.exe /c``, everything else through ``bash -c``.
The exit status is never checked: listers only care about what was printed.

Anything that needs to enumerate devices takes a ``CommandRunner`` callable,
so tests can feed canned tool output instead of spawning a process.
"""

import logging
import platform
import subprocess
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CommandRunner = Callable[[str], str]


def shell_argv(command: str, system: Optional[str] = None) -> list[str]:
    """Build the argv that runs ``command`` through the platform shell."""
    system = system or platform.system()
    if system == "Windows":
        return ["cmd.exe", "/c", command]
    return ["bash", "-c", command]


def run_command(command: str) -> str:
    """Run ``command`` and return everything it wrote to stdout."""
    argv = shell_argv(command)
    logger.debug("Running: %s", " ".join(argv))
    try:
        r = subprocess.run(
            argv,
            capture_output=True, text=True, errors="replace",
        )
    except OSError as e:
        logger.error("Could not run '%s': %s", command, e)
        return ""

    if r.returncode != 0:
        logger.debug("'%s' exited with status %d", command, r.returncode)
    return r.stdout or ""
