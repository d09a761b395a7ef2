"""
Device Enumerator — list candidate paths for this OS, probe each one, and
yield only the devices carrying a recognised signature.

Every iteration starts from scratch: the listing command is run again and
every candidate is re-read.  The "can't find" hint is only emitted once the
candidates are exhausted, never in the middle of the stream.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .platforms import DeviceLister, get_lister
from .runner import CommandRunner, run_command
from .sector import Mode, read_mode

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "Can't find xbox disc. Mount xbox disc and run the command as administrator"
)


@dataclass(frozen=True)
class Device:
    path: str
    mode: Mode

    def __str__(self) -> str:
        return f"{self.path} - {self.mode}"


class DeviceEnumerator:
    """
    Restartable sequence of recognised devices.

    Usage:
        for dev in DeviceEnumerator():
            print(dev.path, dev.mode)

    ``lister``, ``run`` and ``probe`` are injectable so listing and probing
    can be driven without real hardware.
    """

    def __init__(
        self,
        lister: Optional[DeviceLister] = None,
        run: CommandRunner = run_command,
        probe: Callable[[str], Mode] = read_mode,
    ):
        self.lister = lister or get_lister()
        self._run = run
        self._probe = probe

    def __iter__(self) -> Iterator[Device]:
        found = False
        for path in self.lister.candidates(self._run):
            mode = self._probe(path)
            if not mode.is_known:
                continue
            found = True
            yield Device(path, mode)

        if not found:
            logger.warning(NOT_FOUND_MESSAGE)

    def first(self) -> Optional[Device]:
        """First recognised device in listing order, or None."""
        return next(iter(self), None)
