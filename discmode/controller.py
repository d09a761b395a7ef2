"""
Mode Controller — list / read / set / toggle.

Results go to ``out`` (print by default); diagnostics go through logging.
Nothing here raises for user or device errors: each operation reports its
outcome through the return value so the CLI can pick an exit code.
"""

import logging
from typing import Callable, Optional, Union

from .enumerator import Device, DeviceEnumerator
from .sector import InvalidModeError, Mode, parse_mode, read_mode, write_mode

logger = logging.getLogger(__name__)


class ModeController:

    def __init__(
        self,
        enumerator: Optional[DeviceEnumerator] = None,
        out: Callable[[str], None] = print,
    ):
        self._enumerator = enumerator
        self._out = out

    @property
    def enumerator(self) -> DeviceEnumerator:
        # Built lazily: read/set never need the OS listing
        if self._enumerator is None:
            self._enumerator = DeviceEnumerator()
        return self._enumerator

    def list_devices(self) -> list[Device]:
        devices = []
        for dev in self.enumerator:
            self._out(str(dev))
            devices.append(dev)
        return devices

    def read(self, path: str) -> Mode:
        mode = read_mode(path)
        self._out(str(Device(path, mode)))
        return mode

    def set(self, path: str, mode: Union[Mode, str]) -> bool:
        try:
            target = mode if isinstance(mode, Mode) else parse_mode(mode)
            ok = write_mode(path, target)
        except InvalidModeError as e:
            logger.error("%s. Use 'xbox' or 'pc'", e)
            return False

        if ok:
            self._out(f"Successfully set to {target} mode")
        return ok

    def toggle(self) -> Optional[Device]:
        """Flip the first recognised device. Returns the device in its new mode."""
        dev = self.enumerator.first()
        if dev is None:
            return None

        new_mode = dev.mode.opposite
        if not self.set(dev.path, new_mode):
            return None

        self._out(f"Disc {dev.path} switched from {dev.mode} to {new_mode}")
        return Device(dev.path, new_mode)
