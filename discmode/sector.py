"""
Sector Codec — the 2-byte drive-mode signature at offset 510.

The last two bytes of the first 512-byte sector decide how the drive
presents itself:

    offset 510..511   99 CC   →  Xbox mode
    offset 510..511   55 AA   →  PC mode (the usual boot-sector signature)

Anything else (short read, other bytes, unreadable device) is UNKNOWN and
the device is simply not a candidate.  The codec works below the
filesystem: it is a fixed absolute offset on the raw device, nothing is
parsed.  Raw device handles (\\\\.\\PHYSICALDRIVEn in particular) only accept
whole-sector I/O, so sector 0 is always read and written as 512 bytes.

Error policy:
  • read  — PermissionError is silent, other OSErrors are logged as
            warnings.  Both return UNKNOWN.
  • write — invalid mode raises InvalidModeError before the device is
            touched; OSError is logged and reported as False.
"""

import logging
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)

SECTOR_SIZE = 512
SIGNATURE_OFFSET = 510
SIGNATURE_SIZE = 2

XBOX_SIGNATURE = b"\x99\xcc"
PC_SIGNATURE = b"\x55\xaa"


class InvalidModeError(ValueError):
    """Raised for a mode that has no on-disk signature."""


class Mode(str, Enum):
    XBOX = "xbox"
    PC = "pc"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def is_known(self) -> bool:
        return self is not Mode.UNKNOWN

    @property
    def opposite(self) -> "Mode":
        if self is Mode.XBOX:
            return Mode.PC
        if self is Mode.PC:
            return Mode.XBOX
        raise ValueError("UNKNOWN mode has no opposite")


_SIGNATURES = {
    Mode.XBOX: XBOX_SIGNATURE,
    Mode.PC: PC_SIGNATURE,
}


def decode_signature(raw: bytes) -> Mode:
    """Map the raw signature bytes to a Mode."""
    raw = bytes(raw)
    for mode, sig in _SIGNATURES.items():
        if raw == sig:
            return mode
    return Mode.UNKNOWN


def parse_mode(text: str) -> Mode:
    """Parse a user-supplied mode name (case-insensitive): 'xbox' or 'pc'."""
    name = str(text).strip().lower()
    for mode in _SIGNATURES:
        if mode.value == name:
            return mode
    raise InvalidModeError(f"Invalid mode specified: {text}")


def encode_mode(mode: Union[Mode, str]) -> bytes:
    """Return the 2 signature bytes for ``mode``."""
    if not isinstance(mode, Mode):
        mode = parse_mode(mode)
    try:
        return _SIGNATURES[mode]
    except KeyError:
        raise InvalidModeError(f"Invalid mode specified: {mode}") from None


def _read_sector0(dev) -> bytes:
    dev.seek(0)
    return dev.read(SECTOR_SIZE)


def read_mode(path: str) -> Mode:
    """
    Read sector 0 of ``path`` and decode the signature at offset 510.

    Never raises for I/O problems — an unreadable device is UNKNOWN.
    """
    try:
        with open(path, "rb", buffering=0) as dev:
            sector = _read_sector0(dev)
    except PermissionError:
        logger.debug("Permission denied reading %s", path)
        return Mode.UNKNOWN
    except OSError as e:
        logger.warning("%s: %s", path, e)
        return Mode.UNKNOWN

    raw = sector[SIGNATURE_OFFSET:SIGNATURE_OFFSET + SIGNATURE_SIZE]
    mode = decode_signature(raw)
    logger.debug("%s: signature %s → %s", path, raw.hex(" ") or "<empty>", mode)
    return mode


def write_mode(path: str, mode: Union[Mode, str]) -> bool:
    """
    Write the signature for ``mode`` at offset 510 of ``path``.

    Sector 0 is read, patched and written back whole.  Returns True once
    the sector is written, False on any I/O error or a device shorter than
    one sector.  Raises InvalidModeError for an unrecognised mode; the
    device is not opened in that case.
    """
    sig = encode_mode(mode)
    try:
        # r+b: write in place, never truncate the device / image
        with open(path, "r+b", buffering=0) as dev:
            sector = bytearray(_read_sector0(dev))
            if len(sector) < SECTOR_SIZE:
                logger.error("An error occurred: %s is shorter than one sector", path)
                return False
            sector[SIGNATURE_OFFSET:SIGNATURE_OFFSET + SIGNATURE_SIZE] = sig
            dev.seek(0)
            written = dev.write(bytes(sector))
    except OSError as e:
        logger.error("An error occurred: %s", e)
        return False

    if written != SECTOR_SIZE:
        logger.error("An error occurred: short write to %s (%s bytes)", path, written)
        return False

    logger.debug("Wrote %s to %s at offset %d", sig.hex(" "), path, SIGNATURE_OFFSET)
    return True
