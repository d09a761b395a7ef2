"""Signature codec: decode table, read/write against synthetic images, error policy."""

import logging

import pytest

from discmode import sector
from discmode.sector import (
    InvalidModeError,
    Mode,
    PC_SIGNATURE,
    SECTOR_SIZE,
    SIGNATURE_OFFSET,
    XBOX_SIGNATURE,
    decode_signature,
    encode_mode,
    parse_mode,
    read_mode,
    write_mode,
)


@pytest.mark.parametrize("raw, expected", [
    (b"\x99\xcc", Mode.XBOX),
    (b"\x55\xaa", Mode.PC),
    (b"\xcc\x99", Mode.UNKNOWN),
    (b"\xaa\x55", Mode.UNKNOWN),
    (b"\x00\x00", Mode.UNKNOWN),
    (b"\x99\xaa", Mode.UNKNOWN),
    (b"\x55", Mode.UNKNOWN),
    (b"", Mode.UNKNOWN),
])
def test_decode_signature(raw, expected):
    assert decode_signature(raw) is expected


def test_encode_mode():
    assert encode_mode(Mode.XBOX) == XBOX_SIGNATURE
    assert encode_mode(Mode.PC) == PC_SIGNATURE
    assert encode_mode("PC") == PC_SIGNATURE
    with pytest.raises(InvalidModeError):
        encode_mode(Mode.UNKNOWN)


def test_parse_mode_is_case_insensitive():
    assert parse_mode("xbox") is Mode.XBOX
    assert parse_mode("XBox") is Mode.XBOX
    assert parse_mode(" pc ") is Mode.PC
    for bad in ("unknown", "badmode", ""):
        with pytest.raises(InvalidModeError):
            parse_mode(bad)


def test_invalid_mode_error_is_value_error():
    assert issubclass(InvalidModeError, ValueError)


def test_opposite():
    assert Mode.XBOX.opposite is Mode.PC
    assert Mode.PC.opposite is Mode.XBOX
    with pytest.raises(ValueError):
        Mode.UNKNOWN.opposite


def test_mode_str_is_value():
    assert str(Mode.XBOX) == "xbox"
    assert f"{Mode.PC}" == "pc"


def test_read_mode_pc_image(disk_image):
    path = disk_image(PC_SIGNATURE)
    assert read_mode(path) is Mode.PC


def test_read_mode_is_repeatable(disk_image):
    path = disk_image(XBOX_SIGNATURE)
    assert read_mode(path) is read_mode(path) is Mode.XBOX


def test_read_mode_short_image(disk_image):
    path = disk_image(PC_SIGNATURE, size=511)
    assert read_mode(path) is Mode.UNKNOWN


def test_read_mode_missing_path_warns(tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="discmode")
    missing = str(tmp_path / "nope.img")
    assert read_mode(missing) is Mode.UNKNOWN
    warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert missing in warnings[0].getMessage()


def test_read_mode_permission_denied_is_silent(monkeypatch, caplog):
    def _denied(*args, **kwargs):
        raise PermissionError(13, "Access denied")

    monkeypatch.setattr(sector, "open", _denied, raising=False)
    caplog.set_level(logging.DEBUG, logger="discmode")

    assert read_mode("/dev/sda") is Mode.UNKNOWN
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


@pytest.mark.parametrize("mode", [Mode.XBOX, Mode.PC])
def test_write_then_read_round_trip(disk_image, mode):
    path = disk_image(b"\x00\x00")
    assert write_mode(path, mode) is True
    assert read_mode(path) is mode


def test_write_only_touches_signature(disk_image):
    path = disk_image(PC_SIGNATURE, size=2048)
    with open(path, "r+b") as f:
        f.write(b"\xeb\x3c\x90MSDOS5.0")
    with open(path, "rb") as f:
        before = f.read()

    assert write_mode(path, "xbox")

    with open(path, "rb") as f:
        after = f.read()
    assert len(after) == 2048
    assert after[SIGNATURE_OFFSET:SIGNATURE_OFFSET + 2] == XBOX_SIGNATURE
    assert after[:SIGNATURE_OFFSET] == before[:SIGNATURE_OFFSET]
    assert after[SIGNATURE_OFFSET + 2:] == before[SIGNATURE_OFFSET + 2:]


def test_write_invalid_mode_leaves_file_alone(disk_image):
    path = disk_image(PC_SIGNATURE)
    with open(path, "rb") as f:
        before = f.read()

    with pytest.raises(InvalidModeError):
        write_mode(path, "badmode")

    with open(path, "rb") as f:
        assert f.read() == before


def test_write_missing_path_reports_failure(tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="discmode")
    missing = tmp_path / "nope.img"
    assert write_mode(str(missing), Mode.PC) is False
    assert not missing.exists()
    assert any(r.levelno == logging.ERROR for r in caplog.records)


class _RecordingFile:
    """Wraps a real file and records (kind, offset, size) for every read/write."""

    def __init__(self, f, log):
        self._f = f
        self._log = log

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._f.close()
        return False

    def seek(self, *args):
        return self._f.seek(*args)

    def read(self, size=-1):
        self._log.append(("read", self._f.tell(), size))
        return self._f.read(size)

    def write(self, data):
        self._log.append(("write", self._f.tell(), len(data)))
        return self._f.write(data)

    def flush(self):
        return self._f.flush()


def _record_io(monkeypatch):
    log = []

    def _open(path, mode="r", *args, **kwargs):
        return _RecordingFile(open(path, mode, *args, **kwargs), log)

    monkeypatch.setattr(sector, "open", _open, raising=False)
    return log


def test_device_io_is_sector_aligned(disk_image, monkeypatch):
    """Raw Windows handles reject reads/writes that are not whole sectors."""
    path = disk_image(PC_SIGNATURE, size=4096)
    log = _record_io(monkeypatch)

    assert read_mode(path) is Mode.PC
    assert write_mode(path, Mode.XBOX)
    assert read_mode(path) is Mode.XBOX

    assert {kind for kind, _, _ in log} == {"read", "write"}
    for kind, offset, size in log:
        assert offset % SECTOR_SIZE == 0, (kind, offset)
        assert size % SECTOR_SIZE == 0, (kind, size)


def test_write_short_image_fails_without_growing_it(disk_image):
    path = disk_image(b"\x00\x00", size=300)
    assert write_mode(path, Mode.PC) is False
    with open(path, "rb") as f:
        assert f.read() == b"\x00" * 300
