"""Root / Administrator detection. Raw device access needs it on every OS."""

import os
import platform


def is_elevated() -> bool:
    """
    True when running as root (macOS / Linux) or as Administrator (Windows).
    If the check itself is unavailable, assume elevated rather than nag.
    """
    _sys = platform.system()

    if _sys == "Windows":
        try:
            import ctypes
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return True

    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return True
    return geteuid() == 0


def elevation_hint() -> str:
    if platform.system() == "Windows":
        return "Not running as Administrator. Right-click → Run as Administrator"
    return "Not running as root. Example: sudo xbox-drive-convertor toggle"
