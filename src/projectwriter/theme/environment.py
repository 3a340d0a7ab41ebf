"""Host environment detection and the optional glass composition capability."""

from __future__ import annotations

import logging
import platform
import sys
from typing import Any, Callable, Protocol

from ..core.errors import PlatformCapabilityUnavailable
from .models import EnvironmentInfo

__all__ = [
    "GlassCapability",
    "NoGlassCapability",
    "DwmGlassCapability",
    "create_glass_capability",
    "detect_environment",
    "detect_os_version",
]

LOGGER = logging.getLogger(__name__)
_CAPABILITY = "glass composition"
# Non-Windows hosts are treated like a current desktop so the flat themes apply.
_NON_WINDOWS_VERSION = 10.0


class GlassCapability(Protocol):
    """Blur-behind composition offered by some hosts."""

    def supports_composition(self) -> bool:
        ...

    def extend_into_client_area(self, top_inset: int) -> None:
        ...


class NoGlassCapability:
    """Capability for hosts without any composition API."""

    def supports_composition(self) -> bool:
        return False

    def extend_into_client_area(self, top_inset: int) -> None:
        raise PlatformCapabilityUnavailable(_CAPABILITY, "not supported on this platform")


class DwmGlassCapability:
    """Desktop Window Manager bindings (``dwmapi.dll``) loaded through ctypes."""

    def __init__(self, window_handle: Callable[[], int]) -> None:
        self._window_handle = window_handle

    def supports_composition(self) -> bool:
        if not _windows_host() or sys.getwindowsversion().major < 6:
            return False
        import ctypes

        enabled = ctypes.c_bool(False)
        try:
            result = ctypes.windll.dwmapi.DwmIsCompositionEnabled(ctypes.byref(enabled))
        except (AttributeError, OSError) as exc:
            raise PlatformCapabilityUnavailable(_CAPABILITY, str(exc)) from exc
        return result == 0 and bool(enabled.value)

    def extend_into_client_area(self, top_inset: int) -> None:
        if not _windows_host():
            raise PlatformCapabilityUnavailable(_CAPABILITY, "not running on Windows")
        import ctypes

        class MARGINS(ctypes.Structure):
            _fields_ = [
                ("cxLeftWidth", ctypes.c_int),
                ("cxRightWidth", ctypes.c_int),
                ("cyTopHeight", ctypes.c_int),
                ("cyBottomHeight", ctypes.c_int),
            ]

        margins = MARGINS(0, 0, int(top_inset), 0)
        try:
            handle = ctypes.c_void_p(int(self._window_handle()))
            result = ctypes.windll.dwmapi.DwmExtendFrameIntoClientArea(handle, ctypes.byref(margins))
        except (AttributeError, OSError, TypeError, ValueError) as exc:
            raise PlatformCapabilityUnavailable(_CAPABILITY, str(exc)) from exc
        if result != 0:
            raise PlatformCapabilityUnavailable(_CAPABILITY, f"HRESULT 0x{result & 0xFFFFFFFF:08x}")


def create_glass_capability(window_handle: Callable[[], int]) -> GlassCapability:
    """Return the composition capability matching the current host."""

    if _windows_host():
        return DwmGlassCapability(window_handle)
    return NoGlassCapability()


def detect_os_version() -> float:
    """Return the host version as ``major + minor / 10``."""

    if _windows_host():
        version = sys.getwindowsversion()
        return version.major + version.minor / 10.0
    LOGGER.debug("Non-Windows host %s; using version %.1f", platform.system(), _NON_WINDOWS_VERSION)
    return _NON_WINDOWS_VERSION


def detect_environment(capability: GlassCapability | None = None, *, app: Any | None = None) -> EnvironmentInfo:
    """Snapshot the host facts that drive the initial theme."""

    glass = False
    if capability is not None:
        try:
            glass = bool(capability.supports_composition())
        except Exception as exc:
            LOGGER.debug("Glass capability probe failed: %s", exc)
    env = EnvironmentInfo(
        os_version=detect_os_version(),
        dark_mode_preferred=_prefers_dark_mode(app),
        glass_available=glass,
    )
    LOGGER.info(
        "Environment: os_version=%.1f dark_mode=%s glass=%s",
        env.os_version,
        env.dark_mode_preferred,
        env.glass_available,
    )
    return env


def _windows_host() -> bool:
    return sys.platform.startswith("win") and hasattr(sys, "getwindowsversion")


def _prefers_dark_mode(app: Any | None) -> bool:
    try:  # pragma: no cover - depends on desktop stack
        from PySide6.QtCore import Qt
        from PySide6.QtGui import QGuiApplication, QPalette
    except Exception:  # pragma: no cover - headless fallback
        return False

    qt_app: Any = app if app is not None else QGuiApplication.instance()
    if qt_app is None:
        return False
    try:
        scheme = qt_app.styleHints().colorScheme()
        if scheme == Qt.ColorScheme.Dark:
            return True
        if scheme == Qt.ColorScheme.Light:
            return False
    except AttributeError:  # pragma: no cover - Qt < 6.5
        pass
    window_color = qt_app.palette().color(QPalette.ColorRole.Window)
    return window_color.lightnessF() < 0.5
