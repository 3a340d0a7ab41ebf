"""Data structures describing Project Writer themes and the host environment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

ColorTuple = Tuple[int, int, int]

BLACK: ColorTuple = (0, 0, 0)
WHITE: ColorTuple = (255, 255, 255)


def color_to_hex(value: ColorTuple) -> str:
    return "#" + "".join(f"{component:02x}" for component in value)


class ThemeId(Enum):
    """The six mutually exclusive visual themes."""

    AERO = "Aero"
    LUNA = "Luna"
    BLUE_GRADIENT_2009 = "Blue (2009)"
    UWP = "UWP"
    UWP_DARK = "UWP Dark"
    CLASSIC = "Classic"

    @property
    def title(self) -> str:
        return _THEME_TITLES[self]

    @classmethod
    def parse(cls, value: "ThemeId | str") -> "ThemeId":
        """Resolve a theme from its id, enum name, or menu title (case-insensitive)."""

        if isinstance(value, ThemeId):
            return value
        key = _lookup_key(value)
        for theme in cls:
            if key in (_lookup_key(theme.value), _lookup_key(theme.name), _lookup_key(theme.title)):
                return theme
        raise ValueError(f"Unknown theme '{value}'")


_THEME_TITLES = {
    ThemeId.AERO: "Aero (Glass)",
    ThemeId.LUNA: "Luna (XP)",
    ThemeId.BLUE_GRADIENT_2009: "Blue Gradient (2009)",
    ThemeId.UWP: "Windows 10 (UWP)",
    ThemeId.UWP_DARK: "UWP Dark Mode",
    ThemeId.CLASSIC: "Classic",
}


def _lookup_key(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


class StrategyKind(Enum):
    """Closed set of toolbar/menu rendering strategies."""

    STATE_AWARE = "state-aware"
    LUNA = "luna"
    BLUE_GRADIENT = "blue-gradient"
    UWP = "uwp"
    DARK = "dark"
    CLASSIC = "classic"


@dataclass(frozen=True, slots=True)
class ThemeSpec:
    """Everything ``ThemeEngine.apply`` needs to realize one theme.

    ``window_background`` of ``None`` means the platform's default control
    colour.
    """

    theme: ThemeId
    window_background: ColorTuple | None
    strategy: StrategyKind
    menu_foreground: ColorTuple = BLACK
    toolbar_foreground: ColorTuple = BLACK
    glass_background: ColorTuple | None = None


@dataclass(frozen=True, slots=True)
class EnvironmentInfo:
    """Host facts read once at startup.

    ``os_version`` is ``major + minor / 10`` so that ``5.1`` identifies XP and
    ``10.0`` anything from Windows 10 on.
    """

    os_version: float
    dark_mode_preferred: bool = False
    glass_available: bool = False

    @property
    def os_major(self) -> int:
        return int(self.os_version)


__all__ = [
    "BLACK",
    "ColorTuple",
    "EnvironmentInfo",
    "StrategyKind",
    "ThemeId",
    "ThemeSpec",
    "WHITE",
    "color_to_hex",
]
