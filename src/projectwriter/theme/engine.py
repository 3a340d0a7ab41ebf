"""Theme selection and application.

``select_default`` maps the host environment onto a theme and
``ThemeEngine.apply`` realizes a theme on the window, menu bar, and toolbar
surfaces. Applying never fails: an unknown theme falls back to Classic and
an Aero request on a host without usable glass degrades to a flat
background.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Protocol

from .environment import GlassCapability, NoGlassCapability
from .models import BLACK, WHITE, ColorTuple, EnvironmentInfo, StrategyKind, ThemeId, ThemeSpec
from .renderers import RenderStrategy, strategy_for

__all__ = [
    "AERO_FALLBACK_BACKGROUND",
    "THEME_SPECS",
    "StripSurface",
    "ThemeEngine",
    "ThemeSurfaces",
    "WindowSurface",
    "available_themes",
    "select_default",
]

LOGGER = logging.getLogger(__name__)

AERO_FALLBACK_BACKGROUND: ColorTuple = (200, 220, 240)

THEME_SPECS: Dict[ThemeId, ThemeSpec] = {
    ThemeId.AERO: ThemeSpec(
        theme=ThemeId.AERO,
        window_background=AERO_FALLBACK_BACKGROUND,
        strategy=StrategyKind.STATE_AWARE,
        glass_background=BLACK,
    ),
    ThemeId.LUNA: ThemeSpec(
        theme=ThemeId.LUNA,
        window_background=(163, 189, 227),
        strategy=StrategyKind.LUNA,
    ),
    ThemeId.BLUE_GRADIENT_2009: ThemeSpec(
        theme=ThemeId.BLUE_GRADIENT_2009,
        window_background=None,
        strategy=StrategyKind.BLUE_GRADIENT,
    ),
    ThemeId.UWP: ThemeSpec(
        theme=ThemeId.UWP,
        window_background=WHITE,
        strategy=StrategyKind.UWP,
    ),
    ThemeId.UWP_DARK: ThemeSpec(
        theme=ThemeId.UWP_DARK,
        window_background=(32, 32, 32),
        strategy=StrategyKind.DARK,
        menu_foreground=WHITE,
    ),
    ThemeId.CLASSIC: ThemeSpec(
        theme=ThemeId.CLASSIC,
        window_background=None,
        strategy=StrategyKind.CLASSIC,
    ),
}


class StripSurface(Protocol):
    """A menu bar or toolbar that paints through a rendering strategy."""

    def install_strategy(self, strategy: RenderStrategy) -> None:
        ...

    def set_foreground(self, color: ColorTuple) -> None:
        ...

    def height(self) -> int:
        ...

    def refresh(self) -> None:
        ...


class WindowSurface(Protocol):
    """The top-level window whose background the theme controls."""

    def set_background(self, color: ColorTuple | None) -> None:
        ...

    def refresh(self) -> None:
        ...


@dataclass(slots=True)
class ThemeSurfaces:
    """The three surfaces a theme is applied to."""

    menu: StripSurface
    toolbar: StripSurface
    window: WindowSurface

    def glass_inset(self) -> int:
        return self.menu.height() + self.toolbar.height()


def select_default(env: EnvironmentInfo) -> ThemeId:
    """Pick the start-up theme for ``env``; the first matching rule wins."""

    if env.os_version == 5.1:
        return ThemeId.LUNA
    if env.os_version >= 10.0:
        return ThemeId.UWP_DARK if env.dark_mode_preferred else ThemeId.UWP
    if env.os_version >= 6.0:
        return ThemeId.AERO
    return ThemeId.CLASSIC


def available_themes() -> List[ThemeId]:
    return list(THEME_SPECS)


class ThemeEngine:
    """Owns the active theme and applies theme specs to surfaces."""

    def __init__(self, env: EnvironmentInfo, glass: GlassCapability | None = None) -> None:
        self._env = env
        self._glass = glass or NoGlassCapability()
        self._active: ThemeId | None = None
        self._glass_active = False

    @property
    def environment(self) -> EnvironmentInfo:
        return self._env

    @property
    def active(self) -> ThemeId | None:
        """Return the most recently applied theme, if any."""

        return self._active

    @property
    def glass_active(self) -> bool:
        """Return ``True`` while the active theme renders through glass."""

        return self._glass_active

    def select_default(self) -> ThemeId:
        return select_default(self._env)

    def spec_for(self, theme: ThemeId | str) -> ThemeSpec:
        return THEME_SPECS[self._resolve(theme)]

    def apply(self, theme: ThemeId | str, surfaces: ThemeSurfaces) -> ThemeId:
        """Apply ``theme`` to ``surfaces`` and return the theme actually applied."""

        resolved = self._resolve(theme)
        spec = THEME_SPECS[resolved]
        background = spec.window_background
        use_glass = False
        if spec.glass_background is not None and self._glass_permitted():
            use_glass = self._extend_glass(surfaces)
            if use_glass:
                background = spec.glass_background

        surfaces.window.set_background(background)
        strategy = strategy_for(spec.strategy)
        surfaces.menu.install_strategy(strategy)
        surfaces.menu.set_foreground(spec.menu_foreground)
        surfaces.toolbar.install_strategy(strategy)
        surfaces.toolbar.set_foreground(spec.toolbar_foreground)
        for surface in (surfaces.window, surfaces.menu, surfaces.toolbar):
            surface.refresh()

        self._active = resolved
        self._glass_active = use_glass
        LOGGER.info(
            "Applied theme %s (strategy=%s, glass=%s)",
            resolved.value,
            spec.strategy.value,
            use_glass,
        )
        return resolved

    def reapply_glass(self, surfaces: ThemeSurfaces) -> bool:
        """Extend glass again once the native window exists (e.g. on first show)."""

        if not self._glass_active:
            return False
        return self._extend_glass(surfaces)

    def _resolve(self, theme: ThemeId | str) -> ThemeId:
        try:
            return ThemeId.parse(theme)
        except ValueError:
            LOGGER.warning("Unknown theme %r; falling back to %s", theme, ThemeId.CLASSIC.value)
            return ThemeId.CLASSIC

    def _glass_permitted(self) -> bool:
        if self._env.os_major >= 10:
            return False
        try:
            return bool(self._glass.supports_composition())
        except Exception as exc:
            LOGGER.debug("Glass support probe failed: %s", exc)
            return False

    def _extend_glass(self, surfaces: ThemeSurfaces) -> bool:
        try:
            self._glass.extend_into_client_area(surfaces.glass_inset())
        except Exception as exc:
            LOGGER.debug("Glass extension unavailable: %s", exc)
            return False
        return True
