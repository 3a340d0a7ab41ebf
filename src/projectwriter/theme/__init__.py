"""Theme module consolidating theme data, rendering strategies, and the engine."""

from .engine import (
    AERO_FALLBACK_BACKGROUND,
    THEME_SPECS,
    ThemeEngine,
    ThemeSurfaces,
    available_themes,
    select_default,
)
from .environment import GlassCapability, NoGlassCapability, create_glass_capability, detect_environment
from .models import ColorTuple, EnvironmentInfo, StrategyKind, ThemeId, ThemeSpec
from .renderers import Canvas, Rect, RenderStrategy, strategy_for

__all__ = [
    "AERO_FALLBACK_BACKGROUND",
    "Canvas",
    "ColorTuple",
    "EnvironmentInfo",
    "GlassCapability",
    "NoGlassCapability",
    "Rect",
    "RenderStrategy",
    "StrategyKind",
    "THEME_SPECS",
    "ThemeEngine",
    "ThemeId",
    "ThemeSpec",
    "ThemeSurfaces",
    "available_themes",
    "create_glass_capability",
    "detect_environment",
    "select_default",
    "strategy_for",
]
