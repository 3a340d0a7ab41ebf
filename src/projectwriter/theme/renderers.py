"""Toolbar and menu rendering strategies.

Each strategy is a stateless pair of draw hooks. A hook returns ``True`` when
it painted the area (or deliberately left it blank) and ``False`` when the
platform style should draw its default instead. Hooks only talk to the
:class:`Canvas` protocol so they can be exercised without a GUI toolkit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Protocol

from .models import WHITE, ColorTuple, StrategyKind

__all__ = [
    "Canvas",
    "Rect",
    "RenderStrategy",
    "STRATEGIES",
    "strategy_for",
]


@dataclass(frozen=True, slots=True)
class Rect:
    """Integer rectangle in surface-local coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        return self.y + self.height - 1

    @property
    def right(self) -> int:
        return self.x + self.width - 1


class Canvas(Protocol):
    """Minimal drawing surface used by rendering strategies."""

    def fill_rect(self, rect: Rect, color: ColorTuple) -> None:
        ...

    def fill_vertical_gradient(self, rect: Rect, top: ColorTuple, bottom: ColorTuple) -> None:
        ...

    def draw_rect_outline(self, rect: Rect, color: ColorTuple) -> None:
        ...

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: ColorTuple) -> None:
        ...


StripHook = Callable[[Canvas, Rect], bool]
ButtonHook = Callable[[Canvas, Rect, bool], bool]


@dataclass(frozen=True, slots=True)
class RenderStrategy:
    """Draw rules for the strip background and button highlight of one theme."""

    kind: StrategyKind
    _strip: StripHook
    _button: ButtonHook

    def draw_strip_background(self, canvas: Canvas, bounds: Rect) -> bool:
        return self._strip(canvas, bounds)

    def draw_button_background(self, canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
        return self._button(canvas, bounds, highlighted)

    @property
    def overrides_nothing(self) -> bool:
        return self.kind is StrategyKind.CLASSIC


def _default_strip(canvas: Canvas, bounds: Rect) -> bool:
    del canvas, bounds
    return False


def _default_button(canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
    del canvas, bounds, highlighted
    return False


def _state_aware_button(canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
    if not highlighted:
        return False
    canvas.fill_vertical_gradient(bounds, (255, 240, 190), (255, 210, 80))
    canvas.draw_rect_outline(bounds, (230, 160, 50))
    return True


def _luna_strip(canvas: Canvas, bounds: Rect) -> bool:
    canvas.fill_vertical_gradient(bounds, (0, 70, 213), (110, 160, 255))
    return True


def _luna_button(canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
    if highlighted:
        canvas.fill_rect(bounds, (61, 149, 38))
        canvas.draw_rect_outline(bounds, WHITE)
    return True


def _blue_gradient_strip(canvas: Canvas, bounds: Rect) -> bool:
    canvas.fill_vertical_gradient(bounds, (215, 230, 250), (170, 195, 230))
    return True


def _uwp_strip(canvas: Canvas, bounds: Rect) -> bool:
    canvas.fill_rect(bounds, WHITE)
    canvas.draw_line(bounds.x, bounds.bottom, bounds.right, bounds.bottom, (230, 230, 230))
    return True


def _uwp_button(canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
    if highlighted:
        canvas.fill_rect(bounds, (230, 240, 255))
    return True


def _dark_strip(canvas: Canvas, bounds: Rect) -> bool:
    canvas.fill_rect(bounds, (45, 45, 45))
    return True


def _dark_button(canvas: Canvas, bounds: Rect, highlighted: bool) -> bool:
    if highlighted:
        canvas.fill_rect(bounds, (80, 80, 80))
    return True


STRATEGIES: Dict[StrategyKind, RenderStrategy] = {
    StrategyKind.STATE_AWARE: RenderStrategy(StrategyKind.STATE_AWARE, _default_strip, _state_aware_button),
    StrategyKind.LUNA: RenderStrategy(StrategyKind.LUNA, _luna_strip, _luna_button),
    StrategyKind.BLUE_GRADIENT: RenderStrategy(StrategyKind.BLUE_GRADIENT, _blue_gradient_strip, _default_button),
    StrategyKind.UWP: RenderStrategy(StrategyKind.UWP, _uwp_strip, _uwp_button),
    StrategyKind.DARK: RenderStrategy(StrategyKind.DARK, _dark_strip, _dark_button),
    StrategyKind.CLASSIC: RenderStrategy(StrategyKind.CLASSIC, _default_strip, _default_button),
}


def strategy_for(kind: StrategyKind) -> RenderStrategy:
    return STRATEGIES[kind]
