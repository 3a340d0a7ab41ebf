"""Qt integration for rendering strategies and theme surfaces.

A :class:`ThemedStyle` proxy is installed once per menu bar or toolbar and
holds a reference to the current :class:`RenderStrategy`. Switching themes
swaps that reference and repaints; widgets are never rebuilt.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QPoint, QRect, Qt
from PySide6.QtGui import QBrush, QColor, QLinearGradient, QPainter, QPalette, QPen
from PySide6.QtWidgets import QProxyStyle, QStyle, QStyleOption, QWidget

from ..theme.models import ColorTuple, StrategyKind
from ..theme.renderers import Rect, RenderStrategy, strategy_for

__all__ = ["QtCanvas", "QtStripSurface", "QtWindowSurface", "ThemedStyle"]

_HIGHLIGHT_STATES = (
    QStyle.StateFlag.State_MouseOver,
    QStyle.StateFlag.State_On,
    QStyle.StateFlag.State_Sunken,
    QStyle.StateFlag.State_Selected,
)


def _qcolor(color: ColorTuple) -> QColor:
    return QColor(*color)


def _qrect(rect: Rect) -> QRect:
    return QRect(rect.x, rect.y, rect.width, rect.height)


def _rect(qrect: QRect) -> Rect:
    return Rect(qrect.x(), qrect.y(), qrect.width(), qrect.height())


def _highlighted(option: QStyleOption) -> bool:
    return any(bool(option.state & flag) for flag in _HIGHLIGHT_STATES)


class QtCanvas:
    """:class:`~projectwriter.theme.renderers.Canvas` backed by a ``QPainter``."""

    def __init__(self, painter: QPainter) -> None:
        self._painter = painter

    def fill_rect(self, rect: Rect, color: ColorTuple) -> None:
        self._painter.fillRect(_qrect(rect), _qcolor(color))

    def fill_vertical_gradient(self, rect: Rect, top: ColorTuple, bottom: ColorTuple) -> None:
        gradient = QLinearGradient(QPoint(rect.x, rect.y), QPoint(rect.x, rect.bottom))
        gradient.setColorAt(0.0, _qcolor(top))
        gradient.setColorAt(1.0, _qcolor(bottom))
        self._painter.fillRect(_qrect(rect), QBrush(gradient))

    def draw_rect_outline(self, rect: Rect, color: ColorTuple) -> None:
        self._painter.save()
        self._painter.setPen(QPen(_qcolor(color)))
        self._painter.setBrush(Qt.BrushStyle.NoBrush)
        self._painter.drawRect(rect.x, rect.y, rect.width - 1, rect.height - 1)
        self._painter.restore()

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: ColorTuple) -> None:
        self._painter.save()
        self._painter.setPen(QPen(_qcolor(color)))
        self._painter.drawLine(x1, y1, x2, y2)
        self._painter.restore()


class ThemedStyle(QProxyStyle):
    """Proxy style that routes strip and button painting through a strategy."""

    def __init__(self, strategy: RenderStrategy) -> None:
        super().__init__()
        self._strategy = strategy

    @property
    def strategy(self) -> RenderStrategy:
        return self._strategy

    def set_strategy(self, strategy: RenderStrategy) -> None:
        self._strategy = strategy

    def drawPrimitive(self, element: Any, option: Any, painter: Any, widget: Any = None) -> None:  # noqa: N802
        if not self._strategy.overrides_nothing:
            canvas = QtCanvas(painter)
            if element in (QStyle.PrimitiveElement.PE_PanelMenuBar, QStyle.PrimitiveElement.PE_PanelToolBar):
                if self._strategy.draw_strip_background(canvas, _rect(option.rect)):
                    return
            elif element == QStyle.PrimitiveElement.PE_PanelButtonTool:
                if self._strategy.draw_button_background(canvas, _rect(option.rect), _highlighted(option)):
                    return
        super().drawPrimitive(element, option, painter, widget)

    def drawControl(self, element: Any, option: Any, painter: Any, widget: Any = None) -> None:  # noqa: N802
        if not self._strategy.overrides_nothing:
            canvas = QtCanvas(painter)
            bounds = _rect(option.rect)
            if element == QStyle.ControlElement.CE_MenuBarEmptyArea:
                if self._strategy.draw_strip_background(canvas, bounds):
                    return
            elif element == QStyle.ControlElement.CE_MenuBarItem and hasattr(option, "text"):
                self._strategy.draw_strip_background(canvas, bounds)
                if self._strategy.draw_button_background(canvas, bounds, _highlighted(option)):
                    self._draw_menu_label(option, painter)
                    return
        super().drawControl(element, option, painter, widget)

    def _draw_menu_label(self, option: Any, painter: Any) -> None:
        alignment = Qt.AlignmentFlag.AlignCenter.value | Qt.TextFlag.TextShowMnemonic.value
        enabled = bool(option.state & QStyle.StateFlag.State_Enabled)
        self.drawItemText(
            painter,
            option.rect,
            alignment,
            option.palette,
            enabled,
            option.text,
            QPalette.ColorRole.ButtonText,
        )


class QtStripSurface:
    """Theme surface adapter for a ``QMenuBar`` or ``QToolBar``."""

    def __init__(self, widget: QWidget) -> None:
        self._widget = widget
        self._style = ThemedStyle(strategy_for(StrategyKind.CLASSIC))
        widget.setStyle(self._style)

    @property
    def style(self) -> ThemedStyle:
        return self._style

    def install_strategy(self, strategy: RenderStrategy) -> None:
        self._style.set_strategy(strategy)

    def set_foreground(self, color: ColorTuple) -> None:
        palette = self._widget.palette()
        for role in (QPalette.ColorRole.ButtonText, QPalette.ColorRole.WindowText, QPalette.ColorRole.Text):
            palette.setColor(role, _qcolor(color))
        self._widget.setPalette(palette)

    def height(self) -> int:
        return self._widget.height()

    def refresh(self) -> None:
        self._widget.update()


class QtWindowSurface:
    """Theme surface adapter for the top-level window background."""

    def __init__(self, window: QWidget) -> None:
        self._window = window
        self._default_palette = QPalette(window.palette())
        window.setAutoFillBackground(True)

    def set_background(self, color: ColorTuple | None) -> None:
        palette = QPalette(self._default_palette)
        if color is not None:
            palette.setColor(QPalette.ColorRole.Window, _qcolor(color))
        self._window.setPalette(palette)

    def refresh(self) -> None:
        self._window.update()
