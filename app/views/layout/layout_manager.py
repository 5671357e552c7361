"""LayoutManager: Places the side panel over the photo stack and slides it."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QAbstractAnimation, QPoint, QPropertyAnimation
from PySide6.QtWidgets import QApplication, QMainWindow, QVBoxLayout, QWidget
from loguru import logger

from app.views.constants import PANEL_WIDTH_PX
from infrastructure.settings import DEFAULT_PANEL_MS


class _PanelHost(QWidget):
    """Central widget that re-places the overlaid panel on every resize."""

    def __init__(self, on_resize: Callable[[], None], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._on_resize = on_resize

    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt naming
        super().resizeEvent(event)
        self._on_resize()


class LayoutManager:
    """Manages the main window layout and the side panel toggle.

    The photo stack fills the central area; the panel is a child of the
    stack's parent laid on top of its left edge so photos can slide out
    from underneath it.
    """

    WINDOW_SIZE_RATIO = 0.6

    def __init__(
        self,
        main_window: QMainWindow,
        panel_width: int = PANEL_WIDTH_PX,
        toggle_ms: int = DEFAULT_PANEL_MS,
    ) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to manage layout for
            panel_width: Width of the side panel in pixels
            toggle_ms: Duration of the panel slide animation
        """
        self.window = main_window
        self.panel_width = int(panel_width)
        self.toggle_ms = int(toggle_ms)
        self.panel: QWidget | None = None
        self.panel_visible = True
        self._panel_anim: QPropertyAnimation | None = None

    def setup_main_layout(self, stack_widget: QWidget, panel_widgets: list[QWidget]) -> QWidget:
        """Create the central widget: stack underneath, panel overlaid.

        Args:
            stack_widget: The photo stack widget
            panel_widgets: Widgets stacked vertically in the side panel

        Returns:
            Central widget configured with the layout
        """
        central = _PanelHost(self.relayout, self.window)
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.addWidget(stack_widget)

        panel = QWidget(central)
        panel.setAutoFillBackground(True)
        column = QVBoxLayout(panel)
        column.setContentsMargins(0, 0, 0, 0)
        for w in panel_widgets:
            column.addWidget(w)
        panel.setGeometry(0, 0, self.panel_width, max(1, central.height()))
        panel.raise_()
        self.panel = panel
        return central

    def relayout(self) -> None:
        """Keep the panel full-height after a resize, preserving its x position."""
        if self.panel is None or self.panel.parentWidget() is None:
            return
        parent = self.panel.parentWidget()
        self.panel.setGeometry(self.panel.x(), 0, self.panel_width, parent.height())
        self.panel.raise_()

    def toggle_panel(self) -> None:
        """Show or hide the panel; reverses an animation that is still running."""
        if self.panel is None:
            return
        self.panel_visible = not self.panel_visible

        anim = self._panel_anim
        if anim is not None and anim.state() == QAbstractAnimation.Running:
            anim.setDirection(
                QAbstractAnimation.Backward
                if anim.direction() == QAbstractAnimation.Forward
                else QAbstractAnimation.Forward
            )
            logger.debug("Panel animation reversed (visible={})", self.panel_visible)
            return

        target_x = 0 if self.panel_visible else -self.panel_width
        anim = QPropertyAnimation(self.panel, b"pos")
        anim.setDuration(self.toggle_ms)
        anim.setStartValue(self.panel.pos())
        anim.setEndValue(QPoint(target_x, self.panel.y()))
        self._panel_anim = anim
        anim.start()

    def current_panel_width(self) -> int:
        """Visible panel width; zero while hidden."""
        return self.panel_width if self.panel_visible else 0

    def setup_initial_window_size(self) -> None:
        """Setup initial window size based on screen dimensions."""
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        rect = screen.availableGeometry()
        self.window.resize(
            int(rect.width() * self.WINDOW_SIZE_RATIO), int(rect.height() * self.WINDOW_SIZE_RATIO)
        )
