"""Main launcher window.

The window shows one menu at a time as a column of text rows painted by
:class:`_MenuCanvas`.  Clicks are hit-tested against the row rectangles
and forwarded to the :class:`NavigationEngine` as positions; Escape and
closing the window cancel the menu.  When the engine reaches a launch
outcome the emulator runs on a :class:`_LaunchWorker` thread while the
menu is disabled, and a fresh session starts once the emulator exits.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, QRect, QSize, QThread, Signal
from PySide6.QtGui import (
    QCloseEvent, QColor, QFont, QFontMetrics, QKeyEvent, QMouseEvent, QPainter, QPaintEvent,
)
from PySide6.QtWidgets import QApplication, QFileDialog, QVBoxLayout, QWidget
from qfluentwidgets import CaptionLabel, Theme, isDarkTheme, setTheme
from loguru import logger

from lambda_blue.config import Config
from lambda_blue.core.launcher import Launcher
from lambda_blue.core.navigation import Launch, NavigationEngine, Outcome, Quit, first_hit
from lambda_blue.core.persistence import RegistryStore
from lambda_blue.errors import LambdaBlueError, LaunchError
from lambda_blue.i18n import t
from lambda_blue.models.emulator import Emulator

_ROW_HEIGHT_FACTOR = 2.8
_TOP_MARGIN = 24


# -----------------------------------------------------------------------
# Worker
# -----------------------------------------------------------------------

class _LaunchWorker(QThread):
    """Background thread that waits for the emulator process."""

    done = Signal(int)  # exit status
    error = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._launcher: Launcher | None = None
        self._emulator: Emulator | None = None

    def set_data(self, launcher: Launcher, emulator: Emulator) -> None:
        self._launcher = launcher
        self._emulator = emulator

    @property
    def emulator(self) -> Emulator | None:
        return self._emulator

    def run(self) -> None:
        try:
            code = self._launcher.launch(self._emulator)  # type: ignore[union-attr]
            self.done.emit(code)
        except LaunchError as e:
            self.error.emit(str(e))


# -----------------------------------------------------------------------
# Menu canvas
# -----------------------------------------------------------------------

class _MenuCanvas(QWidget):
    """Paints menu labels in rows and reports which row was clicked."""

    activated = Signal(int)  # position in the current label list

    def __init__(self, font_size: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._labels: list[str] = []
        self._font = QFont()
        self._font.setPixelSize(font_size)
        self._font.setWeight(QFont.Weight.ExtraBold)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def set_labels(self, labels: list[str]) -> None:
        self._labels = list(labels)
        self.update()

    def item_rects(self) -> list[QRect]:
        """Bounding rectangle of every label, in display order."""
        metrics = QFontMetrics(self._font)
        row = int(self._font.pixelSize() * _ROW_HEIGHT_FACTOR)
        rects = []
        for i, label in enumerate(self._labels):
            width = min(metrics.horizontalAdvance(label), self.width())
            height = metrics.height()
            x = (self.width() - width) // 2
            y = _TOP_MARGIN + i * row
            rects.append(QRect(x, y, width, height))
        return rects

    def sizeHint(self) -> QSize:  # noqa: N802
        row = int(self._font.pixelSize() * _ROW_HEIGHT_FACTOR)
        return QSize(400, _TOP_MARGIN * 2 + row * max(len(self._labels), 1))

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.setFont(self._font)
        color = QColor("white") if isDarkTheme() else QColor("#202020")
        if not self.isEnabled():
            color.setAlpha(110)
        painter.setPen(color)
        for rect, label in zip(self.item_rects(), self._labels):
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, label)
        painter.end()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() != Qt.MouseButton.LeftButton:
            return
        point = event.position().toPoint()
        hit = first_hit(self.item_rects(), lambda rect: rect.contains(point))
        if hit is not None:
            self.activated.emit(hit)


# -----------------------------------------------------------------------
# Main window
# -----------------------------------------------------------------------

class MainWindow(QWidget):
    """Launcher window: one menu on screen, driven by the navigation engine."""

    def __init__(self, config: Config, store: RegistryStore, launcher: Launcher) -> None:
        super().__init__()
        self._cfg = config
        self._menu = config.menu_config()
        self._store = store
        self._launcher = launcher
        self._engine = NavigationEngine(
            store.load_or_default(self._menu.known_emulators),
            store,
            self._choose_rom_file,
            self._menu,
        )
        self._worker: _LaunchWorker | None = None
        self._init_window()
        self._init_ui()
        self._apply_theme()
        self._render()

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _init_window(self) -> None:
        self.setWindowTitle(t("app.name"))
        width, height = self._cfg.window_size
        self.resize(width, height)

        desktop = QApplication.primaryScreen().availableGeometry()
        self.move((desktop.width() - width) // 2, (desktop.height() - height) // 2)

    def _init_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 12)

        self._canvas = _MenuCanvas(self._cfg.font_size, self)
        self._canvas.activated.connect(self._on_activated)
        root.addWidget(self._canvas, 1)

        self._status = CaptionLabel("", self)
        root.addWidget(self._status, 0, Qt.AlignmentFlag.AlignHCenter)

    def _apply_theme(self) -> None:
        theme_str = self._cfg.theme
        if theme_str == "dark":
            setTheme(Theme.DARK)
        elif theme_str == "light":
            setTheme(Theme.LIGHT)
        else:
            setTheme(Theme.AUTO)

    # ------------------------------------------------------------------
    # Presentation hooks for the engine
    # ------------------------------------------------------------------

    def _choose_rom_file(self) -> str | None:
        path, _ = QFileDialog.getOpenFileName(
            self, t("dialog.choose_rom"), str(Path.home()), t("dialog.rom_filter"),
        )
        if not path:
            return None
        return path.replace("file://", "")

    def _render(self) -> None:
        self._canvas.set_labels(self._engine.labels())

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _on_activated(self, position: int) -> None:
        if self._worker is not None:
            return
        try:
            outcome = self._engine.activate(position)
        except LambdaBlueError:
            logger.exception("Menu transition failed")
            self._abort()
            return
        self._handle(outcome)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        if event.key() == Qt.Key.Key_Escape and self._worker is None:
            self._handle(self._engine.cancel())
            return
        super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if self._worker is not None:
            # The emulator is still running; the menu resumes when it exits.
            event.ignore()
            return
        if not self._engine.finished:
            self._engine.cancel()
        event.accept()

    def _handle(self, outcome: Outcome | None) -> None:
        if outcome is None:
            self._render()
        elif isinstance(outcome, Quit):
            logger.info("Leaving launcher")
            self.close()
            QApplication.quit()
        elif isinstance(outcome, Launch):
            self._start_launch(outcome.emulator)

    # ------------------------------------------------------------------
    # Launch
    # ------------------------------------------------------------------

    def _start_launch(self, emulator: Emulator) -> None:
        self._canvas.setEnabled(False)
        self._status.setText(t("status.launching", name=emulator.name))
        self._worker = _LaunchWorker(self)
        self._worker.set_data(self._launcher, emulator)
        self._worker.done.connect(self._on_launch_done)
        self._worker.error.connect(self._on_launch_error)
        self._worker.start()

    def _on_launch_done(self, code: int) -> None:
        self._cleanup_worker()
        self._engine.restart(self._store.load_or_default(self._menu.known_emulators))
        self._canvas.setEnabled(True)
        self._status.setText("")
        self._render()

    def _on_launch_error(self, message: str) -> None:
        name = self._worker.emulator.name if self._worker is not None else ""
        self._cleanup_worker()
        self._status.setText(t("status.launch_failed", name=name))
        logger.critical("{}", message)
        self._abort()

    def _cleanup_worker(self) -> None:
        if self._worker is not None:
            self._worker.wait()
            self._worker.deleteLater()
            self._worker = None

    def _abort(self) -> None:
        QApplication.exit(1)
