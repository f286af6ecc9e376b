"""Meter window built with PyQt6."""

from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from soundmeter.config import AppConfig
from soundmeter.meter import MeterReading


class LevelBar(QtWidgets.QWidget):
    """Vertical bar whose filled height follows the meter's fill ratio."""

    BAR_WIDTH = 60
    BORDER_WIDTH = 2.0
    CORNER_RADIUS = 10.0

    def __init__(
        self,
        extent_px: int = 200,
        animation_ms: int = 100,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._extent_px = float(extent_px)
        self.setFixedSize(self.BAR_WIDTH, extent_px)

        self._fill_height = 0.0
        self._animation = QtCore.QPropertyAnimation(self, b"fillHeight", self)
        self._animation.setDuration(animation_ms)
        self._animation.setEasingCurve(QtCore.QEasingCurve.Type.Linear)

    def set_ratio(self, ratio: float) -> None:
        """Animate the fill towards ``ratio`` of the bar's extent."""
        target = max(0.0, min(1.0, ratio)) * self._extent_px
        self._animation.stop()
        self._animation.setStartValue(self._fill_height)
        self._animation.setEndValue(target)
        self._animation.start()

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: D401
        _ = event
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)

        inset = self.BORDER_WIDTH / 2.0
        frame_rect = QtCore.QRectF(self.rect()).adjusted(inset, inset, -inset, -inset)
        painter.setPen(QtGui.QPen(QtGui.QColor("#333333"), self.BORDER_WIDTH))
        painter.setBrush(QtGui.QColor("#DDDDDD"))
        painter.drawRoundedRect(frame_rect, self.CORNER_RADIUS, self.CORNER_RADIUS)

        if self._fill_height <= 0.5:
            return
        height = min(self._fill_height, frame_rect.height())
        fill_rect = QtCore.QRectF(
            frame_rect.left(),
            frame_rect.bottom() - height,
            frame_rect.width(),
            height,
        )
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        painter.setBrush(QtGui.QColor("#F44336"))
        radius = min(self.CORNER_RADIUS, height / 2.0)
        painter.drawRoundedRect(fill_rect, radius, radius)

    def getFillHeight(self) -> float:
        return self._fill_height

    def setFillHeight(self, value: float) -> None:
        self._fill_height = max(0.0, min(self._extent_px, float(value)))
        self.update()

    fillHeight = QtCore.pyqtProperty(float, fget=getFillHeight, fset=setFillHeight)


class MeterWindow(QtWidgets.QWidget):
    """Main window: current level, peak level, animated bar and a Start/Stop button."""

    def __init__(
        self,
        config: AppConfig,
        on_start: Callable[[], None],
        on_stop: Callable[[], None],
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Sound Level Meter")
        self._on_start = on_start
        self._on_stop = on_stop
        self._recording = False

        palette = self.palette()
        palette.setColor(QtGui.QPalette.ColorRole.Window, QtGui.QColor("#f5f5f5"))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(36, 32, 36, 32)
        layout.setSpacing(10)
        layout.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)

        title = QtWidgets.QLabel("Sound Level Meter")
        title.setStyleSheet("font-size: 28px; font-weight: bold; margin-bottom: 10px;")
        self._level_label = QtWidgets.QLabel()
        self._level_label.setStyleSheet("font-size: 48px;")
        self._max_label = QtWidgets.QLabel()
        self._max_label.setStyleSheet("font-size: 20px; margin-bottom: 10px;")
        self._status_label = QtWidgets.QLabel("")
        self._status_label.setStyleSheet("color: #b3261e; font-size: 12px;")

        self._bar = LevelBar(config.meter_height_px, config.animation_ms)

        self._toggle = QtWidgets.QPushButton("Start")
        self._toggle.setCursor(QtGui.QCursor(QtCore.Qt.CursorShape.PointingHandCursor))
        self._toggle.setMinimumWidth(120)
        self._toggle.clicked.connect(self._handle_toggle)

        for widget in (title, self._level_label, self._max_label, self._bar, self._toggle, self._status_label):
            layout.addWidget(widget, 0, QtCore.Qt.AlignmentFlag.AlignHCenter)

        self.show_reading(MeterReading(current_level=0, max_level=0, fill_ratio=0.0))

    def show_reading(self, reading: MeterReading) -> None:
        """Render the latest meter values."""
        self._level_label.setText(f"{reading.current_level} dB")
        self._max_label.setText(f"Max: {reading.max_level} dB")
        self._bar.set_ratio(reading.fill_ratio)

    def set_recording(self, recording: bool) -> None:
        self._recording = recording
        self._toggle.setText("Stop" if recording else "Start")
        if recording:
            self._status_label.clear()

    def show_status(self, message: str) -> None:
        self._status_label.setText(message)

    def _handle_toggle(self) -> None:
        if self._recording:
            self._on_stop()
        else:
            self._on_start()

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if self._recording:
            self._on_stop()
        super().closeEvent(event)
