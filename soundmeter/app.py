"""Main application orchestration for SoundMeter."""

from __future__ import annotations

import signal
import sys

from PyQt6 import QtCore, QtWidgets

from soundmeter.audio import AudioRecorder, MicrophoneError
from soundmeter.config import AppConfig, load_config
from soundmeter.meter import MeterReading, MeterState
from soundmeter.session import MeterSession
from soundmeter.ui import MeterWindow
from soundmeter.utils.logger import get_logger, setup_logging


logger = get_logger(__name__)


class SoundMeterController(QtCore.QObject):
    """Glue between the microphone, the measurement session, and the window."""

    reading_changed = QtCore.pyqtSignal(object)

    def __init__(self, app: QtWidgets.QApplication, config: AppConfig) -> None:
        super().__init__()
        self._app = app
        self._config = config

        self._session = MeterSession(
            MeterState(scale_max=config.scale_max),
            listener=self._handle_reading,
        )
        self._audio = AudioRecorder(config=config, chunk_callback=self._session.handle_chunk)
        self._session.attach(self._audio)

        self._window = MeterWindow(config, on_start=self.start_measuring, on_stop=self.stop_measuring)
        # Readings arrive on the audio thread; the queued signal moves them to the GUI thread.
        self.reading_changed.connect(self._window.show_reading)

    def show(self) -> None:
        self._window.show()

    def start_measuring(self) -> None:
        logger.info("Start requested.")
        try:
            started = self._session.start()
        except MicrophoneError as exc:
            logger.exception("Failed to start audio capture: {}", exc)
            self._window.show_status("Audio input error")
            return
        if not started:
            self._window.show_status("No microphone available")
            return
        self._window.set_recording(True)
        self._window.show_reading(self._session.meter.snapshot())

    def stop_measuring(self) -> None:
        logger.info("Stop requested.")
        self._session.stop()
        self._window.set_recording(False)

    def quit(self) -> None:
        """Gracefully shut down."""
        logger.info("Shutting down SoundMeter.")
        self._session.stop()
        self._app.quit()

    def _handle_reading(self, reading: MeterReading) -> None:
        self.reading_changed.emit(reading)


def _install_signal_handlers(controller: SoundMeterController) -> None:
    signal.signal(signal.SIGINT, lambda *_: controller.quit())
    signal.signal(signal.SIGTERM, lambda *_: controller.quit())


def main() -> None:
    """Launch the SoundMeter desktop app."""
    config = load_config()
    setup_logging(config.resolve_log_level())

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("SoundMeter")

    controller = SoundMeterController(app, config)
    _install_signal_handlers(controller)
    controller.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
