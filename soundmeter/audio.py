"""Audio capture utilities."""

from __future__ import annotations

import threading
from typing import Callable, List, Optional

import sounddevice as sd

from soundmeter.config import AppConfig
from soundmeter.utils.logger import get_logger


logger = get_logger(__name__)


class MicrophoneError(RuntimeError):
    """Raised when the input stream cannot be opened."""


def list_microphones() -> List[str]:
    """Return a list of input-capable device names."""
    try:
        devices = sd.query_devices()
    except sd.PortAudioError as exc:
        logger.bind(error=str(exc)).warning("Failed to query audio devices.")
        return []
    names: List[str] = []
    for device in devices:
        if device.get("max_input_channels", 0) > 0:
            names.append(device["name"])
    return names


def resolve_device(device_name: Optional[str]) -> Optional[int]:
    """Translate a device name to a sounddevice index."""
    if device_name is None:
        return None
    try:
        devices = sd.query_devices()
    except sd.PortAudioError as exc:
        logger.bind(error=str(exc)).warning("Failed to query audio devices while resolving {}", device_name)
        return None
    for idx, device in enumerate(devices):
        if device.get("name") == device_name and device.get("max_input_channels", 0) > 0:
            return idx
    logger.warning("Input device {!r} not found, using the default device", device_name)
    return None


ChunkCallback = Callable[[bytes], None]


class AudioRecorder:
    """Push raw int16 PCM chunks from the microphone to a callback."""

    def __init__(self, config: AppConfig, chunk_callback: ChunkCallback) -> None:
        self._config = config
        self._chunk_callback = chunk_callback
        self._lock = threading.RLock()
        self._stream: Optional[sd.RawInputStream] = None
        self._chunks_delivered = 0

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stream is not None

    @property
    def chunks_delivered(self) -> int:
        return self._chunks_delivered

    @property
    def blocksize(self) -> int:
        return max(int(self._config.sample_rate * self._config.block_duration_ms / 1000), 80)

    def has_input_device(self) -> bool:
        """Return True when at least one microphone is available."""
        return bool(list_microphones())

    def start(self) -> None:
        """Begin streaming audio from the configured device."""
        with self._lock:
            if self._stream:
                logger.warning("AudioRecorder.start called while already running.")
                return
            self._chunks_delivered = 0

            device_index = resolve_device(self._config.mic_device_name)
            logger.info(
                "Starting audio stream device={} index={} sample_rate={} blocksize={}",
                self._config.mic_device_name or "default",
                device_index,
                self._config.sample_rate,
                self.blocksize,
            )
            try:
                self._stream = sd.RawInputStream(
                    device=device_index,
                    channels=1,
                    samplerate=self._config.sample_rate,
                    blocksize=self.blocksize,
                    dtype="int16",
                    callback=self._callback,
                )
                self._stream.start()
            except Exception as exc:
                logger.bind(error=str(exc)).exception("Failed to start audio stream")
                self._stream = None
                raise MicrophoneError("Microphone failed to start") from exc

    def stop(self) -> None:
        """Stop streaming and close resources."""
        with self._lock:
            if not self._stream:
                return
            try:
                self._stream.stop()
            finally:
                self._stream.close()
                self._stream = None
            # The callback has stopped firing once the stream is closed, so the count is final.
            logger.info("Audio stream stopped after {} chunks", self._chunks_delivered)

    def _callback(self, indata, frames, time_info, status) -> None:
        # Runs on the PortAudio thread; stop() holds the lock while waiting for it to finish.
        if status:
            logger.warning("Audio stream status: {}", status)
        self._chunks_delivered += 1
        self._chunk_callback(bytes(indata))
