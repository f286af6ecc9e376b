"""Measurement session: capture chunks, estimate loudness, update the meter."""

from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol

from soundmeter.meter import MeterReading, MeterState
from soundmeter.utils.levels_meter import Chunk, chunk_loudness
from soundmeter.utils.logger import get_logger


logger = get_logger(__name__)

ReadingListener = Callable[[MeterReading], None]


class ChunkSource(Protocol):
    """Anything that can start and stop pushing PCM chunks."""

    @property
    def is_running(self) -> bool: ...

    def has_input_device(self) -> bool: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class MeterSession:
    """Own the meter and feed it one chunk at a time from a capture source.

    The source is attached after construction because the recorder needs
    ``handle_chunk`` as its callback.
    """

    def __init__(self, meter: MeterState, listener: Optional[ReadingListener] = None) -> None:
        self._meter = meter
        self._listener = listener
        self._source: Optional[ChunkSource] = None
        self._ingest_lock = threading.Lock()

    @property
    def meter(self) -> MeterState:
        return self._meter

    @property
    def is_running(self) -> bool:
        return self._source is not None and self._source.is_running

    def attach(self, source: ChunkSource) -> None:
        self._source = source

    def start(self) -> bool:
        """Reset the peak and begin capture. Returns False when no microphone is available."""
        if self._source is None:
            raise RuntimeError("MeterSession.start called before a capture source was attached")
        if self._source.is_running:
            return True
        if not self._source.has_input_device():
            logger.warning("No microphone available; measurement not started.")
            return False
        self._meter.reset()
        self._source.start()
        logger.info("Measurement session started.")
        return True

    def stop(self) -> None:
        if self._source is None or not self._source.is_running:
            return
        self._source.stop()
        logger.info("Measurement session stopped (peak {} dB).", self._meter.max_level)

    def handle_chunk(self, chunk: Chunk) -> MeterReading:
        """Estimate one chunk and push the new reading to the listener."""
        with self._ingest_lock:
            reading = self._meter.ingest(chunk_loudness(chunk))
            if self._listener is not None:
                self._listener(reading)
        return reading
