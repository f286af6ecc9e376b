"""Audio level metering helpers."""

from __future__ import annotations

import math
from typing import Union

import numpy as np


PCM16_DTYPE = np.dtype("<i2")
SAMPLE_WIDTH = PCM16_DTYPE.itemsize

Chunk = Union[bytes, bytearray, memoryview]


def decode_pcm16(chunk: Chunk) -> np.ndarray:
    """Decode signed 16-bit little-endian samples, ignoring a dangling trailing byte."""
    usable = len(chunk) - len(chunk) % SAMPLE_WIDTH
    if usable <= 0:
        return np.zeros(0, dtype=PCM16_DTYPE)
    return np.frombuffer(chunk, dtype=PCM16_DTYPE, count=usable // SAMPLE_WIDTH)


def rms_amplitude(samples: np.ndarray) -> float:
    """Return root-mean-square amplitude in raw sample units."""
    if samples.size == 0:
        return 0.0
    wide = samples.astype(np.float64)
    mean_square = float(np.dot(wide, wide)) / samples.size
    return math.sqrt(mean_square)


def chunk_loudness(chunk: Chunk) -> int:
    """Return the loudness of one PCM chunk on the 20*log10(rms) scale.

    RMS values at or below 1 map to 0, so silence and empty chunks read 0.
    The result is rounded half-up and never negative.
    """
    rms = rms_amplitude(decode_pcm16(chunk))
    decibels = 20.0 * math.log10(max(rms, 1.0))
    return max(0, int(math.floor(decibels + 0.5)))
