import numpy as np
import pytest

from soundmeter.utils.levels_meter import chunk_loudness, decode_pcm16, rms_amplitude


def _pcm(samples):
    return np.asarray(samples, dtype="<i2").tobytes()


def test_reference_chunk_reads_80():
    assert chunk_loudness(b"\x10\x27\xf0\xd8") == 80


def test_empty_chunk_reads_zero():
    assert chunk_loudness(b"") == 0


def test_single_dangling_byte_reads_zero():
    assert chunk_loudness(b"\x7f") == 0


@pytest.mark.parametrize("count", [1, 2, 160, 1600])
def test_silence_reads_zero(count):
    assert chunk_loudness(_pcm([0] * count)) == 0


def test_unit_amplitude_reads_zero():
    assert chunk_loudness(_pcm([1, -1, 1, -1])) == 0


def test_trailing_byte_is_ignored():
    chunk = _pcm([1200, -3400, 560])
    assert chunk_loudness(chunk + b"\x7f") == chunk_loudness(chunk)


def test_decode_drops_trailing_byte():
    samples = decode_pcm16(b"\x10\x27\xf0\xd8\x01")
    assert samples.tolist() == [10000, -10000]


def test_accepts_bytearray_and_memoryview():
    chunk = b"\x10\x27\xf0\xd8"
    assert chunk_loudness(bytearray(chunk)) == 80
    assert chunk_loudness(memoryview(chunk)) == 80


def test_full_scale_does_not_overflow():
    # 16000 samples at the int16 extremes would overflow a 32-bit accumulator.
    chunk = _pcm([32767, -32768] * 8000)
    assert chunk_loudness(chunk) == 90


def test_rounds_to_nearest_integer():
    # rms 3 -> 9.54
    assert chunk_loudness(_pcm([3, -3])) == 10
    # rms 1000 -> 60.0
    assert chunk_loudness(_pcm([1000])) == 60


def test_rms_amplitude_of_empty_samples_is_zero():
    assert rms_amplitude(decode_pcm16(b"")) == 0.0


def test_deterministic():
    rng = np.random.default_rng(1234)
    chunk = _pcm(rng.integers(-32768, 32767, size=800))
    assert chunk_loudness(chunk) == chunk_loudness(bytes(chunk))


def test_output_is_non_negative_int():
    rng = np.random.default_rng(7)
    for size in (0, 1, 3, 64, 511):
        chunk = rng.integers(0, 255, size=size, endpoint=True, dtype=np.uint8).tobytes()
        level = chunk_loudness(chunk)
        assert isinstance(level, int)
        assert level >= 0


@pytest.mark.parametrize("factor", [2, 3, 10, 100])
def test_scaling_samples_up_never_lowers_loudness(factor):
    base = [100, -200, 300, -50]
    scaled = [s * factor for s in base]
    assert chunk_loudness(_pcm(scaled)) >= chunk_loudness(_pcm(base))
