import math

import numpy as np
import pytest

from audiochroma.fft import FFT

INT16_MAX = 32767
NFRAMES = 3
FRAME_SIZE = 32
OVERLAP = 8


class Collector:
    def __init__(self):
        self.frames = []

    def consume(self, frame):
        self.frames.append(np.array(frame))


def feed_in_chunks(fft, data, chunk_size=100):
    for start in range(0, len(data), chunk_size):
        fft.consume(data[start : start + chunk_size])


def input_length():
    return FRAME_SIZE + (NFRAMES - 1) * (FRAME_SIZE - OVERLAP)


def sine_input():
    sample_rate = 1000
    freq = float(7 * (sample_rate // 2) // (FRAME_SIZE // 2))
    i = np.arange(input_length())
    return (INT16_MAX * np.sin(i * freq * 2.0 * math.pi / sample_rate)).astype(np.int16)


SINE_SPECTRUM = [
    2.87005e-05, 0.00011901, 0.00029869, 0.000667172, 0.00166813, 0.00605612,
    0.228737, 0.494486, 0.210444, 0.00385322, 0.00194379, 0.00124616,
    0.000903851, 0.000715237, 0.000605707, 0.000551375, 0.000534304,
]

DC_SPECTRUM = [
    0.494691, 0.219547, 0.00488079, 0.00178991, 0.000939219, 0.000576082,
    0.000385808, 0.000272904, 0.000199905, 0.000149572, 0.000112947,
    8.5041e-05, 6.28312e-05, 4.4391e-05, 2.83757e-05, 1.38507e-05, 0,
]


def check_spectrum(frames, expected):
    assert len(frames) == NFRAMES
    for frame in frames:
        assert len(frame) == len(expected)
        magnitudes = np.sqrt(frame) / len(frame)
        assert magnitudes == pytest.approx(expected, abs=0.001)


def test_sine():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    assert fft.frame_size == FRAME_SIZE
    assert fft.overlap == OVERLAP
    feed_in_chunks(fft, sine_input())
    check_spectrum(collector.frames, SINE_SPECTRUM)


def test_dc():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    assert fft.frame_size == FRAME_SIZE
    assert fft.overlap == OVERLAP
    data = np.full(input_length(), int(INT16_MAX * 0.5), dtype=np.int16)
    feed_in_chunks(fft, data)
    check_spectrum(collector.frames, DC_SPECTRUM)


def test_increment():
    fft = FFT(FRAME_SIZE, OVERLAP, Collector())
    assert fft.increment == FRAME_SIZE - OVERLAP


def test_chunking_does_not_change_frames():
    data = sine_input()
    whole = Collector()
    FFT(FRAME_SIZE, OVERLAP, whole).consume(data)
    pieces = Collector()
    feed_in_chunks(FFT(FRAME_SIZE, OVERLAP, pieces), data, chunk_size=7)
    assert len(whole.frames) == len(pieces.frames)
    for a, b in zip(whole.frames, pieces.frames):
        assert np.allclose(a, b)


def test_incomplete_frame_is_held_back():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    fft.consume(np.ones(FRAME_SIZE - 1, dtype=np.int16))
    assert collector.frames == []
    fft.consume(np.ones(1, dtype=np.int16))
    assert len(collector.frames) == 1


def test_reset_drops_pending_samples():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    fft.consume(np.ones(FRAME_SIZE - 1, dtype=np.int16))
    fft.reset()
    fft.consume(np.ones(1, dtype=np.int16))
    assert collector.frames == []


def test_silence_has_zero_power():
    collector = Collector()
    fft = FFT(FRAME_SIZE, OVERLAP, collector)
    fft.consume(np.zeros(FRAME_SIZE, dtype=np.int16))
    assert np.all(collector.frames[0] == 0.0)


@pytest.mark.parametrize("frame_size, overlap", [(0, 0), (32, 32), (32, -1)])
def test_invalid_configuration(frame_size, overlap):
    with pytest.raises(ValueError):
        FFT(frame_size, overlap, Collector())