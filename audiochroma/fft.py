"""Overlapping Hamming-windowed frames turned into power spectra."""

from __future__ import annotations

import numpy as np

INT16_MAX = 32767


class FFT:
    """Slices a mono int16 stream into overlapping frames and transforms them.

    Each frame yields ``frame_size // 2 + 1`` power values that are passed to
    ``consumer.consume``.  Samples are scaled by ``1 / INT16_MAX`` and
    weighted by a Hamming window before the transform.
    """

    def __init__(self, frame_size: int, overlap: int, consumer) -> None:
        if frame_size <= 0:
            raise ValueError("frame_size must be positive")
        if not 0 <= overlap < frame_size:
            raise ValueError("overlap must be in the range [0, frame_size)")
        self.frame_size = frame_size
        self.increment = frame_size - overlap
        self.consumer = consumer
        self._window = np.hamming(frame_size) / INT16_MAX
        self._pending = np.zeros(0, dtype=np.int16)

    @property
    def overlap(self) -> int:
        return self.frame_size - self.increment

    def reset(self) -> None:
        """Drop any samples waiting for a complete frame."""
        self._pending = np.zeros(0, dtype=np.int16)

    def consume(self, samples) -> None:
        """Feed mono samples; every completed frame is transformed and passed on."""
        data = np.concatenate([self._pending, np.asarray(samples, dtype=np.int16)])
        start = 0
        while start + self.frame_size <= len(data):
            self.consumer.consume(self._spectrum(data[start : start + self.frame_size]))
            start += self.increment
        self._pending = data[start:].copy()

    def _spectrum(self, frame: np.ndarray) -> np.ndarray:
        transformed = np.fft.rfft(frame * self._window)
        return transformed.real**2 + transformed.imag**2