"""Down-mixing and rate conversion of incoming PCM audio."""

from __future__ import annotations

import logging

import numpy as np

from audiochroma.resample import Resampler

logger = logging.getLogger(__name__)

MIN_SAMPLE_RATE = 1000
MAX_BUFFER_SIZE = 1024 * 32

RESAMPLE_FILTER_LENGTH = 16
RESAMPLE_PHASE_SHIFT = 8
RESAMPLE_LINEAR = False
RESAMPLE_CUTOFF = 0.8


def _trunc_div(values: np.ndarray, divisor: int) -> np.ndarray:
    return np.sign(values) * (np.abs(values) // divisor)


class AudioProcessor:
    """Mixes interleaved audio down to mono at ``target_sample_rate``.

    Processed blocks of int16 samples are handed to ``consumer.consume``.
    """

    def __init__(self, sample_rate: int, consumer) -> None:
        self.target_sample_rate = sample_rate
        self.consumer = consumer
        self.num_channels: int | None = None
        self._buffer = np.zeros(MAX_BUFFER_SIZE, dtype=np.int16)
        self._offset = 0
        self._resampler: Resampler | None = None

    def reset(self, sample_rate: int, num_channels: int) -> None:
        """Prepare for a new audio stream."""
        if num_channels <= 0:
            raise ValueError("no audio channels")
        if sample_rate <= MIN_SAMPLE_RATE:
            raise ValueError(
                f"sample rate less than {MIN_SAMPLE_RATE} ({sample_rate})"
            )
        self._offset = 0
        self._resampler = None
        if sample_rate != self.target_sample_rate:
            self._resampler = Resampler(
                self.target_sample_rate,
                sample_rate,
                RESAMPLE_FILTER_LENGTH,
                RESAMPLE_PHASE_SHIFT,
                RESAMPLE_LINEAR,
                RESAMPLE_CUTOFF,
            )
        self.num_channels = num_channels

    def _downmix(self, samples) -> np.ndarray:
        data = np.asarray(samples, dtype=np.int32)
        channels = self.num_channels
        if channels == 1:
            return data.astype(np.int16)
        frames = data.reshape(-1, channels).sum(axis=1)
        return _trunc_div(frames, channels).astype(np.int16)

    def consume(self, samples) -> None:
        """Process a chunk of interleaved samples from the audio stream."""
        if self.num_channels is None:
            raise RuntimeError("reset() must be called before consume()")
        if len(samples) % self.num_channels:
            raise ValueError("sample count is not a multiple of the channel count")
        mono = self._downmix(samples)
        position = 0
        while position < len(mono):
            length = min(len(mono) - position, MAX_BUFFER_SIZE - self._offset)
            self._buffer[self._offset : self._offset + length] = mono[
                position : position + length
            ]
            self._offset += length
            position += length
            if self._offset == MAX_BUFFER_SIZE:
                self._resample()
                if self._offset == MAX_BUFFER_SIZE:
                    logger.debug("resampling failed to drain the buffer")
                    return

    def flush(self) -> None:
        """Process any buffered input and clear the buffer."""
        if self._offset:
            self._resample()

    def _resample(self) -> None:
        if self._resampler is None:
            self.consumer.consume(self._buffer[: self._offset].copy())
            self._offset = 0
            return
        output, consumed = self._resampler.resample(
            self._buffer[: self._offset], MAX_BUFFER_SIZE, True
        )
        self.consumer.consume(output)
        remaining = self._offset - consumed
        if remaining > 0:
            self._buffer[:remaining] = self._buffer[consumed : self._offset].copy()
        elif remaining < 0:
            logger.debug("resampling overread the input buffer")
            remaining = 0
        self._offset = remaining