"""Folding of FFT power spectra into twelve pitch-class (chroma) bands."""

from __future__ import annotations

import math

import numpy as np

NUM_BANDS = 12


def freq_to_octave(freq: float, base: float = 440.0 / 16.0) -> float:
    """Return how many octaves ``freq`` lies above ``base``."""
    return math.log(freq / base) / math.log(2.0)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _freq_to_index(freq: float, frame_size: int, sample_rate: int) -> int:
    return _round_half_away(frame_size * freq / sample_rate)


def _index_to_freq(index: int, frame_size: int, sample_rate: int) -> float:
    return index * sample_rate / frame_size


class Chroma:
    """Sums spectral energy into 12 semitone bands, one vector per frame.

    Each resulting vector of 12 floats is passed to ``consumer.consume``.
    With ``interpolate`` enabled the energy of a bin is split between its
    band and the neighbouring band it lies closest to.
    """

    def __init__(
        self,
        min_freq: int,
        max_freq: int,
        frame_size: int,
        sample_rate: int,
        consumer,
    ) -> None:
        self.interpolate = False
        self.consumer = consumer
        self._min_index = max(1, _freq_to_index(min_freq, frame_size, sample_rate))
        self._max_index = min(
            frame_size // 2, _freq_to_index(max_freq, frame_size, sample_rate)
        )
        notes = []
        for index in range(self._min_index, self._max_index):
            octave = freq_to_octave(_index_to_freq(index, frame_size, sample_rate))
            notes.append(NUM_BANDS * (octave - math.floor(octave)))
        note_values = np.array(notes, dtype=np.float64)
        self._notes = note_values.astype(np.int64)
        self._notes_frac = note_values - self._notes
        self._features = np.zeros(NUM_BANDS, dtype=np.float64)

    def reset(self) -> None:
        """Prepare for a new stream by clearing the last computed vector."""
        self._features.fill(0.0)

    def consume(self, frame) -> None:
        """Turn one power spectrum into a chroma vector and pass it on."""
        energy = np.asarray(frame, dtype=np.float64)[self._min_index : self._max_index]
        notes = self._notes
        if not self.interpolate:
            features = np.bincount(notes, weights=energy, minlength=NUM_BANDS)
        else:
            frac = self._notes_frac
            note2 = notes.copy()
            weight = np.ones_like(frac)
            lower = frac < 0.5
            upper = frac > 0.5
            note2[lower] = (notes[lower] + NUM_BANDS - 1) % NUM_BANDS
            weight[lower] = 0.5 + frac[lower]
            note2[upper] = (notes[upper] + 1) % NUM_BANDS
            weight[upper] = 1.5 - frac[upper]
            features = np.bincount(
                notes, weights=energy * weight, minlength=NUM_BANDS
            ) + np.bincount(note2, weights=energy * (1.0 - weight), minlength=NUM_BANDS)
        self._features[:] = features
        self.consumer.consume(self._features.copy())