"""Averaging of consecutive chroma vectors into a lower frame rate."""

from __future__ import annotations

import numpy as np


class ChromaResampler:
    """Emits the mean of every ``factor`` consecutive chroma vectors."""

    def __init__(self, factor: int, consumer) -> None:
        if factor <= 0:
            raise ValueError("factor must be positive")
        self.factor = factor
        self.consumer = consumer
        self._sum = np.zeros(12, dtype=np.float64)
        self._count = 0

    def reset(self) -> None:
        """Discard any partially accumulated vectors."""
        self._sum = np.zeros(12, dtype=np.float64)
        self._count = 0

    def consume(self, features) -> None:
        """Accumulate one vector and emit the average once ``factor`` are in."""
        self._sum += np.asarray(features, dtype=np.float64)[:12]
        self._count += 1
        if self._count == self.factor:
            result = self._sum / self.factor
            self.reset()
            self.consumer.consume(result)