"""FIR smoothing of consecutive chroma vectors."""

from __future__ import annotations

from collections import deque

import numpy as np

MAX_LENGTH = 8


class ChromaFilter:
    """Weights the last ``len(coefficients)`` chroma vectors and sums them.

    The first coefficient applies to the oldest vector.  Nothing is emitted
    until enough vectors have arrived to fill the filter.
    """

    def __init__(self, coefficients, consumer) -> None:
        coeffs = np.asarray(coefficients, dtype=np.float64)
        if not 1 <= len(coeffs) <= MAX_LENGTH:
            raise ValueError(f"filter needs between 1 and {MAX_LENGTH} coefficients")
        self.coefficients = coeffs
        self.consumer = consumer
        self._history: deque[np.ndarray] = deque(maxlen=len(coeffs))

    def reset(self) -> None:
        """Forget the buffered vectors."""
        self._history.clear()

    def consume(self, features) -> None:
        """Buffer one chroma vector and emit the filtered result when ready."""
        self._history.append(np.array(features, dtype=np.float64))
        if len(self._history) == len(self.coefficients):
            self.consumer.consume(self.coefficients @ np.stack(self._history))