"""Hogbom CLEAN with the peak search split into independent chunks."""

from __future__ import annotations

import os
from typing import Iterator

import numpy as np

from hogbom.golden import HogbomGolden, Peak
from hogbom.parameters import CleanParameters


class HogbomOMP(HogbomGolden):
    """Hogbom CLEAN whose peak search reduces per-chunk maxima.

    The image is divided into ``threads`` contiguous chunks, the way a
    static schedule would hand them out. Each chunk finds its own
    first largest-magnitude pixel. The chunk results are then merged in
    order, and a later chunk replaces the current best only when its
    magnitude is strictly larger.
    """

    def __init__(
        self,
        parameters: CleanParameters | None = None,
        threads: int | None = None,
    ) -> None:
        super().__init__(parameters)
        if threads is None:
            threads = os.cpu_count() or 1
        if threads < 1:
            raise ValueError("threads must be at least 1")
        self.threads = threads

    def _chunks(self, data: np.ndarray) -> Iterator[tuple[int, np.ndarray]]:
        size = data.size
        bounds = [(k * size) // self.threads for k in range(self.threads + 1)]
        for lo, hi in zip(bounds, bounds[1:]):
            if hi > lo:
                yield lo, data[lo:hi]

    def find_peak(self, image) -> Peak:
        """Return the signed value and index of the first largest-magnitude pixel."""
        data = np.asarray(image, dtype=np.float32).ravel()
        best = Peak(0.0, 0)
        for start, chunk in self._chunks(data):
            local = int(np.argmax(np.abs(chunk)))
            value = float(chunk[local])
            if abs(value) > abs(best.value):
                best = Peak(value, start + local)
        return best