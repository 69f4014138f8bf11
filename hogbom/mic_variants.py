"""Alternative peak searches tried for the many-core Hogbom CLEAN."""

from __future__ import annotations

import numpy as np

from hogbom.golden import HogbomGolden, Peak
from hogbom.mic import DEFAULT_LANES, _lane_peak
from hogbom.parameters import CleanParameters

DEFAULT_CHUNKS = 29


def lane_max_peak(image, lanes: int = DEFAULT_LANES) -> Peak:
    """Find the peak with one running maximum per vector lane.

    Pixel ``i`` belongs to lane ``i % lanes``. Each lane keeps its largest
    magnitude and the last position where it occurred. Among the lanes
    sharing the overall maximum the highest-numbered lane wins. The value
    returned is the signed pixel at the winning position.
    """
    if lanes < 1:
        raise ValueError("lanes must be at least 1")
    data = np.asarray(image, dtype=np.float32).ravel()
    return _lane_peak(data, lanes)


def chunked_peak(image, chunks: int = DEFAULT_CHUNKS) -> Peak:
    """Find the peak by reducing contiguous chunks in order.

    The image is split into ``chunks`` contiguous pieces. Each piece keeps
    its first pixel of strictly largest magnitude, starting from zero; the
    pieces are merged in order and a later piece replaces the best only
    when its magnitude is strictly larger. NaN pixels never win.
    """
    if chunks < 1:
        raise ValueError("chunks must be at least 1")
    data = np.asarray(image, dtype=np.float32).ravel()
    magnitudes = np.abs(data)
    magnitudes = np.where(np.isnan(magnitudes), np.float32(0.0), magnitudes)

    size = data.size
    bounds = [(k * size) // chunks for k in range(chunks + 1)]
    best = Peak(0.0, 0)
    best_mag = np.float32(0.0)
    for lo, hi in zip(bounds, bounds[1:]):
        if hi <= lo:
            continue
        local = lo + int(np.argmax(magnitudes[lo:hi]))
        if magnitudes[local] > best_mag:
            best_mag = magnitudes[local]
            best = Peak(float(data[local]), local)
    return best


class LaneMIC(HogbomGolden):
    """Hogbom CLEAN using :func:`lane_max_peak` for its peak search."""

    def __init__(
        self,
        parameters: CleanParameters | None = None,
        lanes: int = DEFAULT_LANES,
    ) -> None:
        super().__init__(parameters)
        if lanes < 1:
            raise ValueError("lanes must be at least 1")
        self.lanes = lanes

    def find_peak(self, image) -> Peak:
        """Return the signed value and index of the peak chosen by the lanes."""
        return lane_max_peak(image, self.lanes)


class ChunkedMIC(HogbomGolden):
    """Hogbom CLEAN using :func:`chunked_peak` for its peak search."""

    def __init__(
        self,
        parameters: CleanParameters | None = None,
        chunks: int = DEFAULT_CHUNKS,
    ) -> None:
        super().__init__(parameters)
        if chunks < 1:
            raise ValueError("chunks must be at least 1")
        self.chunks = chunks

    def find_peak(self, image) -> Peak:
        """Return the signed value and index of the first strictly largest peak."""
        return chunked_peak(image, self.chunks)