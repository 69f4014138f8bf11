"""Hogbom CLEAN with vector-lane style peak searches."""

from __future__ import annotations

import numpy as np

from hogbom.golden import HogbomGolden, Peak
from hogbom.parameters import CleanParameters

DEFAULT_LANES = 16


def block_max_peak(image, block: int = DEFAULT_LANES) -> Peak:
    """Find the peak magnitude by scanning fixed-size blocks in order.

    Each block contributes its largest magnitude; a block replaces the
    current best only when that magnitude is strictly larger. Within the
    winning block the last pixel holding the magnitude is reported. The
    value returned is the magnitude, not the signed pixel value.
    """
    if block < 1:
        raise ValueError("block must be at least 1")
    data = np.asarray(image, dtype=np.float32).ravel()
    if data.size == 0:
        return Peak(0.0, 0)
    magnitudes = np.abs(data)
    starts = np.arange(0, data.size, block)
    block_max = np.maximum.reduceat(magnitudes, starts)
    best = block_max.max()
    if not best > np.float32(0.0):
        return Peak(0.0, 0)
    start = int(starts[int(np.argmax(block_max == best))])
    window = magnitudes[start : start + block]
    offset = int(np.flatnonzero(window == best)[-1])
    return Peak(float(best), start + offset)


def _lane_peak(data: np.ndarray, lanes: int) -> Peak:
    """Per-lane running maxima merged by taking the highest winning lane."""
    if data.size == 0:
        return Peak(0.0, 0)
    magnitudes = np.abs(data)
    zero = np.float32(0.0)

    lane_results: list[tuple[np.float32, int]] = []
    for lane in range(lanes):
        values = magnitudes[lane::lanes]
        if values.size == 0:
            lane_results.append((zero, 0))
            continue
        lane_max = max(zero, values.max())
        hits = np.flatnonzero(values == lane_max)
        pos = lane + lanes * int(hits[-1]) if hits.size else 0
        lane_results.append((lane_max, pos))

    overall = max(value for value, _ in lane_results)
    winner = max(
        lane for lane, (value, _) in enumerate(lane_results) if value == overall
    )
    pos = lane_results[winner][1]
    return Peak(float(data[pos]), pos)


class HogbomMIC(HogbomGolden):
    """Hogbom CLEAN whose peak search tracks a running maximum per lane.

    Pixel ``i`` belongs to lane ``i % lanes``. Each lane keeps the largest
    magnitude it has seen together with the last position where that
    magnitude occurred. The lane maxima are then compared and, among the
    lanes that share the overall maximum, the highest-numbered lane wins.
    The reported value is the signed pixel at the winning position.
    """

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
        data = np.asarray(image, dtype=np.float32).ravel()
        return _lane_peak(data, self.lanes)