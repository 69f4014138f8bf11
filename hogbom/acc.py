"""Hogbom CLEAN with a two-pass max-reduction peak search."""

from __future__ import annotations

import numpy as np

from hogbom.golden import HogbomGolden, Peak


class HogbomACC(HogbomGolden):
    """Hogbom CLEAN whose peak search first reduces the absolute maximum.

    The first pass takes the maximum magnitude over the image, starting
    from zero. The second pass records the position of a pixel whose
    magnitude equals that maximum; run in order, the last such pixel wins.
    The peak value reported is the magnitude itself, not the signed pixel
    value, so negative peaks are cleaned as if they were positive.
    """

    def find_peak(self, image) -> Peak:
        """Return the largest magnitude and the last index where it occurs."""
        data = np.asarray(image, dtype=np.float32).ravel()
        if data.size == 0:
            return Peak(0.0, 0)
        magnitudes = np.abs(data)
        max_val = np.float32(max(np.float32(0.0), magnitudes.max()))
        hits = np.flatnonzero(magnitudes == max_val)
        pos = int(hits[-1]) if hits.size else 0
        return Peak(float(max_val), pos)