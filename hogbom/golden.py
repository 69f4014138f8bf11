"""Reference serial implementation of the Hogbom CLEAN algorithm."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

from hogbom.parameters import CleanParameters

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """A pixel position in a row-major image."""

    x: int
    y: int


@dataclass(frozen=True)
class Peak:
    """The signed value and flat index of the largest-magnitude pixel."""

    value: float
    pos: int


@dataclass
class CleanResult:
    """Outcome of a deconvolution."""

    model: np.ndarray
    residual: np.ndarray
    psf_peak: Peak
    iterations: int
    converged: bool


def idx_to_pos(idx: int, width: int) -> Position:
    """Convert a flat index into an (x, y) position."""
    return Position(idx % width, idx // width)


def pos_to_idx(width: int, pos: Position) -> int:
    """Convert an (x, y) position into a flat index."""
    return pos.y * width + pos.x


def subtract_psf(
    psf,
    psf_width: int,
    residual: np.ndarray,
    residual_width: int,
    peak_pos: int,
    psf_peak_pos: int,
    abs_peak_val: float,
    gain: float,
) -> np.ndarray:
    """Subtract the scaled PSF, centred on ``peak_pos``, from ``residual`` in place."""
    if not isinstance(residual, np.ndarray):
        raise TypeError("residual must be a numpy array")

    r = idx_to_pos(peak_pos, residual_width)
    p = idx_to_pos(psf_peak_pos, psf_width)

    diffx = r.x - p.x
    # The row offset deliberately uses the PSF peak column; all variants share it.
    diffy = r.y - p.x

    startx = max(0, r.x - p.x)
    starty = max(0, r.y - p.y)
    stopx = min(residual_width - 1, r.x + (psf_width - p.x - 1))
    stopy = min(residual_width - 1, r.y + (psf_width - p.y - 1))
    if startx > stopx or starty > stopy:
        return residual

    psf2d = np.asarray(psf, dtype=np.float32).reshape(-1, psf_width)
    res2d = residual.reshape(-1, residual_width)
    if not np.shares_memory(res2d, residual):
        raise ValueError("residual must be contiguous")

    row_lo, row_hi = starty - diffy, stopy - diffy
    col_lo, col_hi = startx - diffx, stopx - diffx
    if row_lo < 0 or col_lo < 0 or row_hi >= psf2d.shape[0] or col_hi >= psf_width:
        raise IndexError("PSF window falls outside the PSF image")

    scale = np.float32(gain) * np.float32(abs_peak_val)
    res2d[starty : stopy + 1, startx : stopx + 1] -= (
        scale * psf2d[row_lo : row_hi + 1, col_lo : col_hi + 1]
    )
    return residual


class HogbomGolden:
    """Serial Hogbom CLEAN, used as the reference for other implementations."""

    def __init__(self, parameters: CleanParameters | None = None) -> None:
        self.parameters = parameters or CleanParameters()

    def find_peak(self, image) -> Peak:
        """Return the first pixel with the largest absolute value."""
        data = np.asarray(image, dtype=np.float32).ravel()
        if data.size == 0:
            return Peak(0.0, 0)
        pos = int(np.argmax(np.abs(data)))
        value = float(data[pos])
        if value == 0.0:
            return Peak(0.0, 0)
        return Peak(value, pos)

    def deconvolve(
        self,
        dirty: Sequence[float] | np.ndarray,
        dirty_width: int,
        psf: Sequence[float] | np.ndarray,
        psf_width: int,
    ) -> CleanResult:
        """Clean ``dirty`` with ``psf`` and return the model and residual."""
        params = self.parameters
        residual = np.array(dirty, dtype=np.float32).ravel()
        psf_data = np.asarray(psf, dtype=np.float32).ravel()
        model = np.zeros_like(residual)

        psf_peak = self.find_peak(psf_data)
        psf_loc = idx_to_pos(psf_peak.pos, psf_width)
        logger.info(
            "Found peak of PSF: Maximum = %s at location %d,%d",
            psf_peak.value, psf_loc.x, psf_loc.y,
        )

        gain = np.float32(params.gain)
        threshold = np.float32(params.threshold)
        iterations = 0
        converged = False
        for _ in range(params.niters):
            peak = self.find_peak(residual)
            if abs(np.float32(peak.value)) < threshold:
                logger.info("Reached stopping threshold")
                converged = True
                break
            model[peak.pos] += np.float32(peak.value) * gain
            subtract_psf(
                psf_data, psf_width, residual, dirty_width,
                peak.pos, psf_peak.pos, peak.value, params.gain,
            )
            iterations += 1

        return CleanResult(model, residual, psf_peak, iterations, converged)