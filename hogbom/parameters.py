"""Configuration of a Hogbom CLEAN run."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DIRTY_FILE = "dirty.img"
DEFAULT_PSF_FILE = "psf.img"
DEFAULT_NITERS = 1000
DEFAULT_GAIN = 0.1
DEFAULT_THRESHOLD = 0.00001


@dataclass(frozen=True)
class CleanParameters:
    """Input file names and loop controls for a deconvolution.

    ``niters`` bounds the number of minor cycles, ``gain`` is the loop gain
    applied to every component, and the loop stops early once the absolute
    residual peak falls below ``threshold``.
    """

    dirty_file: str = DEFAULT_DIRTY_FILE
    psf_file: str = DEFAULT_PSF_FILE
    niters: int = DEFAULT_NITERS
    gain: float = DEFAULT_GAIN
    threshold: float = DEFAULT_THRESHOLD