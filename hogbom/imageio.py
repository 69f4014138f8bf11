"""Reading, writing and checking raw float32 images."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

import numpy as np

_ITEM = np.dtype(np.float32).itemsize


class ImageError(Exception):
    """Raised when an image cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class Mismatch:
    """The first difference found between two images."""

    index: int | None
    expected: float | None = None
    actual: float | None = None

    def __str__(self) -> str:
        if self.index is None:
            return "Vector sizes differ"
        return f"Expected {self.expected} got {self.actual} at index {self.index}"


def read_image(path: str | os.PathLike) -> np.ndarray:
    """Read a flat array of native-order float32 values from ``path``."""
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise ImageError(f"Could not stat {os.fspath(path)}") from exc
    count = len(data) // _ITEM
    return np.frombuffer(data[: count * _ITEM], dtype=np.float32).copy()


def write_image(path: str | os.PathLike, image) -> None:
    """Write ``image`` to ``path`` as native-order float32 values."""
    data = np.asarray(image, dtype=np.float32).ravel()
    with open(path, "wb") as fh:
        fh.write(data.tobytes())


def check_square(image) -> int:
    """Return the side length of a square image, or raise :class:`ImageError`."""
    size = np.asarray(image).size
    dim = math.isqrt(size)
    if dim * dim != size:
        raise ImageError("Image is not square")
    return dim


def compare(expected, actual, tolerance: float = 0.00001) -> Mismatch | None:
    """Return the first element differing by more than ``tolerance``, or None."""
    exp = np.asarray(expected, dtype=np.float32).ravel()
    act = np.asarray(actual, dtype=np.float32).ravel()
    if exp.size != act.size:
        return Mismatch(None)
    bad = np.flatnonzero(np.abs(exp - act).astype(np.float64) > tolerance)
    if bad.size == 0:
        return None
    i = int(bad[0])
    return Mismatch(i, float(exp[i]), float(act[i]))