"""Demonstration of the ways a running maximum can be reduced."""

from __future__ import annotations

import argparse
import enum
import math
from collections import deque
from functools import reduce
from typing import Callable, Iterable, Sequence

import numpy as np

SAMPLE_DATA: tuple[float, ...] = (0.0, 0.0, 1.0, 0.0, 0.0, 0.0)


class ReductionKind(enum.IntEnum):
    """How each element updates the running maximum."""

    ASSIGN = 0
    MAX = 1
    FMAX = 2
    FMAXF = 3
    GREATER = 4


def _max(current: float, value: float) -> float:
    # Ordered comparison: the current value is kept unless strictly smaller.
    return value if current < value else current


def _fmax(current: float, value: float) -> float:
    if math.isnan(current):
        return value
    if math.isnan(value):
        return current
    return max(current, value)


def _fmaxf(current: float, value: float) -> float:
    return float(np.float32(_fmax(current, value)))


def _greater(current: float, value: float) -> float:
    return value if value > current else current


_STEPS: dict[ReductionKind, Callable[[float, float], float]] = {
    ReductionKind.MAX: _max,
    ReductionKind.FMAX: _fmax,
    ReductionKind.FMAXF: _fmaxf,
    ReductionKind.GREATER: _greater,
}


def _last_or_zero(values: Iterable[float]) -> float:
    tail = deque(values, maxlen=1)
    return tail[0] if tail else 0.0


def max_reduction(
    data: Iterable[float],
    kind: ReductionKind | int = ReductionKind.GREATER,
) -> float:
    """Fold ``data`` in order from 0.0 using the update rule of ``kind``.

    ``ASSIGN`` keeps only the last element; the other kinds keep the
    largest element seen, differing only in how NaN is treated.
    """
    kind = ReductionKind(kind)
    values = (float(np.float32(v)) for v in data)
    if kind is ReductionKind.ASSIGN:
        return _last_or_zero(values)
    return reduce(_STEPS[kind], values, 0.0)


def main(argv: Sequence[str] | None = None) -> int:
    """Run a maximum reduction over sample or given values and print it."""
    parser = argparse.ArgumentParser(description="Test a simple max reduction.")
    parser.add_argument(
        "--kind",
        choices=[k.name.lower() for k in ReductionKind],
        default=ReductionKind.GREATER.name.lower(),
        help="update rule used for each element",
    )
    parser.add_argument("values", nargs="*", type=float, help="values to reduce")
    args = parser.parse_args(argv)

    print("Testing simple reduction")
    data = args.values if args.values else SAMPLE_DATA
    result = max_reduction(data, ReductionKind[args.kind.upper()])
    print(f"Max value = {result:g}")
    return 0