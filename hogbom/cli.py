"""Command that times Hogbom CLEAN variants against the reference version."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from hogbom.acc import HogbomACC
from hogbom.golden import CleanResult, HogbomGolden
from hogbom.imageio import (
    ImageError,
    Mismatch,
    check_square,
    compare,
    read_image,
    write_image,
)
from hogbom.mic import HogbomMIC
from hogbom.mic_variants import ChunkedMIC, LaneMIC
from hogbom.omp import HogbomOMP
from hogbom.parameters import (
    DEFAULT_DIRTY_FILE,
    DEFAULT_GAIN,
    DEFAULT_NITERS,
    DEFAULT_PSF_FILE,
    DEFAULT_THRESHOLD,
    CleanParameters,
)


@dataclass(frozen=True)
class _Variant:
    label: str
    factory: Callable[[CleanParameters], HogbomGolden]
    tolerance: float
    show_speedup: bool = False


VARIANTS: dict[str, _Variant] = {
    "omp": _Variant("OpenMP", HogbomOMP, 0.00001),
    "acc": _Variant("OpenACC", HogbomACC, 0.0001, show_speedup=True),
    "mic": _Variant("MIC OpenMP", HogbomMIC, 0.00001),
    "mic-lane": _Variant("MIC OpenMP", LaneMIC, 0.00001),
    "mic-chunked": _Variant("MIC OpenMP", ChunkedMIC, 0.00001),
}


@dataclass
class BenchmarkReport:
    """Results and timings of one reference run and one variant run."""

    golden: CleanResult
    candidate: CleanResult
    golden_seconds: float
    variant_seconds: float
    model_mismatch: Mismatch | None
    residual_mismatch: Mismatch | None

    @property
    def passed(self) -> bool:
        """True when both model and residual agree with the reference."""
        return self.model_mismatch is None and self.residual_mismatch is None


def _rate(count: int, seconds: float) -> float:
    return count / seconds if seconds > 0 else float("inf")


def _timed(cleaner: HogbomGolden, dirty, dim, psf, psf_dim) -> tuple[CleanResult, float]:
    from hogbom.stopwatch import Stopwatch

    with Stopwatch() as sw:
        result = cleaner.deconvolve(dirty, dim, psf, psf_dim)
    return result, sw.elapsed


def _report_timing(seconds: float, niters: int, suffix: str = "") -> None:
    print(f"    Time {seconds:g} (s) ")
    print(f"    Time per cycle {seconds / niters * 1000:g} (ms)")
    print(f"    Cleaning rate  {_rate(niters, seconds):g} (iterations per second){suffix}")
    print("Done")


def run_benchmark(
    dirty_path: str | os.PathLike = DEFAULT_DIRTY_FILE,
    psf_path: str | os.PathLike = DEFAULT_PSF_FILE,
    variant: str = "omp",
    output_dir: str | os.PathLike = ".",
    parameters: CleanParameters | None = None,
) -> BenchmarkReport:
    """Clean with the reference and with ``variant``, then compare the two.

    The reference model and residual are written to ``output_dir`` as
    ``model.img`` and ``residual.img``. Raises :class:`ImageError` if an
    input cannot be read or is not square, and :class:`ValueError` for an
    unknown variant.
    """
    try:
        spec = VARIANTS[variant]
    except KeyError:
        raise ValueError(f"unknown variant: {variant!r}") from None
    params = parameters or CleanParameters()
    niters = params.niters

    print("Reading dirty image and psf image")
    dirty = read_image(dirty_path)
    dim = check_square(dirty)
    psf = read_image(psf_path)
    psf_dim = check_square(psf)

    print(f"Iterations = {niters}")
    print(f"Image dimensions = {dim}x{dim}")

    print("+++++ Forward processing (CPU Golden) +++++")
    golden, golden_seconds = _timed(HogbomGolden(params), dirty, dim, psf, psf_dim)
    _report_timing(golden_seconds, niters)

    out = Path(output_dir)
    write_image(out / "residual.img", golden.residual)
    write_image(out / "model.img", golden.model)

    print(f"+++++ Forward processing ({spec.label}) +++++")
    candidate, variant_seconds = _timed(
        spec.factory(params), dirty, dim, psf, psf_dim
    )
    suffix = ""
    if spec.show_speedup:
        speedup = _rate(1, variant_seconds) * golden_seconds if variant_seconds > 0 else float("inf")
        suffix = f" => {speedup:g}x"
    _report_timing(variant_seconds, niters, suffix)

    residual_mismatch: Mismatch | None = None
    print("Verifying model...", end="")
    model_mismatch = compare(golden.model, candidate.model, spec.tolerance)
    if model_mismatch is not None:
        print(f"Fail ({model_mismatch})")
    else:
        print("Pass")
        print("Verifying residual...", end="")
        residual_mismatch = compare(golden.residual, candidate.residual, spec.tolerance)
        print("Pass" if residual_mismatch is None else f"Fail ({residual_mismatch})")

    return BenchmarkReport(
        golden, candidate, golden_seconds, variant_seconds,
        model_mismatch, residual_mismatch,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark from the command line and return an exit status."""
    parser = argparse.ArgumentParser(
        description="Time a Hogbom CLEAN variant and verify it against the reference."
    )
    parser.add_argument("--dirty", default=DEFAULT_DIRTY_FILE, help="dirty image file")
    parser.add_argument("--psf", default=DEFAULT_PSF_FILE, help="PSF image file")
    parser.add_argument("--variant", choices=sorted(VARIANTS), default="omp")
    parser.add_argument("--output-dir", default=".", help="where model and residual go")
    parser.add_argument("--niters", type=int, default=DEFAULT_NITERS)
    parser.add_argument("--gain", type=float, default=DEFAULT_GAIN)
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD)
    args = parser.parse_args(argv)

    params = CleanParameters(
        dirty_file=args.dirty,
        psf_file=args.psf,
        niters=args.niters,
        gain=args.gain,
        threshold=args.threshold,
    )
    try:
        report = run_benchmark(
            params.dirty_file, params.psf_file, args.variant, args.output_dir, params
        )
    except ImageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0 if report.passed else 1