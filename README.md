# hogbom

Hogbom CLEAN deconvolution for square radio images, together with a small
benchmark that runs a reference implementation against alternative
peak-finding strategies and checks that they agree.

## What it does

CLEAN repeatedly finds the brightest pixel (by absolute value) in the residual
image, adds a fraction of it (the *gain*) to the model image, and subtracts the
point spread function (PSF), scaled by the same amount and aligned on that
pixel, from the residual. It stops after a fixed number of iterations or once
the absolute peak falls below a threshold.

The defaults, held in `hogbom.parameters.CleanParameters`, are:

| setting        | field        | default     |
|----------------|--------------|-------------|
| dirty image    | `dirty_file` | `dirty.img` |
| PSF image      | `psf_file`   | `psf.img`   |
| iterations     | `niters`     | 1000        |
| gain           | `gain`       | 0.1         |
| threshold      | `threshold`  | 0.00001     |

Note on alignment: `hogbom.golden.subtract_psf` computes the row offset of
the PSF window from the *column* of the PSF peak. The subtraction is
therefore exactly centred only when the PSF peak lies on the diagonal
(for example the centre of a square PSF); every implementation in the
package shares this behaviour.

## Image files

Images are raw arrays of 32-bit floats in native byte order, with no header.
`hogbom.imageio` handles them:

- `read_image(path)` returns a flat `float32` array; trailing bytes that do
  not make a whole value are ignored. An unreadable file raises `ImageError`.
- `write_image(path, image)` writes an array in the same format.
- `check_square(image)` returns the side length, or raises `ImageError` if
  the number of values is not a perfect square.
- `compare(expected, actual, tolerance=0.00001)` returns `None` when the two
  images agree element by element within `tolerance`, otherwise a `Mismatch`
  describing the first difference (or a size difference).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
hogbom-clean --help
```

`hogbom-clean` reads the dirty image and the PSF, runs the reference
deconvolution, writes `residual.img` and `model.img` to the output directory,
then runs the chosen alternative implementation and reports time, time per
cycle and cleaning rate for both. It then checks the model against the
reference and, if that passes, the residual. The exit status is 1 when an
image cannot be read or is not square, or when verification fails; 0
otherwise.

Options:

- `--dirty PATH`, `--psf PATH`: input images (default `dirty.img`, `psf.img`).
- `--variant {acc,mic,mic-chunked,mic-lane,omp}`: the implementation to check
  (default `omp`). `acc` is compared with a tolerance of 0.0001 and also
  reports its speed-up over the reference; the others use 0.00001.
- `--output-dir DIR`: where the reference model and residual are written
  (default the current directory).
- `--niters N`, `--gain G`, `--threshold T`: loop controls.

The same run is available from Python as
`hogbom.cli.run_benchmark(dirty_path, psf_path, variant, output_dir, parameters)`,
which returns a report holding both results, both timings, the model and
residual mismatches and a `passed` flag.

```
hogbom-reduction [--kind {assign,max,fmax,fmaxf,greater}] [VALUES ...]
```

`hogbom-reduction` folds a running maximum over the given values (or, with
none, the sample array `0 0 1 0 0 0`) and prints `Max value = ...`. The
`--kind` option chooses the update rule, as in
`hogbom.reduction.max_reduction(data, kind)` and `ReductionKind`: `assign`
keeps the last value, the others keep the largest, differing in how NaN is
treated. The default is `greater`.

## Library use

```python
from hogbom.imageio import read_image, check_square
from hogbom.golden import HogbomGolden

dirty = read_image("dirty.img")
psf = read_image("psf.img")

result = HogbomGolden().deconvolve(dirty, check_square(dirty), psf, check_square(psf))
print(result.iterations, result.converged)
```

`deconvolve` returns a `CleanResult` with the `model` and `residual` arrays,
the PSF's `psf_peak`, the number of `iterations` performed and whether the
threshold was reached (`converged`). Progress messages go to the standard
`logging` module. Each implementation takes an optional `CleanParameters`
and exposes `find_peak(image)`, returning a `Peak` with a `value` and flat
index `pos`; `idx_to_pos` and `pos_to_idx` convert between flat indices and
`Position` coordinates.

Implementations available:

- `hogbom.golden.HogbomGolden`: the serial reference; reports the signed
  value of the first pixel of largest magnitude.
- `hogbom.omp.HogbomOMP(parameters, threads)`: splits the image into
  `threads` contiguous chunks (default: the CPU count), finds each chunk's
  peak and merges them in order, keeping a later chunk only when strictly
  larger.
- `hogbom.acc.HogbomACC`: a two-pass search that takes the maximum magnitude
  and then the last index holding it. It reports the magnitude, not the
  signed value, so negative peaks are cleaned as positive ones.
- `hogbom.mic.HogbomMIC(parameters, lanes)`: keeps a running maximum per
  lane (pixel `i` in lane `i % lanes`, default 16) and picks the
  highest-numbered lane among those sharing the overall maximum.
  `hogbom.mic.block_max_peak(image, block)` is a separate block-wise search
  that reports the magnitude of the peak.
- `hogbom.mic_variants.LaneMIC` and `hogbom.mic_variants.ChunkedMIC`: built
  on `lane_max_peak(image, lanes)` and `chunked_peak(image, chunks)`
  (default 29 chunks, NaN pixels never win).

Timing uses `hogbom.stopwatch.Stopwatch`, which measures wall-clock seconds
and also works as a context manager (the result is kept in `elapsed`);
calling `stop` before `start` raises `StopwatchError`.

## What it does not do

Every implementation here runs on the CPU with numpy. There is no GPU or
accelerator-card implementation; the variants reproduce the peak-selection
rules of such searches, not their speed.