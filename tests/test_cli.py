import numpy as np
import pytest

from hogbom.cli import run_benchmark, main
from hogbom.imageio import ImageError, read_image, write_image
from hogbom.parameters import CleanParameters


def _write_inputs(tmp_path, peak_value=2.0):
    dirty = np.zeros(64, dtype=np.float32)
    dirty[26] = peak_value
    dirty[45] = peak_value / 2
    psf = np.zeros(9, dtype=np.float32)
    psf[4] = 1.0
    psf[1] = 0.25
    psf[7] = 0.25
    dirty_path = tmp_path / "dirty.img"
    psf_path = tmp_path / "psf.img"
    write_image(dirty_path, dirty)
    write_image(psf_path, psf)
    return dirty_path, psf_path


@pytest.mark.parametrize("variant", ["omp", "mic", "mic-lane", "mic-chunked", "acc"])
def test_positive_image_passes_for_all_variants(tmp_path, variant):
    dirty_path, psf_path = _write_inputs(tmp_path)
    params = CleanParameters(niters=5)
    report = run_benchmark(dirty_path, psf_path, variant, tmp_path, params)
    assert report.passed
    assert np.allclose(report.golden.model, report.candidate.model, atol=1e-5)
    assert report.golden.iterations == 5


def test_reference_outputs_written(tmp_path):
    dirty_path, psf_path = _write_inputs(tmp_path)
    report = run_benchmark(dirty_path, psf_path, "omp", tmp_path, CleanParameters(niters=4))
    model = read_image(tmp_path / "model.img")
    residual = read_image(tmp_path / "residual.img")
    assert np.array_equal(model, report.golden.model)
    assert np.array_equal(residual, report.golden.residual)


def test_flux_is_conserved_at_peak(tmp_path):
    dirty_path, psf_path = _write_inputs(tmp_path)
    report = run_benchmark(dirty_path, psf_path, "omp", tmp_path, CleanParameters(niters=1))
    dirty = read_image(dirty_path)
    golden = report.golden
    assert golden.model[26] + golden.residual[26] == pytest.approx(dirty[26], abs=1e-6)


def test_acc_fails_on_negative_peak(tmp_path, capsys):
    dirty_path, psf_path = _write_inputs(tmp_path, peak_value=-2.0)
    report = run_benchmark(dirty_path, psf_path, "acc", tmp_path, CleanParameters(niters=3))
    assert not report.passed
    assert report.model_mismatch is not None
    assert report.model_mismatch.index == 26
    assert "Fail" in capsys.readouterr().out


def test_unknown_variant(tmp_path):
    dirty_path, psf_path = _write_inputs(tmp_path)
    with pytest.raises(ValueError):
        run_benchmark(dirty_path, psf_path, "gpu", tmp_path, CleanParameters(niters=1))


def test_not_square_raises(tmp_path):
    dirty_path, psf_path = _write_inputs(tmp_path)
    write_image(dirty_path, np.ones(10, dtype=np.float32))
    with pytest.raises(ImageError, match="Image is not square"):
        run_benchmark(dirty_path, psf_path, "omp", tmp_path, CleanParameters(niters=1))


def test_main_success_reports(tmp_path, capsys):
    dirty_path, psf_path = _write_inputs(tmp_path)
    status = main([
        "--dirty", str(dirty_path), "--psf", str(psf_path),
        "--output-dir", str(tmp_path), "--niters", "3", "--variant", "mic",
    ])
    out = capsys.readouterr().out
    assert status == 0
    assert "Iterations = 3" in out
    assert "Image dimensions = 8x8" in out
    assert "+++++ Forward processing (MIC OpenMP) +++++" in out
    assert "Verifying residual...Pass" in out


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.img"
    status = main(["--dirty", str(missing), "--psf", str(missing),
                   "--output-dir", str(tmp_path)])
    assert status == 1
    assert "Could not stat" in capsys.readouterr().err


def test_main_negative_acc_returns_failure(tmp_path):
    dirty_path, psf_path = _write_inputs(tmp_path, peak_value=-2.0)
    status = main([
        "--dirty", str(dirty_path), "--psf", str(psf_path),
        "--output-dir", str(tmp_path), "--niters", "2", "--variant", "acc",
    ])
    assert status == 1