import numpy as np
import pytest

from hogbom.golden import HogbomGolden, Peak
from hogbom.mic import HogbomMIC, block_max_peak
from hogbom.parameters import CleanParameters


def _gaussian_psf(width=9):
    centre = width // 2
    ys, xs = np.mgrid[0:width, 0:width]
    psf = np.exp(-((xs - centre) ** 2 + (ys - centre) ** 2) / 4.0)
    return psf.astype(np.float32).ravel()


def test_block_rejects_nonpositive_block():
    with pytest.raises(ValueError):
        block_max_peak([1.0, 2.0], 0)


def test_block_empty_image():
    assert block_max_peak([], 4) == Peak(0.0, 0)


def test_block_all_zero_image():
    assert block_max_peak([0.0] * 10, 4) == Peak(0.0, 0)


def test_block_reports_magnitude_of_negative_peak():
    peak = block_max_peak([-4.0, 1.0], 16)
    assert peak == Peak(4.0, 0)


def test_block_first_block_wins_ties_across_blocks():
    peak = block_max_peak([3.0, 0.0, 3.0, 0.0], 2)
    assert peak.pos == 0
    assert peak.value == 3.0


def test_block_last_lane_wins_within_block():
    peak = block_max_peak([3.0, 3.0], 2)
    assert peak.pos == 1


def test_block_handles_partial_tail_block():
    data = [0.0, 0.0, 0.0, 0.0, 9.0]
    peak = block_max_peak(data, 4)
    assert data[peak.pos] == 9.0
    assert peak.value == 9.0


def test_block_matches_golden_magnitude_on_random_data():
    rng = np.random.default_rng(1)
    data = rng.normal(size=200).astype(np.float32)
    peak = block_max_peak(data, 16)
    golden = HogbomGolden().find_peak(data)
    assert peak.pos == golden.pos
    assert peak.value == pytest.approx(abs(golden.value))


def test_mic_rejects_nonpositive_lanes():
    with pytest.raises(ValueError):
        HogbomMIC(lanes=0)


def test_mic_empty_image():
    assert HogbomMIC().find_peak([]) == Peak(0.0, 0)


def test_mic_keeps_sign_of_peak():
    data = np.zeros(40, dtype=np.float32)
    data[17] = -6.5
    peak = HogbomMIC().find_peak(data)
    assert peak == Peak(-6.5, 17)


def test_mic_ties_prefer_highest_lane():
    peak = HogbomMIC().find_peak([2.0, 2.0])
    assert peak == Peak(2.0, 1)


def test_mic_ties_within_lane_prefer_last_position():
    peak = HogbomMIC(lanes=4).find_peak([5.0, 0.0, 0.0, 0.0, -5.0, 0.0])
    assert peak == Peak(-5.0, 4)


@pytest.mark.parametrize("lanes", [1, 3, 16])
def test_mic_matches_golden_on_unique_peak(lanes):
    rng = np.random.default_rng(lanes)
    data = rng.normal(size=123).astype(np.float32)
    assert HogbomMIC(lanes=lanes).find_peak(data) == HogbomGolden().find_peak(data)


def test_mic_deconvolve_matches_golden():
    rng = np.random.default_rng(7)
    dirty = rng.normal(size=16 * 16).astype(np.float32)
    psf = _gaussian_psf(9)
    params = CleanParameters(niters=40)

    golden = HogbomGolden(params).deconvolve(dirty, 16, psf, 9)
    mic = HogbomMIC(params).deconvolve(dirty, 16, psf, 9)

    assert mic.iterations == golden.iterations
    np.testing.assert_allclose(mic.model, golden.model, atol=1e-6)
    np.testing.assert_allclose(mic.residual, golden.residual, atol=1e-6)


def test_mic_deconvolve_reduces_peak():
    dirty = np.zeros(16 * 16, dtype=np.float32)
    dirty[8 * 16 + 8] = 1.0
    psf = _gaussian_psf(9)
    result = HogbomMIC(CleanParameters(niters=5)).deconvolve(dirty, 16, psf, 9)
    assert np.abs(result.residual).max() < 1.0
    assert result.model.sum() > 0.0