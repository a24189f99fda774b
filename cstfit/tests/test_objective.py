"""
Fit objective tests: RMS error, weight split, bounds
"""

import numpy as np
import pytest

from cstfit import InputError, NumericalError
from cstfit.objective import (
    CSTErrorParams,
    compute_cst_error,
    compute_error,
    compute_wuwl,
    split_index,
    weight_bounds,
)


def test_compute_error_identical_is_zero():
    y = np.array([0.1, -0.2, 0.05, 0.0])
    assert compute_error(y, y) == 0.0


def test_compute_error_known_value():
    assert compute_error([0.0, 0.0], [3.0, 4.0]) == pytest.approx(np.sqrt(12.5))


def test_compute_error_symmetric_and_non_negative():
    rng = np.random.default_rng(0)
    for _ in range(20):
        a = rng.normal(size=15)
        b = rng.normal(size=15)
        assert compute_error(a, b) >= 0.0
        assert compute_error(a, b) == pytest.approx(compute_error(b, a))


def test_compute_error_length_mismatch():
    with pytest.raises(InputError):
        compute_error([0.0, 1.0], [0.0])


def test_compute_error_empty():
    with pytest.raises(NumericalError):
        compute_error([], [])


def test_compute_error_nan():
    with pytest.raises(NumericalError):
        compute_error([0.0, np.nan], [0.0, 0.0])


def test_compute_wuwl_every_split_index():
    w = np.array([0.1, 0.2, 0.3, -0.1, -0.2])
    for k in range(len(w) + 1):
        wu, wl = compute_wuwl(w, k)
        assert len(wu) == k
        assert len(wl) == len(w) - k
        np.testing.assert_array_equal(np.concatenate([wu, wl]), w)


@pytest.mark.parametrize("k", [-1, 6])
def test_compute_wuwl_out_of_range(k):
    with pytest.raises(InputError):
        compute_wuwl(np.zeros(5), k)


def test_split_index_counts_positive_seeds():
    assert split_index([0.1, 0.1, 0.1, -0.1, -0.1, -0.1]) == 3
    assert split_index([0.1, 0.2, -0.1]) == 2
    assert split_index([-0.1, -0.1]) == 0
    assert split_index([0.1, 0.1]) == 2
    # Zero seeds belong to the lower surface
    assert split_index([0.1, 0.0, -0.1]) == 1


def test_split_index_rejects_interleaved_signs():
    with pytest.raises(InputError):
        split_index([0.1, -0.1, 0.1])


def test_split_index_rejects_empty():
    with pytest.raises(InputError):
        split_index([])


def test_weight_bounds_signed():
    bounds = weight_bounds([0.1, 0.2, -0.1, 0.0], 'signed')
    assert bounds == [(0.0, 1.0), (0.0, 1.0), (-1.0, 0.0), (-1.0, 0.0)]


def test_weight_bounds_symmetric():
    bounds = weight_bounds([0.1, -0.1, -0.1], 'symmetric')
    assert bounds == [(-1.0, 1.0)] * 3


def test_weight_bounds_unknown_mode():
    with pytest.raises(InputError):
        weight_bounds([0.1], 'loose')


def test_cst_error_zero_at_generating_weights(known_weights, known_surfaces):
    wu, wl = known_weights
    params = CSTErrorParams.from_surfaces(3, *known_surfaces, dz=0.0)

    assert compute_cst_error(np.concatenate([wu, wl]), params) == pytest.approx(0.0, abs=1e-15)


def test_cst_error_positive_elsewhere(known_surfaces):
    params = CSTErrorParams.from_surfaces(3, *known_surfaces, dz=0.0)
    w = np.array([0.1, 0.1, 0.1, -0.1, -0.1, -0.1])

    err = compute_cst_error(w, params)
    assert err > 0.0
    assert compute_cst_error(w, params) == err


def test_cst_error_uses_class_exponents(known_weights, known_surfaces):
    wu, wl = known_weights
    w = np.concatenate([wu, wl])
    default = CSTErrorParams.from_surfaces(3, *known_surfaces, dz=0.0)
    other = CSTErrorParams.from_surfaces(3, *known_surfaces, dz=0.0, n1=1.0, n2=1.0)

    assert compute_cst_error(w, default) < compute_cst_error(w, other)


def test_params_concatenate_targets_upper_first(known_surfaces):
    xu, xl, yu, yl = known_surfaces
    params = CSTErrorParams.from_surfaces(3, xu, xl, yu, yl, dz=0.0)

    np.testing.assert_array_equal(params.y0, np.concatenate([yu, yl]))


def test_params_surface_length_mismatch(known_surfaces):
    xu, xl, yu, yl = known_surfaces
    with pytest.raises(InputError):
        CSTErrorParams.from_surfaces(3, xu, xl, yu[:-1], yl, dz=0.0)


def test_params_no_points():
    with pytest.raises(NumericalError):
        CSTErrorParams.from_surfaces(0, [], [], [], [], dz=0.0)
