"""
Shared fixtures: a synthetic airfoil generated from known CST weights
"""

import numpy as np
import pytest

from cstfit.cst import cosine_spacing, cst_airfoil


KNOWN_W_UPPER = np.array([0.17, 0.15, 0.20])
KNOWN_W_LOWER = np.array([-0.15, -0.10, -0.05])


@pytest.fixture
def known_weights():
    return KNOWN_W_UPPER.copy(), KNOWN_W_LOWER.copy()


@pytest.fixture
def known_surfaces():
    """50 points per surface in Selig order, sharp trailing edge"""
    xu = cosine_spacing(50)[::-1]
    xl = cosine_spacing(51)[1:]
    yu, yl = cst_airfoil(KNOWN_W_UPPER, KNOWN_W_LOWER, 0.0, xu, xl)
    return xu, xl, yu, yl


@pytest.fixture
def selig_points(known_surfaces):
    """Known airfoil as one (x, y) sequence: upper TE -> LE, lower LE -> TE"""
    xu, xl, yu, yl = known_surfaces
    return np.concatenate([xu, xl]), np.concatenate([yu, yl])
