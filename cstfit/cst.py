"""
CST (Class/Shape Transformation) forward evaluator

y(x) = C(x) * S(x) + x * dz
- Class function: C(x) = x^N1 * (1 - x)^N2
- Shape function: S(x) = sum_i w_i * K_i * x^i * (1 - x)^(n - i)  (Bernstein)
- Upper surface uses +dz, lower surface -dz

Usage:
    from cstfit.cst import cst_airfoil, resample

    yu, yl = cst_airfoil(wu, wl, dz, xu, xl)
    x, y = resample(wu, wl, dz, 200)
"""

from typing import Tuple

import numpy as np
from scipy.special import comb

from .config import DEFAULT_N1, DEFAULT_N2
from .exceptions import InputError, NumericalError


def class_function(x: np.ndarray, n1: float = DEFAULT_N1, n2: float = DEFAULT_N2) -> np.ndarray:
    """CST class function"""
    x = np.asarray(x, dtype=float)
    # x outside [0, 1] gives NaN, reported by surface_ordinates
    with np.errstate(invalid='ignore'):
        return x**n1 * (1 - x)**n2


def bernstein_basis(x: np.ndarray, order: int) -> np.ndarray:
    """
    Bernstein polynomial basis matrix

    Parameters:
    -----------
    x : np.ndarray
        Evaluation points, shape (m,)
    order : int
        Polynomial order n (n + 1 basis functions)

    Returns:
    --------
    np.ndarray
        Basis values, shape (m, n + 1)
    """
    x = np.asarray(x, dtype=float)[:, np.newaxis]
    i = np.arange(order + 1)
    K = comb(order, i)
    return K * x**i * (1 - x)**(order - i)


def shape_function(x: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Bernstein polynomial shape function"""
    x = np.asarray(x, dtype=float)
    weights = np.asarray(weights, dtype=float)

    if weights.size == 0:
        return np.zeros_like(x)

    return bernstein_basis(x, weights.size - 1) @ weights


def surface_ordinates(x: np.ndarray, weights: np.ndarray, dz: float,
                      n1: float = DEFAULT_N1, n2: float = DEFAULT_N2) -> np.ndarray:
    """Ordinates of one surface: class * shape + trailing edge term"""
    x = np.asarray(x, dtype=float)
    y = class_function(x, n1, n2) * shape_function(x, weights) + x * dz

    if not np.all(np.isfinite(y)):
        raise NumericalError(
            "CST evaluation produced non-finite ordinates; "
            f"x must lie in [0, 1] (got range {x.min():.6g} to {x.max():.6g})"
        )
    return y


def cst_airfoil(w_upper, w_lower, dz: float, x_upper, x_lower,
                n1: float = DEFAULT_N1, n2: float = DEFAULT_N2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate upper and lower CST surfaces at given chordwise positions

    Parameters:
    -----------
    w_upper, w_lower : array_like
        Shape weights of each surface (lengths may differ)
    dz : float
        Trailing edge half-thickness
    x_upper, x_lower : array_like
        Chordwise positions in [0, 1]
    n1, n2 : float
        Class function exponents

    Returns:
    --------
    tuple : (y_upper, y_lower)
    """
    y_upper = surface_ordinates(x_upper, w_upper, dz, n1, n2)
    y_lower = surface_ordinates(x_lower, w_lower, -dz, n1, n2)
    return y_upper, y_lower


def cosine_spacing(n: int) -> np.ndarray:
    """n chordwise positions from 0 to 1, clustered at LE and TE"""
    beta = np.linspace(0, np.pi, n)
    return 0.5 * (1 - np.cos(beta))


def resample(w_upper, w_lower, dz: float, n_points: int,
             n1: float = DEFAULT_N1, n2: float = DEFAULT_N2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate n_points airfoil coordinates from CST weights

    Points are in Selig order: upper surface TE -> LE (including x = 0),
    then lower surface LE -> TE. The upper surface gets ceil(n/2) points.

    Returns:
    --------
    tuple : (x, y), each of length n_points
    """
    n_points = int(n_points)
    if n_points < 3:
        raise InputError(f"At least 3 output points are required, got {n_points}")

    n_lower = n_points // 2
    n_upper = n_points - n_lower

    x_upper = cosine_spacing(n_upper)[::-1]
    x_lower = cosine_spacing(n_lower + 1)[1:]

    y_upper, y_lower = cst_airfoil(w_upper, w_lower, dz, x_upper, x_lower, n1, n2)

    x = np.concatenate([x_upper, x_lower])
    y = np.concatenate([y_upper, y_lower])
    return x, y
