"""
Airfoil surface geometry helpers

Upper/lower 표면 분리 및 좌표 결합
- Leading edge split (minimum |x| point)
- Upper-then-lower concatenation
- Trailing edge half-thickness
"""

import logging
from typing import Tuple

import numpy as np

from .exceptions import InputError

logger = logging.getLogger(__name__)


def _as_coordinate_arrays(x, y) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()

    if len(x) != len(y):
        raise InputError(f"x and y lengths differ: {len(x)} != {len(y)}")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise InputError("Coordinates contain NaN or infinite values")

    return x, y


def split_upper_lower(x, y) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Split an airfoil point sequence into upper and lower surfaces

    The leading edge is the point with minimum |x|. The neighbour with the
    smaller y decides which side is the lower surface:
    - y[le+1] < y[le-1]: points [0, le] are upper, (le, n) are lower
      (Selig order: upper TE -> LE, lower LE -> TE)
    - otherwise: points (le, n) are upper, [0, le] are lower

    Parameters:
    -----------
    x : array_like
        Chordwise positions (point order is preserved)
    y : array_like
        Ordinates, same length as x

    Returns:
    --------
    tuple : (x_upper, x_lower, y_upper, y_lower)
        Contiguous slices of the input order

    Raises:
    -------
    InputError
        Mismatched lengths, fewer than 3 points, or leading edge at either
        end of the sequence
    """
    x, y = _as_coordinate_arrays(x, y)
    n = len(x)

    if n < 3:
        raise InputError(f"At least 3 points are needed to locate a leading edge, got {n}")

    le_idx = int(np.argmin(np.abs(x)))
    if le_idx == 0 or le_idx == n - 1:
        raise InputError(
            f"Leading edge (min |x|) found at sequence boundary (index {le_idx} of {n}); "
            "points must run around the leading edge"
        )

    if y[le_idx + 1] < y[le_idx - 1]:
        upper = slice(0, le_idx + 1)
        lower = slice(le_idx + 1, n)
    else:
        upper = slice(le_idx + 1, n)
        lower = slice(0, le_idx + 1)

    logger.debug(f"Leading edge at index {le_idx}: x={x[le_idx]:.6f}, y={y[le_idx]:.6f}")

    return x[upper], x[lower], y[upper], y[lower]


def concatenate_surfaces(x_upper, x_lower, y_upper, y_lower) -> Tuple[np.ndarray, np.ndarray]:
    """Join upper and lower surfaces into single (x, y) arrays, upper first"""
    x = np.concatenate([np.asarray(x_upper, dtype=float), np.asarray(x_lower, dtype=float)])
    y = np.concatenate([np.asarray(y_upper, dtype=float), np.asarray(y_lower, dtype=float)])
    return x, y


def trailing_edge_half_thickness(y_upper, y_lower) -> float:
    """
    Trailing edge offset dz derived from the data

    First upper ordinate minus last lower ordinate. For Selig ordered data
    these are the upper and lower trailing edge points.
    """
    y_upper = np.asarray(y_upper, dtype=float)
    y_lower = np.asarray(y_lower, dtype=float)

    if len(y_upper) == 0 or len(y_lower) == 0:
        raise InputError("Cannot derive trailing edge thickness from an empty surface")

    return float(y_upper[0] - y_lower[-1])
