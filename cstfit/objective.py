"""
CST fit objective

RMS error between target ordinates and CST ordinates for a trial weight
vector. One parameter bundle serves both fit and get_weights.
"""

from typing import List, Tuple
from dataclasses import dataclass

import numpy as np

from .config import BOUNDS_MODES, DEFAULT_N1, DEFAULT_N2
from .cst import cst_airfoil
from .exceptions import InputError, NumericalError


def compute_error(y0, y) -> float:
    """
    Root-mean-square error between original points y0 and new points y

    Raises:
    -------
    InputError
        Sequences of different length
    NumericalError
        Empty sequences or non-finite result
    """
    y0 = np.asarray(y0, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()

    if len(y0) != len(y):
        raise InputError(f"Cannot compare sequences of different length: {len(y0)} != {len(y)}")
    if len(y0) == 0:
        raise NumericalError("Cannot compute RMS error of empty sequences")

    err = float(np.sqrt(np.mean((y0 - y)**2)))
    if not np.isfinite(err):
        raise NumericalError("RMS error is not finite (NaN or inf in input)")
    return err


def compute_wuwl(w, split_idx: int) -> Tuple[np.ndarray, np.ndarray]:
    """Split a flat weight vector into (w_upper, w_lower) at split_idx"""
    w = np.asarray(w, dtype=float).ravel()
    split_idx = int(split_idx)

    if not 0 <= split_idx <= len(w):
        raise InputError(f"Split index {split_idx} out of range for {len(w)} weights")

    return w[:split_idx], w[split_idx:]


def split_index(w0) -> int:
    """
    Number of upper surface weights in a seed vector

    Upper weights are the positive seeds and must come first.
    """
    w0 = np.asarray(w0, dtype=float).ravel()
    if w0.size == 0:
        raise InputError("Seed weight vector is empty")
    if not np.all(np.isfinite(w0)):
        raise InputError("Seed weight vector contains NaN or infinite values")

    positive = w0 > 0
    k = int(np.count_nonzero(positive))
    if not np.all(positive[:k]):
        raise InputError(
            f"Seed weights must list positive (upper) values before non-positive "
            f"(lower) values, got {w0.tolist()}"
        )
    return k


def weight_bounds(w0, mode: str = 'signed') -> List[Tuple[float, float]]:
    """
    Box constraints for each weight

    - signed: [0, 1] where the seed is positive, [-1, 0] otherwise
    - symmetric: [-1, 1] for every weight
    """
    w0 = np.asarray(w0, dtype=float).ravel()

    if mode == 'signed':
        return [(0.0, 1.0) if w > 0 else (-1.0, 0.0) for w in w0]
    elif mode == 'symmetric':
        return [(-1.0, 1.0) for _ in w0]
    raise InputError(f"Unknown bounds mode: {mode!r} (expected one of {BOUNDS_MODES})")


@dataclass(frozen=True)
class CSTErrorParams:
    """Fixed inputs of the fit objective"""
    split_idx: int
    x_upper: np.ndarray
    x_lower: np.ndarray
    dz: float
    y0: np.ndarray
    n1: float = DEFAULT_N1
    n2: float = DEFAULT_N2

    @classmethod
    def from_surfaces(cls, split_idx: int, x_upper, x_lower, y_upper, y_lower, dz: float,
                      n1: float = DEFAULT_N1, n2: float = DEFAULT_N2) -> 'CSTErrorParams':
        x_upper = np.asarray(x_upper, dtype=float).ravel()
        x_lower = np.asarray(x_lower, dtype=float).ravel()
        y_upper = np.asarray(y_upper, dtype=float).ravel()
        y_lower = np.asarray(y_lower, dtype=float).ravel()

        if len(x_upper) != len(y_upper):
            raise InputError(f"Upper surface x/y lengths differ: {len(x_upper)} != {len(y_upper)}")
        if len(x_lower) != len(y_lower):
            raise InputError(f"Lower surface x/y lengths differ: {len(x_lower)} != {len(y_lower)}")
        if len(x_upper) + len(x_lower) == 0:
            raise NumericalError("No target points to fit")

        return cls(
            split_idx=int(split_idx),
            x_upper=x_upper,
            x_lower=x_lower,
            dz=float(dz),
            y0=np.concatenate([y_upper, y_lower]),
            n1=float(n1),
            n2=float(n2),
        )


def compute_cst_error(w, params: CSTErrorParams) -> float:
    """RMS error of the CST airfoil defined by w against the target points"""
    wu, wl = compute_wuwl(w, params.split_idx)
    yu, yl = cst_airfoil(wu, wl, params.dz, params.x_upper, params.x_lower,
                         n1=params.n1, n2=params.n2)

    y = np.concatenate([yu, yl])
    return compute_error(params.y0, y)
