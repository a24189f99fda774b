"""
CST Airfoil Fitting

Airfoil 좌표 데이터에 CST 가중치를 피팅하고 임의 해상도로 재샘플링
- fit: bounded search for the weights, then resample to N points
- get_weights: weights only, symmetric [-1, 1] bounds
- fit_file: CSV in, <name>_CST.csv out

Usage:
    from cstfit import fit, get_weights, read_surfaces

    xu, xl, yu, yl = read_surfaces("e1098.csv")
    x, y, wu, wl = fit(xu, xl, yu, yl, 500, max_time=20.0)

    # Weights only
    wu, wl = get_weights(xu, xl, yu, yl, n1=0.5, n2=1.0)
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from .config import DEFAULT_WEIGHTS_MAX_TIME, FitConfig
from .cst import resample
from .exceptions import ConvergenceWarning, InputError
from .geometry import trailing_edge_half_thickness
from .io import read_surfaces, write_cst as write_cst_file
from .objective import (
    CSTErrorParams,
    compute_cst_error,
    compute_wuwl,
    split_index,
    weight_bounds,
)
from .optimizer import minimize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitResult:
    """
    Result of one CST fit

    rms_error is the final RMS reconstruction error so callers can judge fit
    quality. warning is set when a tolerance was requested and not reached.
    x, y hold the resampled coordinates when a point count was requested.
    """
    w_upper: np.ndarray
    w_lower: np.ndarray
    dz: float
    n1: float
    n2: float
    rms_error: float
    initial_error: float
    n_iterations: int
    n_evaluations: int
    elapsed: float
    stop_reason: str
    warning: Optional[ConvergenceWarning] = None
    x: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None

    @property
    def weights(self) -> np.ndarray:
        return np.concatenate([self.w_upper, self.w_lower])

    @property
    def converged(self) -> bool:
        return self.warning is None

    def to_dict(self) -> dict:
        return {
            'w_upper': self.w_upper.tolist(),
            'w_lower': self.w_lower.tolist(),
            'dz': self.dz,
            'n1': self.n1,
            'n2': self.n2,
            'rms_error': self.rms_error,
            'initial_error': self.initial_error,
            'n_iterations': self.n_iterations,
            'n_evaluations': self.n_evaluations,
            'elapsed': self.elapsed,
            'stop_reason': self.stop_reason,
            'warning': str(self.warning) if self.warning is not None else None,
        }


def _resolve_config(config: Optional[FitConfig], **overrides) -> FitConfig:
    """Apply non-None keyword overrides on top of config"""
    base = config if config is not None else FitConfig()
    changes = {k: v for k, v in overrides.items() if v is not None}
    if 'weights' in changes:
        changes['weights'] = tuple(np.asarray(changes['weights'], dtype=float).ravel())
    return replace(base, **changes) if changes else base


def _search(x_upper, x_lower, y_upper, y_lower, dz: Optional[float], cfg: FitConfig) -> FitResult:
    if dz is None:
        dz = trailing_edge_half_thickness(y_upper, y_lower)
        logger.info(f"Trailing edge half-thickness from data: dz={dz:.6f}")

    w0 = cfg.seed_weights
    k = split_index(w0)
    params = CSTErrorParams.from_surfaces(
        k, x_upper, x_lower, y_upper, y_lower, dz, n1=cfg.n1, n2=cfg.n2
    )

    # Degenerate coordinates fail here, before the search starts
    initial_error = compute_cst_error(w0, params)
    bounds = weight_bounds(w0, cfg.bounds)

    logger.info(
        f"Fitting CST weights: {k} upper, {len(w0) - k} lower, bounds={cfg.bounds}, "
        f"N1={cfg.n1}, N2={cfg.n2}, initial RMS={initial_error:.6e}"
    )

    outcome = minimize(
        compute_cst_error,
        bounds,
        x0=w0,
        args=(params,),
        max_iters=cfg.max_iters,
        max_time=cfg.max_time,
        popsize=cfg.popsize,
        mutation=cfg.mutation,
        recombination=cfg.recombination,
        strategy=cfg.strategy,
        polish=cfg.polish,
        workers=cfg.workers,
        seed=cfg.seed,
    )

    w_upper, w_lower = compute_wuwl(outcome.x, k)
    rms_error = compute_cst_error(outcome.x, params)

    warning = None
    if cfg.tol is not None and rms_error > cfg.tol:
        warning = ConvergenceWarning(rms_error, cfg.tol, outcome.stop_reason)
        logger.warning(str(warning))

    logger.info(f"CST fit finished: RMS={rms_error:.6e} ({outcome.stop_reason})")

    return FitResult(
        w_upper=w_upper,
        w_lower=w_lower,
        dz=float(dz),
        n1=cfg.n1,
        n2=cfg.n2,
        rms_error=rms_error,
        initial_error=initial_error,
        n_iterations=outcome.nit,
        n_evaluations=outcome.nfev,
        elapsed=outcome.elapsed,
        stop_reason=outcome.stop_reason,
        warning=warning,
    )


def fit_result(x_upper, x_lower, y_upper, y_lower,
               n_points: Optional[int] = None,
               *,
               dz: Optional[float] = 0.0,
               w0=None,
               max_iters: Optional[int] = None,
               max_time: Optional[float] = None,
               n1: Optional[float] = None,
               n2: Optional[float] = None,
               bounds: Optional[str] = None,
               tol: Optional[float] = None,
               seed: Optional[int] = None,
               config: Optional[FitConfig] = None) -> FitResult:
    """
    Fit CST weights to surface points and return the full result

    Parameters:
    -----------
    x_upper, x_lower, y_upper, y_lower : array_like
        Target surface points
    n_points : int, optional
        Resample the fitted airfoil to this many points (x, y in the result)
    dz : float or None
        Trailing edge half-thickness; None derives it from the data
    w0 : array_like, optional
        Seed weights, positive (upper) values first
    max_iters, max_time : optional
        Iteration and wall-time (seconds) budget
    n1, n2 : float, optional
        Class function exponents
    bounds : str, optional
        'signed' or 'symmetric'
    tol : float, optional
        RMS tolerance; a result above it carries a ConvergenceWarning
    seed : int, optional
        Random seed for the optimizer
    config : FitConfig, optional
        Base settings; explicit arguments take precedence

    Returns:
    --------
    FitResult
    """
    cfg = _resolve_config(
        config, weights=w0, max_iters=max_iters, max_time=max_time,
        n1=n1, n2=n2, bounds=bounds, tol=tol, seed=seed,
    )
    result = _search(x_upper, x_lower, y_upper, y_lower, dz, cfg)

    if n_points is None:
        return result

    x, y = resample(result.w_upper, result.w_lower, result.dz, n_points, n1=cfg.n1, n2=cfg.n2)
    return replace(result, x=x, y=y)


def fit(x_upper, x_lower, y_upper, y_lower, n_points: int,
        *,
        dz: Optional[float] = 0.0,
        w0=None,
        max_iters: Optional[int] = None,
        max_time: Optional[float] = None,
        write_cst: Optional[bool] = None,
        filename: Optional[Union[str, Path]] = None,
        n1: Optional[float] = None,
        n2: Optional[float] = None,
        bounds: Optional[str] = None,
        tol: Optional[float] = None,
        seed: Optional[int] = None,
        config: Optional[FitConfig] = None) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Increase the resolution of an airfoil by fitting CST weights

    Searches the weights minimizing the RMS error against the given points
    (default bounds: [0, 1] for positive seeds, [-1, 0] for the others), then
    resamples the CST airfoil to n_points points.

    write_cst writes the result to <filename stem>_CST.csv; filename is then
    required. When write_cst is None, config.write_cst decides.

    Returns:
    --------
    tuple : (x_new, y_new, w_upper, w_lower)
    """
    if write_cst is None:
        write_cst = config.write_cst if config is not None else False
    if write_cst and filename is None:
        raise InputError("filename is required when write_cst is set")

    result = fit_result(
        x_upper, x_lower, y_upper, y_lower, n_points,
        dz=dz, w0=w0, max_iters=max_iters, max_time=max_time,
        n1=n1, n2=n2, bounds=bounds, tol=tol, seed=seed, config=config,
    )

    if write_cst:
        output_dir = config.output_dir if config is not None else None
        write_cst_file(result.x, result.y, filename, output_dir)

    return result.x, result.y, result.w_upper, result.w_lower


increase_resolution = fit


def get_weights(x_upper, x_lower, y_upper, y_lower,
                *,
                w0=None,
                max_iters: Optional[int] = None,
                max_time: Optional[float] = None,
                n1: Optional[float] = None,
                n2: Optional[float] = None,
                dz: Optional[float] = None,
                bounds: Optional[str] = None,
                tol: Optional[float] = None,
                seed: Optional[int] = None,
                config: Optional[FitConfig] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    CST weights of an airfoil, without resampling

    Trailing edge half-thickness is derived from the data unless dz is given.
    Without a config, all weights are bounded to [-1, 1] and the time budget
    is DEFAULT_WEIGHTS_MAX_TIME.

    Returns:
    --------
    tuple : (w_upper, w_lower)
    """
    if config is None:
        config = FitConfig(bounds='symmetric', max_time=DEFAULT_WEIGHTS_MAX_TIME)

    result = fit_result(
        x_upper, x_lower, y_upper, y_lower,
        dz=dz, w0=w0, max_iters=max_iters, max_time=max_time,
        n1=n1, n2=n2, bounds=bounds, tol=tol, seed=seed, config=config,
    )
    return result.w_upper, result.w_lower


def fit_file(path: Union[str, Path], n_points: int,
             *,
             dz: Optional[float] = 0.0,
             write_cst: Optional[bool] = None,
             output_dir: Optional[Union[str, Path]] = None,
             config: Optional[FitConfig] = None,
             **kwargs) -> FitResult:
    """
    Fit the airfoil stored in a CSV point file

    Reads and splits the points, fits and resamples, and writes
    <stem>_CST.csv next to the input (or into output_dir). When write_cst is
    None, config.write_cst decides; without a config the file is written.

    Returns:
    --------
    FitResult
        With resampled x, y
    """
    xu, xl, yu, yl = read_surfaces(path)
    logger.info(f"Loaded {path}: {len(xu)} upper, {len(xl)} lower points")

    result = fit_result(xu, xl, yu, yl, n_points, dz=dz, config=config, **kwargs)

    if write_cst is None:
        write_cst = config.write_cst if config is not None else True
    if write_cst:
        if output_dir is None and config is not None:
            output_dir = config.output_dir
        write_cst_file(result.x, result.y, path, output_dir)

    return result
