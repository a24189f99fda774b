"""
CST Airfoil Fitting

Class-Shape Transformation(CST) 가중치 피팅 및 재샘플링 패키지

Usage:
    from cstfit import read_surfaces, fit, get_weights

    # Split points at the leading edge
    xu, xl, yu, yl = read_surfaces("e1098.csv")

    # Fit and resample to 500 points
    x, y, wu, wl = fit(xu, xl, yu, yl, 500, max_iters=200, max_time=30.0)

    # Weights only, symmetric bounds
    wu, wl = get_weights(xu, xl, yu, yl, n1=0.5, n2=1.0)

    # Full result with RMS error and stop reason
    result = fit_result(xu, xl, yu, yl, 500, tol=1e-4)
    print(result.rms_error, result.stop_reason, result.converged)
"""

import logging

from .config import FitConfig
from .cst import class_function, cst_airfoil, resample, shape_function
from .exceptions import ConvergenceWarning, CSTFitError, InputError, NumericalError
from .fit import FitResult, fit, fit_file, fit_result, get_weights, increase_resolution
from .geometry import concatenate_surfaces, split_upper_lower, trailing_edge_half_thickness
from .io import (
    cst_output_path,
    cst_to_csv,
    read_coordinates,
    read_points,
    read_surfaces,
    write_cst,
    write_points,
)
from .objective import CSTErrorParams, compute_cst_error, compute_error, compute_wuwl
from .optimizer import OptimizationOutcome, minimize

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version info
__version__ = "1.0.0"
__all__ = [
    # Fitting
    'fit',
    'fit_result',
    'fit_file',
    'get_weights',
    'increase_resolution',
    'FitResult',
    'FitConfig',

    # Model
    'class_function',
    'shape_function',
    'cst_airfoil',
    'resample',

    # Objective
    'compute_error',
    'compute_wuwl',
    'compute_cst_error',
    'CSTErrorParams',
    'minimize',
    'OptimizationOutcome',

    # Geometry / I/O
    'split_upper_lower',
    'concatenate_surfaces',
    'trailing_edge_half_thickness',
    'read_points',
    'read_surfaces',
    'read_coordinates',
    'write_points',
    'write_cst',
    'cst_output_path',
    'cst_to_csv',

    # Errors
    'CSTFitError',
    'InputError',
    'NumericalError',
    'ConvergenceWarning',
]
