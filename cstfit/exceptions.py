"""
Exceptions for CST fitting

Error taxonomy:
- InputError: malformed points, files, seeds or options
- NumericalError: NaN/inf or empty arrays in the error or evaluator
- ConvergenceWarning: budget exhausted above the requested tolerance (not raised)
"""


class CSTFitError(Exception):
    """Base class for all cstfit errors"""


class InputError(CSTFitError, ValueError):
    """
    Invalid input data or options.

    Raised for missing CSV columns, mismatched x/y lengths, too few points
    to locate a leading edge, a leading edge at the sequence boundary, a seed
    weight vector whose sign pattern cannot be split, and invalid config.
    """


class NumericalError(CSTFitError, ArithmeticError):
    """Degenerate numeric input: empty arrays or non-finite values"""


class ConvergenceWarning(UserWarning):
    """
    Optimizer stopped on its iteration/time budget above the error tolerance.

    Attached to ``FitResult.warning``; never raised.
    """

    def __init__(self, rms_error: float, tol: float, stop_reason: str):
        self.rms_error = rms_error
        self.tol = tol
        self.stop_reason = stop_reason
        super().__init__(
            f"RMS error {rms_error:.3e} above tolerance {tol:.3e} "
            f"(stopped on {stop_reason})"
        )
