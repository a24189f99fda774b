"""
Bounded derivative-free optimizer

Differential evolution 기반 전역 최적화
- Box constraints per variable
- Budget: max iterations (generations) and max wall-clock time
- Best candidate found within budget is returned

Usage:
    from cstfit.optimizer import minimize

    outcome = minimize(objective, bounds, x0=w0, max_iters=100, max_time=10.0)
    outcome.x, outcome.fun, outcome.stop_reason
"""

import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

import numpy as np
from scipy.optimize import differential_evolution

from .config import (
    DEFAULT_MAX_ITERS,
    DEFAULT_MAX_TIME,
    DEFAULT_MUTATION,
    DEFAULT_POPSIZE,
    DEFAULT_RECOMBINATION,
    DEFAULT_STRATEGY,
)
from .exceptions import InputError

logger = logging.getLogger(__name__)

STOP_MAXITER = 'maxiter'
STOP_MAXTIME = 'maxtime'
STOP_CONVERGED = 'converged'


@dataclass(frozen=True)
class OptimizationOutcome:
    """최적화 결과"""
    x: np.ndarray
    fun: float
    nit: int
    nfev: int
    elapsed: float
    stop_reason: str
    message: str

    def to_dict(self) -> dict:
        return {
            'x': self.x.tolist(),
            'fun': self.fun,
            'nit': self.nit,
            'nfev': self.nfev,
            'elapsed': self.elapsed,
            'stop_reason': self.stop_reason,
            'message': self.message,
        }


class DifferentialEvolutionOptimizer:
    """
    Differential evolution with an iteration and wall-time budget

    Whichever budget triggers first ends the search. No guarantee of global
    optimality, only the best candidate found within the budget.
    """

    def __init__(self,
                 objective: Callable,
                 bounds: Sequence[Tuple[float, float]],
                 args: tuple = (),
                 max_iters: int = DEFAULT_MAX_ITERS,
                 max_time: float = DEFAULT_MAX_TIME,
                 popsize: int = DEFAULT_POPSIZE,
                 mutation: Union[float, Tuple[float, float]] = DEFAULT_MUTATION,
                 recombination: float = DEFAULT_RECOMBINATION,
                 strategy: str = DEFAULT_STRATEGY,
                 polish: bool = False,
                 workers: int = 1,
                 seed: Optional[int] = None):
        """
        Initialize optimizer

        Parameters
        ----------
        objective : callable
            f(x, *args) -> float, minimized
        bounds : sequence of (low, high)
            Box constraint per variable
        args : tuple
            Extra arguments passed to the objective
        max_iters : int
            Maximum number of generations
        max_time : float
            Maximum wall-clock time in seconds
        popsize, mutation, recombination, strategy, polish, workers, seed
            Passed to scipy.optimize.differential_evolution
        """
        if len(bounds) == 0:
            raise InputError("At least one bounded variable is required")
        for low, high in bounds:
            if not low < high:
                raise InputError(f"Invalid bounds ({low}, {high}): lower must be below upper")
        if max_iters <= 0:
            raise InputError(f"max_iters must be positive, got {max_iters}")
        if max_time <= 0:
            raise InputError(f"max_time must be positive, got {max_time}")

        self.objective = objective
        self.bounds: List[Tuple[float, float]] = [(float(lo), float(hi)) for lo, hi in bounds]
        self.args = args
        self.max_iters = int(max_iters)
        self.max_time = float(max_time)
        self.popsize = int(popsize)
        self.mutation = mutation
        self.recombination = recombination
        self.strategy = strategy
        self.polish = polish
        self.workers = workers
        self.seed = seed

        self.n_iterations = 0
        self.time_exceeded = False

    def _clip_to_bounds(self, x0) -> np.ndarray:
        lower = np.array([b[0] for b in self.bounds])
        upper = np.array([b[1] for b in self.bounds])
        x0 = np.asarray(x0, dtype=float).ravel()
        if len(x0) != len(self.bounds):
            raise InputError(f"Initial guess has {len(x0)} values for {len(self.bounds)} bounds")
        return np.clip(x0, lower, upper)

    def optimize(self, x0: Optional[np.ndarray] = None) -> OptimizationOutcome:
        """
        Run the search

        Parameters
        ----------
        x0 : np.ndarray, optional
            Initial guess, included in the initial population

        Returns
        -------
        OptimizationOutcome
        """
        self.n_iterations = 0
        self.time_exceeded = False

        kwargs = {}
        if x0 is not None:
            kwargs['x0'] = self._clip_to_bounds(x0)
        if self.seed is not None:
            kwargs['rng'] = self.seed

        logger.info(
            f"Starting differential evolution: {len(self.bounds)} variables, "
            f"max_iters={self.max_iters}, max_time={self.max_time:.1f}s"
        )

        start = time.perf_counter()

        def callback(xk, convergence=None):
            self.n_iterations += 1
            elapsed = time.perf_counter() - start
            if self.n_iterations % 50 == 0:
                logger.debug(f"Generation {self.n_iterations}: elapsed {elapsed:.2f}s")
            if elapsed >= self.max_time:
                self.time_exceeded = True
                return True
            return False

        result = differential_evolution(
            self.objective,
            self.bounds,
            args=self.args,
            strategy=self.strategy,
            maxiter=self.max_iters,
            popsize=self.popsize,
            tol=0.0,
            atol=0.0,
            mutation=self.mutation,
            recombination=self.recombination,
            polish=self.polish,
            callback=callback,
            workers=self.workers,
            updating='immediate' if self.workers == 1 else 'deferred',
            **kwargs
        )

        elapsed = time.perf_counter() - start

        if self.time_exceeded:
            stop_reason = STOP_MAXTIME
        elif int(result.nit) >= self.max_iters:
            stop_reason = STOP_MAXITER
        else:
            stop_reason = STOP_CONVERGED

        outcome = OptimizationOutcome(
            x=np.asarray(result.x, dtype=float),
            fun=float(result.fun),
            nit=int(result.nit),
            nfev=int(result.nfev),
            elapsed=elapsed,
            stop_reason=stop_reason,
            message=str(result.message),
        )

        logger.info(
            f"Differential evolution stopped ({stop_reason}): objective={outcome.fun:.6e}, "
            f"generations={outcome.nit}, evaluations={outcome.nfev}, elapsed={elapsed:.2f}s"
        )
        return outcome


def minimize(objective: Callable,
             bounds: Sequence[Tuple[float, float]],
             x0: Optional[np.ndarray] = None,
             args: tuple = (),
             max_iters: int = DEFAULT_MAX_ITERS,
             max_time: float = DEFAULT_MAX_TIME,
             **kwargs) -> OptimizationOutcome:
    """Minimize objective within bounds and budget, see DifferentialEvolutionOptimizer"""
    optimizer = DifferentialEvolutionOptimizer(
        objective,
        bounds,
        args=args,
        max_iters=max_iters,
        max_time=max_time,
        **kwargs
    )
    return optimizer.optimize(x0=x0)
