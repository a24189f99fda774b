"""
Bounded differential evolution driver tests
"""

import numpy as np
import pytest

from cstfit import InputError
from cstfit.optimizer import (
    STOP_MAXTIME,
    DifferentialEvolutionOptimizer,
    minimize,
)


def sphere(x, center):
    return float(np.sum((x - center)**2))


def test_minimize_finds_interior_minimum():
    center = np.array([0.3, -0.2])
    outcome = minimize(sphere, [(-1, 1), (-1, 1)], args=(center,),
                       max_iters=200, max_time=60.0, seed=3)

    np.testing.assert_allclose(outcome.x, center, atol=1e-3)
    assert outcome.fun < 1e-6
    assert outcome.stop_reason != STOP_MAXTIME
    assert outcome.nit <= 200


def test_minimize_respects_bounds():
    """Unconstrained minimum outside the box lands on the boundary"""
    center = np.array([2.0, -2.0])
    outcome = minimize(sphere, [(0, 1), (-1, 0)], args=(center,),
                       max_iters=100, max_time=60.0, seed=1)

    assert np.all(outcome.x >= [0, -1]) and np.all(outcome.x <= [1, 0])
    np.testing.assert_allclose(outcome.x, [1.0, -1.0], atol=1e-2)


def test_minimize_time_budget():
    outcome = minimize(sphere, [(-1, 1)] * 3, args=(np.zeros(3),),
                       max_iters=100000, max_time=1e-6, seed=0)

    assert outcome.stop_reason == STOP_MAXTIME
    assert outcome.nit < 100000


def test_minimize_seeded_runs_repeat():
    kwargs = dict(args=(np.array([0.1, 0.2, 0.3]),), max_iters=20, max_time=60.0, seed=7)
    first = minimize(sphere, [(-1, 1)] * 3, **kwargs)
    second = minimize(sphere, [(-1, 1)] * 3, **kwargs)

    np.testing.assert_array_equal(first.x, second.x)
    assert first.fun == second.fun


def test_initial_guess_clipped_to_bounds():
    opt = DifferentialEvolutionOptimizer(sphere, [(0, 1), (0, 1)], args=(np.zeros(2),),
                                         max_iters=5, max_time=60.0, seed=0)
    outcome = opt.optimize(x0=np.array([5.0, -5.0]))

    assert np.all(outcome.x >= 0) and np.all(outcome.x <= 1)


def test_initial_guess_wrong_length():
    opt = DifferentialEvolutionOptimizer(sphere, [(0, 1), (0, 1)], args=(np.zeros(2),))
    with pytest.raises(InputError):
        opt.optimize(x0=np.zeros(3))


@pytest.mark.parametrize("bounds, kwargs", [
    ([], {}),
    ([(1, 0)], {}),
    ([(0, 1)], {'max_iters': 0}),
    ([(0, 1)], {'max_time': 0.0}),
])
def test_invalid_settings(bounds, kwargs):
    with pytest.raises(InputError):
        DifferentialEvolutionOptimizer(sphere, bounds, **kwargs)


def test_outcome_to_dict():
    outcome = minimize(sphere, [(-1, 1)] * 2, args=(np.zeros(2),),
                       max_iters=3, max_time=60.0, seed=0)
    data = outcome.to_dict()

    assert data['x'] == outcome.x.tolist()
    assert data['nit'] == outcome.nit
    assert data['stop_reason'] == outcome.stop_reason
    assert set(data) == {'x', 'fun', 'nit', 'nfev', 'elapsed', 'stop_reason', 'message'}
