"""
Configuration tests
"""

import numpy as np
import pytest

from cstfit import FitConfig, InputError
from cstfit.config import DEFAULT_FIT_WEIGHTS, default_weights


SCENARIO = """
model:
  weights: [0.2, 0.1, -0.1]
  n1: 0.5
  n2: 1.0
  bounds: symmetric
optimization:
  max_iterations: 250
  max_time: 30
  tolerance: 1.0e-4
  population_size: 20
  seed: 42
output:
  directory: output/cst
  write: true
"""


def test_defaults():
    config = FitConfig()

    assert config.weights == DEFAULT_FIT_WEIGHTS
    assert config.n1 == 0.5
    assert config.n2 == 1.0
    assert config.bounds == 'signed'
    assert config.tol is None


def test_from_yaml(tmp_path):
    path = tmp_path / "scenario.yaml"
    path.write_text(SCENARIO, encoding='utf-8')

    config = FitConfig.from_yaml(path)

    assert config.weights == (0.2, 0.1, -0.1)
    assert config.bounds == 'symmetric'
    assert config.max_iters == 250
    assert config.max_time == 30.0
    assert config.tol == pytest.approx(1e-4)
    assert config.popsize == 20
    assert config.seed == 42
    assert config.output_dir == "output/cst"
    assert config.write_cst is True


def test_from_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert FitConfig.from_yaml(path) == FitConfig()


def test_from_yaml_missing_file(tmp_path):
    with pytest.raises(InputError):
        FitConfig.from_yaml(tmp_path / "missing.yaml")


def test_from_yaml_invalid(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("model: [unclosed\n")

    with pytest.raises(InputError):
        FitConfig.from_yaml(path)


def test_from_dict_rejects_non_mapping():
    with pytest.raises(InputError):
        FitConfig.from_dict([1, 2, 3])


@pytest.mark.parametrize("kwargs", [
    {'bounds': 'loose'},
    {'max_iters': 0},
    {'max_time': -1.0},
    {'tol': -1e-3},
    {'weights': ()},
    {'popsize': 0},
])
def test_invalid_values(kwargs):
    with pytest.raises(InputError):
        FitConfig(**kwargs)


def test_default_weights_are_fresh_arrays():
    a = default_weights()
    b = default_weights()
    a[0] = 99.0

    assert b[0] == DEFAULT_FIT_WEIGHTS[0]
    np.testing.assert_array_equal(FitConfig().seed_weights, DEFAULT_FIT_WEIGHTS)


def test_mutation_single_factor():
    """A single mutation constant is kept as a scalar"""
    config = FitConfig.from_dict({'optimization': {'mutation': 0.8}})

    assert config.mutation == 0.8
    assert FitConfig.from_dict({'optimization': {'mutation': [0.4, 0.9]}}).mutation == (0.4, 0.9)


@pytest.mark.parametrize("optimization", [
    {'mutation': [0.5, 1.0, 1.5]},
    {'mutation': 'fast'},
    {'mutation': 2.5},
    {'max_iterations': 'many'},
    {'max_time': [10]},
    {'seed': 'abc'},
])
def test_from_dict_bad_values(optimization):
    with pytest.raises(InputError):
        FitConfig.from_dict({'optimization': optimization})


@pytest.mark.parametrize("data", [
    {'model': {'weights': 0.1}},
    {'model': {'n1': 'half'}},
    {'optimization': [1, 2]},
])
def test_from_dict_bad_model_or_section(data):
    with pytest.raises(InputError):
        FitConfig.from_dict(data)
