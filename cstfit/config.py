"""
CST Fitting Configuration

기본 설정값 및 YAML 설정 로더
- Class function exponents (N1, N2)
- Default seed weights for fit / get_weights
- Differential evolution budget and settings
"""

from typing import Dict, Optional, Tuple, Union
from dataclasses import dataclass, asdict
from pathlib import Path

import numpy as np
import yaml

from .exceptions import InputError


# Class function exponents (round nose, sharp trailing edge)
DEFAULT_N1: float = 0.5
DEFAULT_N2: float = 1.0

# Seed weights: positive entries are the upper surface, the rest the lower
DEFAULT_FIT_WEIGHTS: Tuple[float, ...] = (0.1, 0.1, 0.1, -0.1, -0.1, -0.1)

# Optimization budget
DEFAULT_MAX_ITERS: int = 100
DEFAULT_MAX_TIME: float = 100.0          # seconds
DEFAULT_WEIGHTS_MAX_TIME: float = 10.0   # seconds, get_weights

# Differential evolution settings
DEFAULT_POPSIZE: int = 15
DEFAULT_MUTATION: Tuple[float, float] = (0.5, 1.0)
DEFAULT_RECOMBINATION: float = 0.7
DEFAULT_STRATEGY: str = 'best1bin'

BOUNDS_MODES = ('signed', 'symmetric')

# Output
OUTPUT_SUFFIX: str = "_CST"
OUTPUT_EXTENSION: str = ".csv"


def _as_mutation(value) -> Union[float, Tuple[float, float]]:
    """Dither pair (low, high) or a single constant factor"""
    if np.isscalar(value):
        return float(value)
    pair = tuple(float(m) for m in value)
    if len(pair) != 2:
        raise ValueError(f"mutation needs one value or a (low, high) pair, got {len(pair)}")
    return pair


def default_weights(weights: Optional[Tuple[float, ...]] = None) -> np.ndarray:
    """Fresh float array of seed weights (never shares state between calls)"""
    return np.array(DEFAULT_FIT_WEIGHTS if weights is None else weights, dtype=float)


@dataclass
class FitConfig:
    """CST 피팅 설정"""
    # Model
    weights: Tuple[float, ...] = DEFAULT_FIT_WEIGHTS
    n1: float = DEFAULT_N1
    n2: float = DEFAULT_N2
    bounds: str = 'signed'

    # Budget
    max_iters: int = DEFAULT_MAX_ITERS
    max_time: float = DEFAULT_MAX_TIME
    tol: Optional[float] = None

    # Differential evolution
    popsize: int = DEFAULT_POPSIZE
    mutation: Union[float, Tuple[float, float]] = DEFAULT_MUTATION
    recombination: float = DEFAULT_RECOMBINATION
    strategy: str = DEFAULT_STRATEGY
    polish: bool = False
    workers: int = 1
    seed: Optional[int] = None

    # Output
    output_dir: Optional[str] = None
    write_cst: bool = False

    def __post_init__(self):
        try:
            self.weights = tuple(float(w) for w in self.weights)
            self.mutation = _as_mutation(self.mutation)
        except (TypeError, ValueError) as e:
            raise InputError(f"Invalid weights or mutation setting: {e}") from e
        self.validate()

    def validate(self):
        """Check option values, raise InputError on the first bad one"""
        if len(self.weights) == 0:
            raise InputError("Seed weight vector is empty")
        if self.bounds not in BOUNDS_MODES:
            raise InputError(
                f"Unknown bounds mode: {self.bounds!r} (expected one of {BOUNDS_MODES})"
            )
        if self.max_iters <= 0:
            raise InputError(f"max_iters must be positive, got {self.max_iters}")
        if self.max_time <= 0:
            raise InputError(f"max_time must be positive, got {self.max_time}")
        if self.tol is not None and self.tol < 0:
            raise InputError(f"tol must be non-negative, got {self.tol}")
        if self.popsize <= 0:
            raise InputError(f"popsize must be positive, got {self.popsize}")
        factors = self.mutation if isinstance(self.mutation, tuple) else (self.mutation,)
        if not all(0 <= m <= 2 for m in factors):
            raise InputError(f"mutation must lie in [0, 2], got {self.mutation}")

    @property
    def seed_weights(self) -> np.ndarray:
        return default_weights(self.weights)

    @classmethod
    def from_dict(cls, data: Dict) -> 'FitConfig':
        """
        Build config from a nested dict

        Accepted layout (all keys optional):

            model:
              weights: [0.1, 0.1, 0.1, -0.1, -0.1, -0.1]
              n1: 0.5
              n2: 1.0
              bounds: signed
            optimization:
              max_iterations: 100
              max_time: 100.0
              tolerance: 1.0e-4
              population_size: 15
              mutation: [0.5, 1.0]
              recombination: 0.7
              strategy: best1bin
              polish: false
              workers: 1
              seed: 42
            output:
              directory: output/cst
              write: true
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InputError(f"Config must be a mapping, got {type(data).__name__}")

        model = data.get('model', {}) or {}
        optimization = data.get('optimization', {}) or {}
        output = data.get('output', {}) or {}
        for name, section in (('model', model), ('optimization', optimization), ('output', output)):
            if not isinstance(section, dict):
                raise InputError(f"Config section '{name}' must be a mapping")

        kwargs = {}
        try:
            if 'weights' in model:
                kwargs['weights'] = tuple(model['weights'])
            if 'n1' in model:
                kwargs['n1'] = float(model['n1'])
            if 'n2' in model:
                kwargs['n2'] = float(model['n2'])
            if 'bounds' in model:
                kwargs['bounds'] = str(model['bounds'])

            if 'max_iterations' in optimization:
                kwargs['max_iters'] = int(optimization['max_iterations'])
            if 'max_time' in optimization:
                kwargs['max_time'] = float(optimization['max_time'])
            if optimization.get('tolerance') is not None:
                kwargs['tol'] = float(optimization['tolerance'])
            if 'population_size' in optimization:
                kwargs['popsize'] = int(optimization['population_size'])
            if 'mutation' in optimization:
                kwargs['mutation'] = _as_mutation(optimization['mutation'])
            if 'recombination' in optimization:
                kwargs['recombination'] = float(optimization['recombination'])
            if 'strategy' in optimization:
                kwargs['strategy'] = str(optimization['strategy'])
            if 'polish' in optimization:
                kwargs['polish'] = bool(optimization['polish'])
            if 'workers' in optimization:
                kwargs['workers'] = int(optimization['workers'])
            if optimization.get('seed') is not None:
                kwargs['seed'] = int(optimization['seed'])
        except (TypeError, ValueError) as e:
            raise InputError(f"Invalid config value: {e}") from e

        if output.get('directory') is not None:
            kwargs['output_dir'] = str(output['directory'])
        if 'write' in output:
            kwargs['write_cst'] = bool(output['write'])

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, filepath: str) -> 'FitConfig':
        """YAML 파일에서 설정 로드"""
        path = Path(filepath)
        if not path.exists():
            raise InputError(f"Config file not found: {filepath}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InputError(f"Invalid YAML in {filepath}: {e}") from e

        return cls.from_dict(data)

    def to_dict(self) -> Dict:
        return asdict(self)
