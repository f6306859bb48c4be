"""
Runner configuration.

Responsibility: defaults plus an optional YAML override file, in the same
shape run_checks.py reads. Library functions never read configuration;
they take their tunables as arguments.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from primekit.errors import PrimeDomainError

DEFAULT_CONFIG: Dict[str, Any] = {
    'sieve_lo': 1,
    'sieve_hi': 10**6,
    'factor_samples': 200,
    'factor_bits': 80,
    'search_samples': 200,
    'mersenne_exponents': [3, 5, 7, 11, 13, 17, 19, 23, 31, 61, 89, 107, 127],
    'reps': 25,
    'seed': 42,
    'output_dir': 'data/results',
}


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load runner settings.

    Parameters
    ----------
    path : str or Path, optional
        YAML file whose top-level keys override DEFAULT_CONFIG.

    Returns
    -------
    dict
        Complete configuration.
    """
    config = dict(DEFAULT_CONFIG)
    if path is None:
        return config

    with open(path) as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise PrimeDomainError(f"{path}: expected a mapping at top level", path)
    unknown = sorted(set(overrides) - set(DEFAULT_CONFIG))
    if unknown:
        raise PrimeDomainError(f"{path}: unknown config keys {unknown}", *unknown)

    config.update(overrides)
    return config
