"""Shared utilities: errors, randomness, observability."""

from .observability import assert_determinism_equivalence, determinism_signature, run_report  # noqa: F401
from .rng_manager import RNGManager  # noqa: F401
from .validation import (  # noqa: F401
    ConfigurationError,
    DomainValueError,
    GenoptError,
    RuntimeStrategyError,
)

__all__ = [
    'RNGManager',
    'GenoptError',
    'ConfigurationError',
    'DomainValueError',
    'RuntimeStrategyError',
    'run_report',
    'determinism_signature',
    'assert_determinism_equivalence',
]
