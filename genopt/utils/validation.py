"""Error taxonomy for genopt.

Every error carries a stable ``code`` for programmatic checks, a human
readable message and free-form keyword context.
"""

from __future__ import annotations

import math
import numbers
from typing import Any


class GenoptError(Exception):
    """Base class for all genopt errors."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return f"[{self.code}] {self.message}"
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"[{self.code}] {self.message} ({details})"


class ConfigurationError(GenoptError, ValueError):
    """Invalid run configuration or a missing strategy/params reference."""


class DomainValueError(GenoptError, ValueError):
    """Invalid gene, fitness or domain value."""


class RuntimeStrategyError(GenoptError, RuntimeError):
    """A strategy callback failed while the optimizer was running."""


def is_real_number(value: Any) -> bool:
    # bool is an int subclass; never a valid numeric setting here
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def require_finite(value: Any, name: str, error: type[GenoptError] = DomainValueError) -> float:
    """Return ``value`` as float or raise ``error`` when it is not a finite real."""
    if not is_real_number(value):
        raise error("not_a_number", f"{name} must be a real number", field=name, value=value)
    if not math.isfinite(value):
        raise error("non_finite_value", f"{name} cannot be NaN or infinite", field=name, value=value)
    return float(value)


def require_positive_int(value: Any, name: str, error: type[GenoptError] = ConfigurationError) -> int:
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        raise error("not_an_int", f"{name} must be an integer", field=name, value=value)
    if value <= 0:
        raise error("non_positive_value", f"{name} must be greater than zero", field=name, value=value)
    return int(value)


__all__ = [
    "GenoptError",
    "ConfigurationError",
    "DomainValueError",
    "RuntimeStrategyError",
    "is_real_number",
    "require_finite",
    "require_positive_int",
]
