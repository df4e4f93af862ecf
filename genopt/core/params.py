"""Run configuration for GeneticOptimization."""

from __future__ import annotations

import math
from typing import Any

from genopt.utils.validation import ConfigurationError, is_real_number, require_finite, require_positive_int


class GeneticOptimizationParams:
    """Validated, read-only run parameters.

    Attributes:
        population_size: Individuals per generation
        max_generations: Generations bred after the initial one
        selection_percent: Fraction of the population kept as parents, in (0, 1].
            ``floor(selection_percent * population_size)`` must be at least 1,
            otherwise construction raises ``ConfigurationError("empty_selection")``.
        mutation_prob: Per-locus mutation probability, in [0, 1]
        target_value: Fitness that ends the run early. Defaults to +inf,
            which no finite fitness ever equals.
        target_tolerance: 0.0 (default) compares fitness to target_value with
            exact equality; a positive value accepts any fitness within it.
    """

    def __init__(
        self,
        population_size: int,
        max_generations: int,
        selection_percent: float,
        mutation_prob: float,
        target_value: float | None = None,
        target_tolerance: float = 0.0,
    ) -> None:
        self._population_size = require_positive_int(population_size, "population_size")
        self._max_generations = require_positive_int(max_generations, "max_generations")

        if not is_real_number(selection_percent) or not 0.0 < selection_percent <= 1.0:
            raise ConfigurationError("invalid_selection_percent", "selection_percent must lie in (0, 1]",
                                     value=selection_percent)
        if not is_real_number(mutation_prob) or not 0.0 <= mutation_prob <= 1.0:
            raise ConfigurationError("invalid_mutation_prob", "mutation_prob must lie in [0, 1]",
                                     value=mutation_prob)
        self._selection_percent = float(selection_percent)
        self._mutation_prob = float(mutation_prob)

        if math.floor(self._selection_percent * self._population_size) < 1:
            raise ConfigurationError(
                "empty_selection",
                "selection_percent * population_size must keep at least one parent",
                selection_percent=self._selection_percent,
                population_size=self._population_size,
            )

        self._target_value = math.inf
        if target_value is not None:
            self.target_value = target_value
        self.target_tolerance = target_tolerance

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def max_generations(self) -> int:
        return self._max_generations

    @property
    def selection_percent(self) -> float:
        return self._selection_percent

    @property
    def mutation_prob(self) -> float:
        return self._mutation_prob

    @property
    def target_value(self) -> float:
        return self._target_value

    @target_value.setter
    def target_value(self, value: float) -> None:
        self._target_value = require_finite(value, "target_value", ConfigurationError)

    @property
    def target_tolerance(self) -> float:
        return self._target_tolerance

    @target_tolerance.setter
    def target_tolerance(self, value: float) -> None:
        tolerance = require_finite(value, "target_tolerance", ConfigurationError)
        if tolerance < 0.0:
            raise ConfigurationError("negative_tolerance", "target_tolerance cannot be negative", value=value)
        self._target_tolerance = tolerance

    @property
    def has_target(self) -> bool:
        return math.isfinite(self._target_value)

    def target_reached(self, fitness: float) -> bool:
        """Whether ``fitness`` ends the run."""
        if self._target_tolerance == 0.0:
            return fitness == self._target_value
        return abs(fitness - self._target_value) <= self._target_tolerance

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "GeneticOptimizationParams":
        """Build params from a plain config dict (see ``genopt.config`` presets)."""
        missing = [k for k in ("population_size", "max_generations", "selection_percent", "mutation_prob")
                   if k not in config]
        if missing:
            raise ConfigurationError("missing_param", f"Missing required parameters: {missing}",
                                     missing=tuple(missing))
        return cls(
            population_size=config["population_size"],
            max_generations=config["max_generations"],
            selection_percent=config["selection_percent"],
            mutation_prob=config["mutation_prob"],
            target_value=config.get("target_value"),
            target_tolerance=config.get("target_tolerance", 0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "population_size": self._population_size,
            "max_generations": self._max_generations,
            "selection_percent": self._selection_percent,
            "mutation_prob": self._mutation_prob,
            "target_value": self._target_value if self.has_target else None,
            "target_tolerance": self._target_tolerance,
        }

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"GeneticOptimizationParams({fields})"


__all__ = ["GeneticOptimizationParams"]
