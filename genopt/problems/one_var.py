"""Optimize a real function of one variable over a bounded domain."""

from __future__ import annotations

import math
from typing import Any, Callable, Sequence

import numpy as np

from genopt.core.individual import ScalarIndividual
from genopt.evolution.operators import (
    Objective,
    bernoulli_mask,
    mean_crossover,
    pick_parent_indices,
    sort_by_fitness,
)
from genopt.execution.executor import PhaseExecutor, resolve_executor
from genopt.utils.rng_manager import RNGManager
from genopt.utils.validation import ConfigurationError, DomainValueError, require_finite


class OneVarFunctionProblem:
    """Finds the x in ``[min_domain, max_domain)`` that minimizes or maximizes ``function``.

    Args:
        min_domain: Inclusive lower bound, finite.
        max_domain: Exclusive upper bound, finite and greater than ``min_domain``.
        function: ``f(x) -> float``; every value it returns must be finite.
        objective: ``Objective.MINIMIZE`` or ``Objective.MAXIMIZE``.
        rng_manager: Seed source; a fresh unseeded one when omitted.
        executor: Phase executor shared by all phases.

    Crossover averages two parents. Mutation replaces x by a fresh uniform
    draw from the domain.
    """

    def __init__(
        self,
        min_domain: float,
        max_domain: float,
        function: Callable[[float], float],
        objective: Objective = Objective.MINIMIZE,
        rng_manager: RNGManager | None = None,
        executor: PhaseExecutor | None = None,
    ) -> None:
        self.min_domain = require_finite(min_domain, "min_domain")
        self.max_domain = require_finite(max_domain, "max_domain")
        if not self.min_domain < self.max_domain:
            raise DomainValueError("empty_domain", "min_domain must be less than max_domain",
                                   min_domain=self.min_domain, max_domain=self.max_domain)
        if function is None or not callable(function):
            raise DomainValueError("invalid_function", "function must be callable",
                                   type=type(function).__name__)
        if not isinstance(objective, Objective):
            raise ConfigurationError("invalid_objective", "objective must be an Objective",
                                     objective=objective)
        self.function = function
        self.objective = objective
        self.executor = resolve_executor(rng_manager, executor)

    def evaluate(self, x: float) -> float:
        value = self.function(x)
        try:
            return require_finite(value, "function value")
        except DomainValueError as exc:
            raise DomainValueError("invalid_function_value", f"function({x!r}) returned {value!r}",
                                   x=x, value=value) from exc

    def _draw(self, rng: np.random.Generator, count: int) -> np.ndarray:
        return rng.uniform(self.min_domain, self.max_domain, size=count)

    def generate_initial_population(self, population_size: int) -> list[ScalarIndividual]:
        def build(indices: Sequence[int], rng: np.random.Generator) -> list[ScalarIndividual]:
            return [ScalarIndividual(float(x)) for x in self._draw(rng, len(indices))]

        return self.executor.map_chunks("one_var.init", range(population_size), build)

    def calculate_fitness(self, population: list[ScalarIndividual]) -> None:
        def score(chunk: Sequence[ScalarIndividual], _rng) -> list[float]:
            return [self.evaluate(ind.genes) for ind in chunk]

        scores = self.executor.map_chunks("one_var.fitness", population, score, use_rng=False)
        for individual, value in zip(population, scores):
            individual.fitness = value
        sort_by_fitness(population)

    def get_best_individual(self, population: list[ScalarIndividual]) -> ScalarIndividual:
        return self.objective.best(population)

    def selection(self, population: list[ScalarIndividual], selection_percent: float) -> list[ScalarIndividual]:
        return self.objective.select(population, selection_percent)

    def crossover(self, sub_population: list[ScalarIndividual], population_size: int) -> list[ScalarIndividual]:
        parents = [ind.genes for ind in sub_population]

        def breed(indices: Sequence[int], rng: np.random.Generator) -> list[ScalarIndividual]:
            first, second = pick_parent_indices(rng, len(parents), len(indices))
            return [ScalarIndividual(mean_crossover(parents[a], parents[b])) for a, b in zip(first, second)]

        return self.executor.map_chunks("one_var.crossover", range(population_size), breed)

    def mutate(self, population: list[ScalarIndividual], mutation_prob: float) -> None:
        def flip(chunk: Sequence[ScalarIndividual], rng: np.random.Generator) -> list[float | None]:
            mask = bernoulli_mask(rng, len(chunk), mutation_prob)
            if not mask.any():
                return [None] * len(chunk)
            draws = self._draw(rng, len(chunk))
            return [float(x) if hit else None for x, hit in zip(draws, mask)]

        mutated = self.executor.map_chunks("one_var.mutate", population, flip)
        for individual, x in zip(population, mutated):
            if x is not None:
                individual.genes = x


def MinimizeOneVar(min_domain: float, max_domain: float, function: Callable[[float], float],
                   **kwargs: Any) -> OneVarFunctionProblem:
    """``OneVarFunctionProblem`` searching for the smallest value of ``function``."""
    return OneVarFunctionProblem(min_domain, max_domain, function, Objective.MINIMIZE, **kwargs)


def MaximizeOneVar(min_domain: float, max_domain: float, function: Callable[[float], float],
                   **kwargs: Any) -> OneVarFunctionProblem:
    """``OneVarFunctionProblem`` searching for the largest value of ``function``."""
    return OneVarFunctionProblem(min_domain, max_domain, function, Objective.MAXIMIZE, **kwargs)


__all__ = ["OneVarFunctionProblem", "MinimizeOneVar", "MaximizeOneVar"]
