"""Selection, crossover and mutation building blocks.

Strategies compose these instead of inheriting them. The only
sense-dependent pieces (picking the best individual and truncation
selection) live on ``Objective``; everything else ignores the sense.
"""

from __future__ import annotations

import enum
import math
from typing import Sequence, TypeVar

import numpy as np

from genopt.core.individual import Individual
from genopt.utils.validation import DomainValueError

I = TypeVar("I", bound=Individual)


def _fitness_key(individual: Individual) -> float:
    fitness = individual.fitness
    if fitness is None:
        raise DomainValueError("unscored_individual", "Cannot rank an individual without fitness",
                               individual=repr(individual))
    return fitness


def sort_by_fitness(population: list[I]) -> None:
    """Sort ``population`` in place, ascending by fitness.

    ``list.sort`` is stable: equal-fitness individuals keep their order.
    """
    population.sort(key=_fitness_key)


def is_sorted_by_fitness(population: Sequence[Individual]) -> bool:
    keys = [_fitness_key(ind) for ind in population]
    return all(a <= b for a, b in zip(keys, keys[1:]))


def truncation_count(population_size: int, selection_percent: float) -> int:
    """Number of parents kept: ``floor(selection_percent * population_size)``."""
    if not 0.0 < selection_percent <= 1.0:
        raise DomainValueError("invalid_selection_percent", "selection_percent must lie in (0, 1]",
                               value=selection_percent)
    return int(math.floor(selection_percent * population_size))


class Objective(enum.Enum):
    """Optimization sense of a strategy.

    Both methods expect a population already sorted ascending by fitness, as
    ``calculate_fitness`` leaves it.
    """

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"

    def best(self, population: Sequence[I]) -> I:
        if not population:
            raise DomainValueError("empty_population", "Cannot pick the best of an empty population")
        return population[0] if self is Objective.MINIMIZE else population[-1]

    def select(self, population: Sequence[I], selection_percent: float) -> list[I]:
        keep = truncation_count(len(population), selection_percent)
        if self is Objective.MINIMIZE:
            return list(population[:keep])
        return list(population[len(population) - keep:])


def pick_parent_indices(rng: np.random.Generator, pool_size: int, count: int) -> tuple[np.ndarray, np.ndarray]:
    """Draw ``count`` parent pairs with replacement from a pool of ``pool_size``."""
    if pool_size <= 0:
        raise DomainValueError("empty_sub_population", "Cannot breed from an empty sub-population")
    picks = rng.integers(0, pool_size, size=(2, count))
    return picks[0], picks[1]


def single_point_splice(first, second, locus: int):
    """Head of ``first`` up to ``locus`` followed by the tail of ``second``.

    Works for strings and 1-d arrays of equal length.
    """
    if len(first) != len(second):
        raise DomainValueError("length_mismatch", "Cannot splice genomes of different length",
                               first=len(first), second=len(second))
    if isinstance(first, np.ndarray):
        return np.concatenate((first[:locus], second[locus:]))
    return first[:locus] + second[locus:]


def mean_crossover(first: float, second: float) -> float:
    return (first + second) / 2.0


def bernoulli_mask(rng: np.random.Generator, shape, probability: float) -> np.ndarray:
    """Independent per-locus trials; True where a locus mutates."""
    if probability <= 0.0:
        return np.zeros(shape, dtype=bool)
    if probability >= 1.0:
        return np.ones(shape, dtype=bool)
    return rng.random(shape) < probability


def redraw_excluding(rng: np.random.Generator, current: np.ndarray, domain_size: int) -> np.ndarray:
    """Uniform draws from ``range(domain_size)`` that differ from ``current``.

    Draws from ``domain_size - 1`` values and shifts past the current one,
    so every other value is equally likely. Values of ``current`` outside
    the domain are treated as never drawable.
    """
    current = np.asarray(current)
    if domain_size < 2:
        raise DomainValueError("domain_too_small", "Need at least two values to redraw a different one",
                               domain_size=domain_size)
    inside = (current >= 0) & (current < domain_size)
    shifted = rng.integers(0, domain_size - 1, size=current.shape)
    shifted = shifted + (inside & (shifted >= current))
    # out-of-domain currents may use the whole range
    if not inside.all():
        full = rng.integers(0, domain_size, size=current.shape)
        shifted = np.where(inside, shifted, full)
    return shifted


__all__ = [
    "Objective",
    "sort_by_fitness",
    "is_sorted_by_fitness",
    "truncation_count",
    "pick_parent_indices",
    "single_point_splice",
    "mean_crossover",
    "bernoulli_mask",
    "redraw_excluding",
]
