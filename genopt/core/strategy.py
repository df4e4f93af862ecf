"""The problem-strategy contract the optimizer is generic over."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from genopt.core.individual import Individual

I = TypeVar("I", bound=Individual)

STRATEGY_OPERATIONS = (
    "generate_initial_population",
    "calculate_fitness",
    "get_best_individual",
    "selection",
    "crossover",
    "mutate",
)


@runtime_checkable
class ProblemStrategy(Protocol[I]):
    """Problem-specific half of a genetic optimization.

    A strategy owns all problem state (domain, target, random source) and
    must honor these semantics:

    - ``generate_initial_population(size)`` returns exactly ``size`` unscored
      individuals drawn from the valid domain.
    - ``calculate_fitness(population)`` scores every individual in place and
      leaves ``population`` sorted ascending by fitness. Bundled strategies
      use a stable sort, so ties keep their previous order.
    - ``get_best_individual(population)`` returns the best individual by the
      strategy's sense without mutating ``population``.
    - ``selection(population, p)`` returns a new list holding the best
      ``floor(p * len(population))`` individuals.
    - ``crossover(sub_population, size)`` returns exactly ``size`` new
      individuals bred from parents drawn with replacement.
    - ``mutate(population, p)`` replaces each locus of each individual in
      place with probability ``p``.
    """

    def generate_initial_population(self, size: int) -> list[I]: ...

    def calculate_fitness(self, population: list[I]) -> None: ...

    def get_best_individual(self, population: list[I]) -> I: ...

    def selection(self, population: list[I], selection_percent: float) -> list[I]: ...

    def crossover(self, sub_population: list[I], target_size: int) -> list[I]: ...

    def mutate(self, population: list[I], mutation_prob: float) -> None: ...


def missing_operations(strategy: object) -> list[str]:
    return [name for name in STRATEGY_OPERATIONS if not callable(getattr(strategy, name, None))]


__all__ = ["ProblemStrategy", "STRATEGY_OPERATIONS", "missing_operations"]
