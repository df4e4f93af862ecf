"""Generational optimization loop.

Drives any ``ProblemStrategy``:

    generate -> score -> record best
    repeat: select -> cross -> mutate -> score -> record best

until ``max_generations`` generations have been bred or a generation's best
individual reaches the target fitness.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from genopt.core.history import GenerationHistory
from genopt.core.params import GeneticOptimizationParams
from genopt.core.strategy import missing_operations
from genopt.utils.validation import ConfigurationError, RuntimeStrategyError

logger = logging.getLogger(__name__)

TERMINATION_TARGET_REACHED = "target_reached"
TERMINATION_MAX_GENERATIONS = "max_generations"


class GeneticOptimization:
    """Runs a genetic optimization of ``strategy`` under ``params``.

    Args:
        strategy: Object implementing the six ``ProblemStrategy`` operations.
        params: Validated run parameters.

    Raises:
        ConfigurationError: If either argument is missing or the strategy
            lacks one of the required operations.
    """

    def __init__(self, strategy: Any, params: GeneticOptimizationParams) -> None:
        if strategy is None:
            raise ConfigurationError("missing_strategy", "The problem strategy cannot be None")
        if params is None:
            raise ConfigurationError("missing_params", "Optimization parameters cannot be None")
        if not isinstance(params, GeneticOptimizationParams):
            raise ConfigurationError("invalid_params", "params must be a GeneticOptimizationParams",
                                     type=type(params).__name__)
        missing = missing_operations(strategy)
        if missing:
            raise ConfigurationError("incomplete_strategy", f"Strategy is missing operations: {missing}",
                                     strategy=type(strategy).__name__, missing=tuple(missing))

        self.strategy = strategy
        self.params = params
        self.history = GenerationHistory()
        self.termination_reason: str | None = None

    @property
    def generations_run(self) -> int:
        return self.history.generations

    def _call(self, phase: str, generation: int, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except RuntimeStrategyError:
            raise
        except Exception as exc:
            raise RuntimeStrategyError(
                "strategy_failure",
                f"Strategy operation '{phase}' failed: {exc}",
                phase=phase,
                generation=generation,
                strategy=type(self.strategy).__name__,
            ) from exc

    def _check_size(self, phase: str, generation: int, population: Any, expected: int) -> None:
        size = len(population)
        if size != expected:
            raise RuntimeStrategyError(
                "population_size_mismatch",
                f"'{phase}' produced {size} individuals, expected {expected}",
                phase=phase,
                generation=generation,
                size=size,
                expected=expected,
            )

    def _record_best(self, population: Any, generation: int, started: float) -> Any:
        best = self._call("get_best_individual", generation, self.strategy.get_best_individual, population)
        if best is None or getattr(best, "fitness", None) is None:
            raise RuntimeStrategyError("unscored_best", "Best individual has no fitness after scoring",
                                       generation=generation)
        self.history.add_best(best, {
            'population_size': len(population),
            'elapsed_ms': (time.perf_counter() - started) * 1000.0,
        })
        logger.debug("Generation %d best fitness %r", generation, best.fitness)
        return best

    def optimize(self) -> list[Any]:
        """Run the optimization.

        Returns:
            The best individual of every generation, generation 0 first.
            Length is between 1 and ``max_generations + 1``.

        Raises:
            RuntimeStrategyError: If any strategy operation fails; the run is
                aborted and ``self.history`` keeps what was recorded so far.
        """
        params = self.params
        strategy = self.strategy
        self.history = GenerationHistory()
        self.termination_reason = None

        logger.info("Starting genetic optimization with %r", params)
        started = time.perf_counter()

        population = self._call("generate_initial_population", 0,
                                strategy.generate_initial_population, params.population_size)
        self._check_size("generate_initial_population", 0, population, params.population_size)
        self._call("calculate_fitness", 0, strategy.calculate_fitness, population)
        self._record_best(population, 0, started)

        while len(self.history) - 1 != params.max_generations:
            generation = len(self.history)
            gen_started = time.perf_counter()

            selected = self._call("selection", generation, strategy.selection, population,
                                  params.selection_percent)
            children = self._call("crossover", generation, strategy.crossover, selected,
                                  params.population_size)
            self._check_size("crossover", generation, children, params.population_size)
            self._call("mutate", generation, strategy.mutate, children, params.mutation_prob)
            self._call("calculate_fitness", generation, strategy.calculate_fitness, children)
            best = self._record_best(children, generation, gen_started)

            population = children

            if params.target_reached(best.fitness):
                self.termination_reason = TERMINATION_TARGET_REACHED
                break
        else:
            self.termination_reason = TERMINATION_MAX_GENERATIONS

        logger.info(
            "Genetic optimization finished after %d generations (%s), best fitness %r in %.1f ms",
            self.generations_run,
            self.termination_reason,
            self.history.last.fitness,
            (time.perf_counter() - started) * 1000.0,
        )
        return list(self.history.best)


__all__ = [
    "GeneticOptimization",
    "TERMINATION_TARGET_REACHED",
    "TERMINATION_MAX_GENERATIONS",
]
