"""Per-generation record of an optimization run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenerationHistory:
    """Append-only record of the best individual of each generation.

    ``best[0]`` is the best of the unselected initial population; ``best[i]``
    the best of generation i. ``metrics`` holds one dict per entry.
    """

    best: list[Any] = field(default_factory=list)
    metrics: list[dict[str, Any]] = field(default_factory=list)

    def add_best(self, individual: Any, metrics: dict[str, Any] | None = None) -> None:
        generation = len(self.best)
        self.best.append(individual)
        entry = {'generation': generation, 'best_fitness': individual.fitness}
        entry.update(metrics or {})
        self.metrics.append(entry)

    @property
    def generations(self) -> int:
        """Generations bred after the initial population."""
        return max(0, len(self.best) - 1)

    @property
    def last(self) -> Any:
        return self.best[-1] if self.best else None

    def fitness_curve(self) -> list[float]:
        return [m['best_fitness'] for m in self.metrics]

    def __len__(self) -> int:
        return len(self.best)


__all__ = ["GenerationHistory"]
