"""Evolve a string towards a fixed target."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from genopt.core.individual import StringIndividual
from genopt.evolution.operators import (
    Objective,
    bernoulli_mask,
    pick_parent_indices,
    redraw_excluding,
    single_point_splice,
    sort_by_fitness,
)
from genopt.execution.executor import PhaseExecutor, resolve_executor
from genopt.utils.rng_manager import RNGManager
from genopt.utils.validation import DomainValueError

from .text import RandomTextHelper, code_points, from_code_points


class StringMatchProblem:
    """Minimizes the distance between candidate strings and ``target``.

    The distance is the sum over positions of the absolute difference of
    code points, so only the exact target scores 0. Candidates are drawn
    from ``text_helper``'s alphabet, which must cover every target character.
    """

    objective = Objective.MINIMIZE

    def __init__(
        self,
        target: str,
        rng_manager: RNGManager | None = None,
        text_helper: RandomTextHelper | None = None,
        executor: PhaseExecutor | None = None,
    ) -> None:
        if not isinstance(target, str) or not target:
            raise DomainValueError("empty_target", "target must be a non-empty string")
        self.executor = resolve_executor(rng_manager, executor)
        if text_helper is None:
            text_helper = RandomTextHelper(self.executor.rng_manager.get_context_rng("string_match.text"))
        self.text_helper = text_helper
        if target not in self.text_helper:
            raise DomainValueError("target_outside_alphabet", "target uses characters outside valid_chars",
                                   target=target, valid_chars=self.text_helper.valid_chars)
        self.target = target
        self._target_points = code_points([target])[0]

    def _checked_genes(self, chunk: Sequence[StringIndividual]) -> list[str]:
        genes = [ind.genes for ind in chunk]
        for text in genes:
            if len(text) != len(self.target):
                raise DomainValueError("length_mismatch", f"Expected strings of length {len(self.target)}",
                                       genes=text)
        return genes

    def distance(self, text: str) -> int:
        return int(np.abs(code_points([text])[0] - self._target_points).sum())

    def generate_initial_population(self, population_size: int) -> list[StringIndividual]:
        helper = self.text_helper
        length = len(self.target)

        def build(indices: Sequence[int], rng: np.random.Generator) -> list[StringIndividual]:
            return [StringIndividual(helper.generate_string(length, rng)) for _ in indices]

        return self.executor.map_chunks("string_match.init", range(population_size), build)

    def calculate_fitness(self, population: list[StringIndividual]) -> None:
        def score(chunk: Sequence[StringIndividual], _rng) -> list[int]:
            points = code_points(self._checked_genes(chunk))
            return np.abs(points - self._target_points).sum(axis=1).tolist()

        scores = self.executor.map_chunks("string_match.fitness", population, score, use_rng=False)
        for individual, value in zip(population, scores):
            individual.fitness = float(value)
        sort_by_fitness(population)

    def get_best_individual(self, population: list[StringIndividual]) -> StringIndividual:
        return self.objective.best(population)

    def selection(self, population: list[StringIndividual], selection_percent: float) -> list[StringIndividual]:
        return self.objective.select(population, selection_percent)

    def crossover(self, sub_population: list[StringIndividual], population_size: int) -> list[StringIndividual]:
        parents = self._checked_genes(sub_population)
        length = len(self.target)

        def breed(indices: Sequence[int], rng: np.random.Generator) -> list[StringIndividual]:
            first, second = pick_parent_indices(rng, len(parents), len(indices))
            loci = rng.integers(0, length, size=len(indices))
            return [
                StringIndividual(single_point_splice(parents[a], parents[b], int(locus)))
                for a, b, locus in zip(first, second, loci)
            ]

        return self.executor.map_chunks("string_match.crossover", range(population_size), breed)

    def mutate(self, population: list[StringIndividual], mutation_prob: float) -> None:
        helper = self.text_helper

        def flip(chunk: Sequence[StringIndividual], rng: np.random.Generator) -> list[str | None]:
            genes = self._checked_genes(chunk)
            indices = helper.encode(genes)
            mask = bernoulli_mask(rng, indices.shape, mutation_prob)
            if not mask.any():
                return [None] * len(chunk)
            points = code_points(genes)
            points[mask] = helper.codes[redraw_excluding(rng, indices[mask], len(helper))]
            changed = mask.any(axis=1)
            return [from_code_points(row) if hit else None for row, hit in zip(points, changed)]

        mutated = self.executor.map_chunks("string_match.mutate", population, flip)
        for individual, text in zip(population, mutated):
            if text is not None:
                individual.genes = text


__all__ = ["StringMatchProblem"]
