"""N-queens as a genetic optimization problem.

A board places one queen per column, ``board[column] = row``, so only row
and diagonal clashes are possible. Fitness is the number of clashing pairs;
a solution scores 0.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from genopt.core.individual import BoardIndividual
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
from genopt.utils.validation import DomainValueError, require_positive_int


def conflict_scores(boards: np.ndarray) -> np.ndarray:
    """Clashing pairs for each row of a ``(k, n)`` array of boards."""
    boards = np.asarray(boards, dtype=np.int64)
    n = boards.shape[1]
    row_gap = np.abs(boards[:, :, None] - boards[:, None, :])
    columns = np.arange(n)
    column_gap = np.abs(columns[:, None] - columns[None, :])
    pairs = np.triu(np.ones((n, n), dtype=bool), k=1)
    clashes = ((row_gap == 0) | (row_gap == column_gap)) & pairs
    return clashes.sum(axis=(1, 2))


def conflict_score(board) -> int:
    """Number of queen pairs sharing a row or a diagonal."""
    board = np.asarray(board, dtype=np.int64)
    return int(conflict_scores(board[None, :])[0])


class NQueensProblem:
    """Minimizes clashes between ``n`` queens, one per column.

    Args:
        n: Board size, at least ``BoardIndividual.MIN_SIZE``.
        rng_manager: Seed source; a fresh unseeded one when omitted.
        executor: Phase executor; pass a parallel one to evaluate chunks on a
            thread pool.
    """

    objective = Objective.MINIMIZE

    def __init__(self, n: int, rng_manager: RNGManager | None = None,
                 executor: PhaseExecutor | None = None) -> None:
        n = require_positive_int(n, "n", DomainValueError)
        if n < BoardIndividual.MIN_SIZE:
            raise DomainValueError("board_too_small", f"n must be at least {BoardIndividual.MIN_SIZE}", n=n)
        self.n = n
        self.executor = resolve_executor(rng_manager, executor)

    def generate_initial_population(self, population_size: int) -> list[BoardIndividual]:
        n = self.n

        def build(indices: Sequence[int], rng: np.random.Generator) -> list[BoardIndividual]:
            boards = rng.integers(0, n, size=(len(indices), n))
            return [BoardIndividual(board) for board in boards]

        return self.executor.map_chunks("nqueens.init", range(population_size), build)

    def _check_board(self, individual: BoardIndividual) -> np.ndarray:
        if individual.size != self.n:
            raise DomainValueError("board_size_mismatch", f"Expected a board of size {self.n}",
                                   size=individual.size)
        return individual.genes

    def calculate_fitness(self, population: list[BoardIndividual]) -> None:
        def score(chunk: Sequence[BoardIndividual], _rng) -> list[int]:
            boards = np.stack([self._check_board(ind) for ind in chunk])
            return conflict_scores(boards).tolist()

        scores = self.executor.map_chunks("nqueens.fitness", population, score, use_rng=False)
        for individual, value in zip(population, scores):
            individual.fitness = float(value)
        sort_by_fitness(population)

    def get_best_individual(self, population: list[BoardIndividual]) -> BoardIndividual:
        return self.objective.best(population)

    def selection(self, population: list[BoardIndividual], selection_percent: float) -> list[BoardIndividual]:
        return self.objective.select(population, selection_percent)

    def crossover(self, sub_population: list[BoardIndividual], population_size: int) -> list[BoardIndividual]:
        parents = [self._check_board(ind) for ind in sub_population]
        n = self.n

        def breed(indices: Sequence[int], rng: np.random.Generator) -> list[BoardIndividual]:
            first, second = pick_parent_indices(rng, len(parents), len(indices))
            loci = rng.integers(0, n, size=len(indices))
            return [
                BoardIndividual(single_point_splice(parents[a], parents[b], int(locus)))
                for a, b, locus in zip(first, second, loci)
            ]

        return self.executor.map_chunks("nqueens.crossover", range(population_size), breed)

    def mutate(self, population: list[BoardIndividual], mutation_prob: float) -> None:
        n = self.n

        def flip(chunk: Sequence[BoardIndividual], rng: np.random.Generator) -> list[np.ndarray | None]:
            boards = np.stack([self._check_board(ind) for ind in chunk])
            mask = bernoulli_mask(rng, boards.shape, mutation_prob)
            if not mask.any():
                return [None] * len(chunk)
            boards[mask] = redraw_excluding(rng, boards[mask], n)
            changed = mask.any(axis=1)
            return [board if hit else None for board, hit in zip(boards, changed)]

        mutated = self.executor.map_chunks("nqueens.mutate", population, flip)
        for individual, board in zip(population, mutated):
            if board is not None:
                individual.genes = board


__all__ = ["NQueensProblem", "conflict_score", "conflict_scores"]
