"""Individuals: one candidate solution plus its fitness score.

An ``Individual`` owns an opaque gene payload that only its strategy
interprets. Subclasses narrow the payload type and validate it on every
assignment, so a population can never hold an impossible genome.

Ordering (``<``, ``<=``, ``compare_to``...) looks at fitness only and is
ascending. Equality is by value: same genes and same fitness.
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

import numpy as np

from genopt.utils.validation import DomainValueError, is_real_number, require_finite

T = TypeVar("T")


class Individual(Generic[T]):
    """Base individual with validated genes and fitness."""

    __hash__ = None  # mutable value object

    def __init__(self, genes: T) -> None:
        self._genes: T = self._validate_genes(genes)
        self._fitness: float | None = None

    def _validate_genes(self, genes: Any) -> T:
        if genes is None:
            raise DomainValueError("null_genes", f"{type(self).__name__} genes cannot be None")
        if isinstance(genes, (str, bytes, list, tuple)) and not genes:
            raise DomainValueError("empty_genes", f"{type(self).__name__} genes cannot be empty")
        if is_real_number(genes) and not math.isfinite(genes):
            raise DomainValueError("non_finite_value", f"{type(self).__name__} genes cannot be NaN or infinite",
                                   value=genes)
        return genes

    @property
    def genes(self) -> T:
        return self._genes

    @genes.setter
    def genes(self, genes: T) -> None:
        self._genes = self._validate_genes(genes)

    @property
    def fitness(self) -> float | None:
        """The fitness score, or None until the individual has been scored."""
        return self._fitness

    @fitness.setter
    def fitness(self, value: float) -> None:
        self._fitness = require_finite(value, "fitness")

    @property
    def is_scored(self) -> bool:
        return self._fitness is not None

    def _scored_fitness(self) -> float:
        if self._fitness is None:
            raise DomainValueError("unscored_individual", "Cannot compare an individual without fitness",
                                   individual=repr(self))
        return self._fitness

    def compare_to(self, other: "Individual") -> int:
        """Return -1, 0 or 1 comparing fitness ascending."""
        mine, theirs = self._scored_fitness(), other._scored_fitness()
        if mine > theirs:
            return 1
        if mine < theirs:
            return -1
        return 0

    def __lt__(self, other: "Individual") -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: "Individual") -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: "Individual") -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: "Individual") -> bool:
        return self.compare_to(other) >= 0

    def _genes_equal(self, other_genes: Any) -> bool:
        return bool(self._genes == other_genes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Individual) or type(self) is not type(other):
            return NotImplemented
        return self._fitness == other._fitness and self._genes_equal(other._genes)

    def copy(self) -> "Individual[T]":
        clone = type(self).__new__(type(self))
        clone._genes = self._copy_genes()
        clone._fitness = self._fitness
        return clone

    def _copy_genes(self) -> T:
        return self._genes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(genes={self._genes!r}, fitness={self._fitness!r})"


class BoardIndividual(Individual[np.ndarray]):
    """An n-queens board with one queen per column.

    ``genes[column]`` is the row of the queen in that column, so a board of
    size n holds n values in ``[0, n)``.
    """

    MIN_SIZE = 4

    def _validate_genes(self, genes: Any) -> np.ndarray:
        if genes is None:
            raise DomainValueError("null_genes", "A board cannot be None")
        board = np.array(genes, copy=True)
        if board.ndim != 1:
            raise DomainValueError("invalid_board_shape", "A board must be one-dimensional", shape=board.shape)
        if board.size < self.MIN_SIZE:
            raise DomainValueError("board_too_small", f"A board needs at least {self.MIN_SIZE} columns",
                                   size=int(board.size))
        if not np.issubdtype(board.dtype, np.integer):
            raise DomainValueError("invalid_board_values", "Board values must be integers", dtype=str(board.dtype))
        n = board.size
        if board.min() < 0 or board.max() >= n:
            raise DomainValueError("invalid_board_values", f"Board values must lie in [0, {n})",
                                   low=int(board.min()), high=int(board.max()))
        return board.astype(np.int64, copy=False)

    @property
    def size(self) -> int:
        return int(self._genes.size)

    def _genes_equal(self, other_genes: Any) -> bool:
        return bool(np.array_equal(self._genes, other_genes))

    def _copy_genes(self) -> np.ndarray:
        return self._genes.copy()

    def __str__(self) -> str:
        board = self._genes
        n = board.size
        rows = []
        for row in range(n):
            rows.append("".join("Q " if board[column] == row else "* " for column in range(n)))
        return "\n".join(rows)


class StringIndividual(Individual[str]):
    """A fixed-length character sequence."""

    def _validate_genes(self, genes: Any) -> str:
        if genes is None:
            raise DomainValueError("null_genes", "A StringIndividual's genes cannot be None")
        if not isinstance(genes, str):
            raise DomainValueError("invalid_genes", "A StringIndividual's genes must be a str",
                                   type=type(genes).__name__)
        if not genes:
            raise DomainValueError("empty_genes", "A StringIndividual's genes cannot be empty")
        return genes

    def __str__(self) -> str:
        return self._genes


class ScalarIndividual(Individual[float]):
    """A single real-valued gene, e.g. the x of f(x)."""

    def _validate_genes(self, genes: Any) -> float:
        if genes is None:
            raise DomainValueError("null_genes", "A ScalarIndividual's genes cannot be None")
        if not is_real_number(genes):
            raise DomainValueError("not_a_number", "A ScalarIndividual's genes must be a real number",
                                   type=type(genes).__name__)
        if not math.isfinite(genes):
            raise DomainValueError("non_finite_value", "A ScalarIndividual's genes cannot be NaN or infinite",
                                   value=genes)
        return float(genes)

    def __str__(self) -> str:
        return repr(self._genes)


__all__ = [
    "Individual",
    "BoardIndividual",
    "StringIndividual",
    "ScalarIndividual",
]
