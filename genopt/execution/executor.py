"""Chunked phase execution, sequential or on a thread pool.

A phase (initial generation, scoring, crossover, mutation) is split into
fixed-size chunks over the population index space. Each chunk receives its
own random generator, so results do not depend on how many workers run the
chunks or in which order they finish. ``map_chunks`` returns only after every
chunk is done, which is the barrier between phases.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar

import numpy as np

from genopt.utils.rng_manager import RNGManager
from genopt.utils.validation import ConfigurationError, require_positive_int

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ChunkFn = Callable[[Sequence[T], np.random.Generator], list[R]]


@dataclass
class ParallelConfig:
    """Configuration for phase execution.

    Attributes:
        parallel_execution: Run chunks on a thread pool when True
        max_workers: Pool size; defaults to ``os.cpu_count()``
        chunk_size: Individuals per unit of work. Part of the random stream
            layout, so changing it changes results for a fixed seed.
    """

    parallel_execution: bool = False
    max_workers: int | None = None
    chunk_size: int = 64

    def __post_init__(self) -> None:
        require_positive_int(self.chunk_size, "chunk_size")
        if self.max_workers is not None:
            require_positive_int(self.max_workers, "max_workers")

    @classmethod
    def from_config(cls, config: dict) -> "ParallelConfig":
        return cls(
            parallel_execution=bool(config.get("parallel_execution", False)),
            max_workers=config.get("max_workers"),
            chunk_size=config.get("chunk_size", 64),
        )


class PhaseExecutor:
    """Runs chunk functions over a population with per-chunk generators."""

    def __init__(self, rng_manager: RNGManager, config: ParallelConfig | None = None) -> None:
        if rng_manager is None:
            raise ConfigurationError("missing_rng_manager", "PhaseExecutor requires an RNGManager")
        self.rng_manager = rng_manager
        self.config = config or ParallelConfig()
        self._pool: ThreadPoolExecutor | None = None

    @property
    def is_parallel(self) -> bool:
        return self.config.parallel_execution

    def _get_pool(self) -> ThreadPoolExecutor:
        if self._pool is None:
            workers = self.config.max_workers or os.cpu_count() or 1
            logger.debug("Starting phase thread pool with %d workers", workers)
            self._pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="genopt-phase")
        return self._pool

    def split(self, items: Sequence[T]) -> list[Sequence[T]]:
        size = self.config.chunk_size
        return [items[start:start + size] for start in range(0, len(items), size)]

    def map_chunks(self, context: str, items: Sequence[T], fn: ChunkFn, *, use_rng: bool = True) -> list[R]:
        """Apply ``fn(chunk, rng)`` to every chunk and concatenate results in order.

        Args:
            context: Name of the phase; selects the random stream family.
            items: Sequence to partition (a list or a ``range``).
            fn: Returns one result per chunk element. Must not touch elements
                outside its chunk.
            use_rng: When False, ``fn`` receives None instead of a generator.
        """
        chunks = self.split(items)
        if use_rng:
            rngs: list[Any] = self.rng_manager.spawn(context, len(chunks))
        else:
            rngs = [None] * len(chunks)
        if not chunks:
            return []
        if self.is_parallel and len(chunks) > 1:
            # list() drains every future; an exception in any chunk propagates here
            parts = list(self._get_pool().map(fn, chunks, rngs))
        else:
            parts = [fn(chunk, rng) for chunk, rng in zip(chunks, rngs)]

        results: list[R] = []
        for chunk, part in zip(chunks, parts):
            if len(part) != len(chunk):
                raise RuntimeError(
                    f"Chunk function for '{context}' returned {len(part)} results for {len(chunk)} items"
                )
            results.extend(part)
        return results

    def close(self) -> None:
        if self._pool is not None:
            logger.debug("Shutting down phase thread pool")
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> "PhaseExecutor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def resolve_executor(rng_manager: RNGManager | None, executor: PhaseExecutor | None) -> PhaseExecutor:
    """Executor for a strategy, building a sequential one when none is given."""
    if executor is None:
        return PhaseExecutor(rng_manager if rng_manager is not None else RNGManager())
    if rng_manager is not None and executor.rng_manager is not rng_manager:
        raise ConfigurationError("conflicting_rng_manager",
                                 "rng_manager differs from the one owned by executor")
    return executor


__all__ = ["ParallelConfig", "PhaseExecutor", "resolve_executor"]
