"""Seed management for reproducible, race-free randomness.

One master seed drives every random draw of a run. Work that runs
concurrently never shares a generator: ``spawn`` hands out fresh
``numpy.random.Generator`` instances whose streams are addressed by
``(context, call index, child index)`` and therefore independent of thread
scheduling.
"""

from __future__ import annotations

import hashlib
import threading

import numpy as np


def _context_key(context: str) -> int:
    # stable across processes, unlike hash()
    digest = hashlib.sha256(context.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


class RNGManager:
    """Derives independent random generators from a single master seed.

    Args:
        seed: Master seed. When omitted, fresh OS entropy is drawn and kept in
            ``self.seed`` so the run can be replayed.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = int(np.random.SeedSequence().entropy)
        self.seed = int(seed)
        self._context_rngs: dict[str, np.random.Generator] = {}
        self._spawn_counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def get_context_rng(self, context: str) -> np.random.Generator:
        """Return the persistent generator for ``context``.

        The same instance is returned on every call, so it must only be used
        from one thread at a time.
        """
        with self._lock:
            rng = self._context_rngs.get(context)
            if rng is None:
                seq = np.random.SeedSequence(self.seed, spawn_key=(_context_key(context),))
                rng = np.random.default_rng(seq)
                self._context_rngs[context] = rng
            return rng

    def spawn(self, context: str, count: int) -> list[np.random.Generator]:
        """Return ``count`` independent generators for one batch of work.

        Each call for the same context advances a counter, so successive
        batches (e.g. one per generation) draw from distinct streams.
        """
        if count < 0:
            raise ValueError("count must be non-negative")
        with self._lock:
            call_index = self._spawn_counters.get(context, 0)
            self._spawn_counters[context] = call_index + 1
        parent = np.random.SeedSequence(self.seed, spawn_key=(_context_key(context), call_index, 1))
        return [np.random.default_rng(child) for child in parent.spawn(count)]

    def get_state(self) -> dict:
        """Snapshot of the seed and per-context batch counters."""
        with self._lock:
            return {
                "seed": self.seed,
                "spawn_counters": dict(self._spawn_counters),
                "contexts": sorted(self._context_rngs),
            }


__all__ = ["RNGManager"]
