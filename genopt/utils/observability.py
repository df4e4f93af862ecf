"""Run reports and determinism signatures.

A report captures what a run produced (never how long it took), so two runs
with the same seed and parameters yield equal signatures whether they ran
sequentially or on a thread pool.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable, Optional

from .rng_manager import RNGManager

SCHEMA_VERSION = 1
_FLOAT_PRECISION = 12
_SIGNATURE_KEYS = (
    "schema_version",
    "params",
    "generations",
    "termination_reason",
    "best_fitness_history",
    "final_best_fitness",
    "final_best_genes",
    "env",
)


def _canonicalize(obj: Any, float_precision: int = _FLOAT_PRECISION) -> Any:
    if obj is None or isinstance(obj, (str, bool, int)):
        return obj
    if isinstance(obj, float):
        return f"{obj:.{float_precision}f}"
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(x, float_precision) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _canonicalize(obj[k], float_precision) for k in sorted(obj.keys(), key=str)}
    return str(obj)


def _genes_payload(genes: Any) -> Any:
    tolist = getattr(genes, "tolist", None)
    if callable(tolist):
        return tolist()
    return genes


def run_report(optimizer: Any, rng_manager: Optional[RNGManager] = None) -> dict[str, Any]:
    """Build a JSON-serializable report of a finished ``GeneticOptimization``.

    Args:
        optimizer: An optimizer whose ``optimize()`` has run.
        rng_manager: Source of the seed recorded under ``env``; optional.
    """
    history = optimizer.history
    curve = [float(f) for f in history.fitness_curve()]
    last = history.last if len(history) else None
    report: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "params": optimizer.params.to_dict(),
        "generations": history.generations,
        "termination_reason": optimizer.termination_reason,
        "best_fitness_history": curve,
        "final_best_fitness": curve[-1] if curve else None,
        "final_best_genes": _genes_payload(last.genes) if last is not None else None,
        "env": {"seed": rng_manager.seed if rng_manager is not None else None},
    }
    report["determinism_checksum"] = determinism_signature(report)
    return report


def determinism_signature(report: dict[str, Any]) -> str:
    """sha256 over the canonical JSON of the deterministic report fields."""
    payload = {key: report.get(key) for key in _SIGNATURE_KEYS}
    canonical = json.dumps(_canonicalize(payload), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def assert_determinism_equivalence(reports: Iterable[dict[str, Any]]) -> None:
    """Raise ``AssertionError`` unless every report has the same signature."""
    signatures = [determinism_signature(r) for r in reports]
    if len(set(signatures)) > 1:
        raise AssertionError(f"Determinism signatures differ: {signatures}")


__all__ = [
    "SCHEMA_VERSION",
    "run_report",
    "determinism_signature",
    "assert_determinism_equivalence",
]
