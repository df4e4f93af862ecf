"""Phase execution for genopt."""

from .executor import ParallelConfig, PhaseExecutor  # noqa: F401

__all__ = [
    'ParallelConfig',
    'PhaseExecutor',
]
