"""Evolutionary engine for genopt."""

from .operators import Objective
from .optimizer import GeneticOptimization

__all__ = [
    "GeneticOptimization",
    "Objective",
]
