"""Core data model for genopt."""

from .history import GenerationHistory
from .individual import BoardIndividual, Individual, ScalarIndividual, StringIndividual
from .params import GeneticOptimizationParams
from .strategy import ProblemStrategy

__all__ = [
    "Individual",
    "BoardIndividual",
    "StringIndividual",
    "ScalarIndividual",
    "GeneticOptimizationParams",
    "GenerationHistory",
    "ProblemStrategy",
]
