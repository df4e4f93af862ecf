"""Ready-made problem strategies."""

from .nqueens import NQueensProblem, conflict_score
from .one_var import MaximizeOneVar, MinimizeOneVar, OneVarFunctionProblem
from .string_match import StringMatchProblem
from .text import DEFAULT_VALID_CHARS, RandomTextHelper

__all__ = [
    "NQueensProblem",
    "conflict_score",
    "StringMatchProblem",
    "RandomTextHelper",
    "DEFAULT_VALID_CHARS",
    "OneVarFunctionProblem",
    "MinimizeOneVar",
    "MaximizeOneVar",
]
