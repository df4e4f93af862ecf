"""
genopt - Generic Genetic Optimization

A generational genetic algorithm engine. Problems plug in through a small
strategy contract (generate, score, select, cross, mutate, pick best); the
engine owns the loop, termination and bookkeeping.
"""

__version__ = "0.1.0"

from .core import *  # noqa: F401,F403
from .evolution import *  # noqa: F401,F403
from .execution import *  # noqa: F401,F403
from .problems import *  # noqa: F401,F403
from .utils import *  # noqa: F401,F403

# Configuration presets as top-level names
from .config import PRESET_MINIMAL, PRESET_RESEARCH, PRESET_STANDARD  # noqa: F401
