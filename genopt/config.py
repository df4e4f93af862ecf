"""Configuration presets.

Each preset is a plain dict accepted by both
``GeneticOptimizationParams.from_config`` and ``ParallelConfig.from_config``.
Copy before editing: ``cfg = dict(PRESET_STANDARD); cfg["max_generations"] = 50``.
"""

PRESET_MINIMAL = {
    'population_size': 20,
    'max_generations': 10,
    'selection_percent': 0.5,
    'mutation_prob': 0.05,
    'parallel_execution': False,
    'chunk_size': 64,
}

PRESET_STANDARD = {
    'population_size': 1000,
    'max_generations': 1000,
    'selection_percent': 0.2,
    'mutation_prob': 0.01,
    'parallel_execution': False,
    'chunk_size': 64,
}

PRESET_RESEARCH = {
    'population_size': 5000,
    'max_generations': 10000,
    'selection_percent': 0.15,
    'mutation_prob': 0.01,
    'parallel_execution': True,
    'max_workers': None,
    'chunk_size': 256,
}

__all__ = ["PRESET_MINIMAL", "PRESET_STANDARD", "PRESET_RESEARCH"]
