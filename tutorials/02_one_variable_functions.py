"""
One-Variable Functions Tutorial

Goals:
- Minimize x^2 and maximize sin(x) over a bounded domain
- Use target_tolerance to stop a continuous search early
"""

import math

from genopt import GeneticOptimization, GeneticOptimizationParams, MaximizeOneVar, MinimizeOneVar, RNGManager


def main():
    # Exact equality against the target rarely happens for real-valued
    # fitness, so accept anything within 1e-4.
    params = GeneticOptimizationParams(1000, 1000, 0.15, 0.01, target_value=0.0, target_tolerance=1e-4)
    problem = MinimizeOneVar(-10.0, 10.0, lambda x: x * x, rng_manager=RNGManager(seed=3))
    best = GeneticOptimization(problem, params).optimize()[-1]
    print('min x^2 at x =', best.genes, 'value', best.fitness)

    # No target: runs the full budget and reports the best of the last generation.
    params = GeneticOptimizationParams(500, 200, 0.15, 0.01)
    problem = MaximizeOneVar(0.0, 2 * math.pi, math.sin, rng_manager=RNGManager(seed=3))
    best = GeneticOptimization(problem, params).optimize()[-1]
    print('max sin(x) at x =', best.genes, 'value', best.fitness)


if __name__ == '__main__':
    main()
