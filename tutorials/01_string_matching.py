"""
String Matching Tutorial

Goals:
- Evolve random text into a target phrase
- Print each generation that improved on the previous one
"""

import time

from genopt import GeneticOptimization, GeneticOptimizationParams, RNGManager, StringMatchProblem


def main():
    params = GeneticOptimizationParams(1000, 2000, 0.2, 0.01, target_value=0.0)
    problem = StringMatchProblem("Hello String Matching", rng_manager=RNGManager(seed=7))
    optimizer = GeneticOptimization(problem, params)

    t0 = time.perf_counter()
    history = optimizer.optimize()
    duration_ms = (time.perf_counter() - t0) * 1000.0

    for generation in range(1, len(history)):
        if history[generation].fitness < history[generation - 1].fitness:
            print(f'generation {generation}: score {history[generation].fitness} -> {history[generation]}')

    print(f'duration_ms: {duration_ms:.1f}')
    print('generations:', len(history))


if __name__ == '__main__':
    main()
