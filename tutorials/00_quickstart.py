from genopt import GeneticOptimization, GeneticOptimizationParams, NQueensProblem, RNGManager


def main():
    # Quickstart goal:
    # 1) Describe the run with GeneticOptimizationParams
    # 2) Plug in a ready-made problem strategy (8 queens)
    # 3) Optimize and print the best board found

    # 1000 boards per generation, at most 500 generations, keep the best 5%
    # as parents, mutate each queen with probability 1%. Stop as soon as a
    # generation's best board has no conflicts.
    params = GeneticOptimizationParams(1000, 500, 0.05, 0.01, target_value=0.0)

    # A seeded RNGManager makes the run reproducible.
    problem = NQueensProblem(8, rng_manager=RNGManager(seed=1))

    optimizer = GeneticOptimization(problem, params)
    history = optimizer.optimize()

    # history[0] is the best initial board; history[-1] the best of the last generation.
    best = history[-1]
    print('generations:', optimizer.generations_run, f'({optimizer.termination_reason})')
    print('conflicts:', best.fitness)
    print(best)


if __name__ == '__main__':
    main()
