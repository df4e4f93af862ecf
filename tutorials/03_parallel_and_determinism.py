"""
Parallel Evaluation & Determinism Tutorial

Goals:
- Run the same optimization sequentially and on a thread pool
- Show that one seed gives identical reports in both modes
"""

from genopt import (
    PRESET_STANDARD,
    GeneticOptimization,
    GeneticOptimizationParams,
    NQueensProblem,
    ParallelConfig,
    PhaseExecutor,
    RNGManager,
)
from genopt.utils.observability import assert_determinism_equivalence, determinism_signature, run_report


def run(parallel: bool):
    cfg = dict(PRESET_STANDARD)
    cfg.update({'max_generations': 50, 'parallel_execution': parallel, 'max_workers': 4, 'chunk_size': 128})
    params = GeneticOptimizationParams.from_config(cfg)

    rng = RNGManager(seed=2024)
    with PhaseExecutor(rng, ParallelConfig.from_config(cfg)) as executor:
        optimizer = GeneticOptimization(NQueensProblem(16, executor=executor), params)
        optimizer.optimize()
    return run_report(optimizer, rng_manager=rng)


def main():
    sequential = run(parallel=False)
    parallel = run(parallel=True)
    assert_determinism_equivalence([sequential, parallel])
    print('final conflicts:', sequential['final_best_fitness'])
    print('determinism_sig:', determinism_signature(sequential))


if __name__ == '__main__':
    main()
