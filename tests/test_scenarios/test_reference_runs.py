import pytest

from genopt.core.params import GeneticOptimizationParams
from genopt.evolution.optimizer import TERMINATION_TARGET_REACHED, GeneticOptimization
from genopt.execution.executor import ParallelConfig, PhaseExecutor
from genopt.problems import MaximizeOneVar, MinimizeOneVar, NQueensProblem, StringMatchProblem
from genopt.utils.rng_manager import RNGManager


def _square(x):
    return x * x


def test_six_queens_reaches_zero_conflicts():
    params = GeneticOptimizationParams(1000, 5000, 0.05, 0.01, target_value=0.0)
    problem = NQueensProblem(6, rng_manager=RNGManager(seed=2024))
    optimizer = GeneticOptimization(problem, params)
    history = optimizer.optimize()

    assert history[-1].fitness == 0.0
    assert len(history) < params.max_generations + 1
    assert optimizer.termination_reason == TERMINATION_TARGET_REACHED
    assert history[0].fitness >= history[-1].fitness


def test_string_matching_reaches_target():
    params = GeneticOptimizationParams(1000, 2000, 0.2, 0.01, target_value=0.0)
    problem = StringMatchProblem("Hello String Matching", rng_manager=RNGManager(seed=7))
    optimizer = GeneticOptimization(problem, params)
    history = optimizer.optimize()

    assert history[-1].fitness == 0.0
    assert history[-1].genes == "Hello String Matching"
    assert optimizer.termination_reason == TERMINATION_TARGET_REACHED


@pytest.mark.slow
def test_square_minimization_full_budget():
    params = GeneticOptimizationParams(1000, 10000, 0.15, 0.01, target_value=0.0)
    problem = MinimizeOneVar(-10.0, 10.0, _square, rng_manager=RNGManager(seed=11))
    history = GeneticOptimization(problem, params).optimize()

    assert 1 <= len(history) <= params.max_generations + 1
    assert abs(history[-1].fitness - 0.0) <= 0.01


def test_square_minimization_with_tolerance_stops_early():
    params = GeneticOptimizationParams(1000, 10000, 0.15, 0.01, target_value=0.0, target_tolerance=0.01)
    problem = MinimizeOneVar(-10.0, 10.0, _square, rng_manager=RNGManager(seed=11))
    optimizer = GeneticOptimization(problem, params)
    history = optimizer.optimize()

    assert history[-1].fitness <= 0.01
    assert optimizer.termination_reason == TERMINATION_TARGET_REACHED
    assert len(history) < 100


def test_negated_square_maximization():
    params = GeneticOptimizationParams(500, 2000, 0.15, 0.01, target_value=0.0, target_tolerance=0.01)
    problem = MaximizeOneVar(-10.0, 10.0, lambda x: -x * x, rng_manager=RNGManager(seed=5))
    history = GeneticOptimization(problem, params).optimize()
    assert history[-1].fitness >= -0.01


def test_parallel_run_matches_sequential_run():
    params = GeneticOptimizationParams(400, 30, 0.1, 0.02)

    def run(config):
        with PhaseExecutor(RNGManager(seed=99), config) as executor:
            problem = NQueensProblem(10, executor=executor)
            history = GeneticOptimization(problem, params).optimize()
        return [(ind.fitness, ind.genes.tolist()) for ind in history]

    sequential = run(ParallelConfig(chunk_size=50))
    parallel = run(ParallelConfig(parallel_execution=True, max_workers=4, chunk_size=50))
    assert sequential == parallel
    assert len(sequential) == 31
