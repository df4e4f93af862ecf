from genopt.core.history import GenerationHistory
from genopt.core.individual import StringIndividual
from genopt.core.strategy import STRATEGY_OPERATIONS, ProblemStrategy, missing_operations
from genopt.problems import NQueensProblem, StringMatchProblem
from genopt.utils.rng_manager import RNGManager


def test_history_records_best_per_generation():
    history = GenerationHistory()
    assert history.generations == 0
    assert history.last is None
    for i, fitness in enumerate([5.0, 3.0, 3.0]):
        ind = StringIndividual(f"gen{i}")
        ind.fitness = fitness
        history.add_best(ind, {"population_size": 10})
    assert len(history) == 3
    assert history.generations == 2
    assert history.fitness_curve() == [5.0, 3.0, 3.0]
    assert history.metrics[1]["generation"] == 1
    assert history.metrics[1]["population_size"] == 10
    assert history.last.genes == "gen2"


def test_bundled_strategies_satisfy_protocol():
    rng = RNGManager(seed=1)
    for strategy in (NQueensProblem(6, rng_manager=rng), StringMatchProblem("abc", rng_manager=rng)):
        assert isinstance(strategy, ProblemStrategy)
        assert missing_operations(strategy) == []


def test_missing_operations_lists_gaps():
    class Partial:
        def generate_initial_population(self, size):
            return []

        selection = "not callable"

    missing = missing_operations(Partial())
    assert "generate_initial_population" not in missing
    assert "selection" in missing
    assert len(missing) == len(STRATEGY_OPERATIONS) - 1
