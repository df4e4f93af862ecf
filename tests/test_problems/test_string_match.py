import numpy as np
import pytest

from genopt.core.individual import StringIndividual
from genopt.evolution.operators import is_sorted_by_fitness
from genopt.problems.string_match import StringMatchProblem
from genopt.problems.text import DEFAULT_VALID_CHARS, RandomTextHelper
from genopt.utils.rng_manager import RNGManager
from genopt.utils.validation import ConfigurationError, DomainValueError


def test_text_helper_draws_from_alphabet():
    helper = RandomTextHelper(np.random.default_rng(0))
    text = helper.generate_string(500)
    assert len(text) == 500
    assert set(text) <= set(DEFAULT_VALID_CHARS)
    assert helper.generate_char() in DEFAULT_VALID_CHARS
    with pytest.raises(DomainValueError):
        helper.generate_string(0)


def test_text_helper_custom_alphabet():
    helper = RandomTextHelper(np.random.default_rng(0), valid_chars="ab")
    assert set(helper.generate_string(100)) == {"a", "b"}
    assert helper.encode(["abba", "b?ab"]).tolist() == [[0, 1, 1, 0], [1, -1, 0, 1]]
    assert helper.decode(np.array([1, 0, 0])) == "baa"
    with pytest.raises(ConfigurationError):
        RandomTextHelper(valid_chars="")
    with pytest.raises(ConfigurationError):
        RandomTextHelper(valid_chars="aa")


def test_target_validation():
    with pytest.raises(DomainValueError):
        StringMatchProblem("")
    with pytest.raises(DomainValueError):
        StringMatchProblem("Hello!")
    helper = RandomTextHelper(valid_chars="Helo!")
    assert StringMatchProblem("Hello!", text_helper=helper).target == "Hello!"


def test_distance_is_sum_of_code_point_gaps():
    problem = StringMatchProblem("abc", rng_manager=RNGManager(0))
    assert problem.distance("abc") == 0
    assert problem.distance("abd") == 1
    assert problem.distance("Abc") == ord("a") - ord("A")


def test_fitness_scores_and_sorts():
    problem = StringMatchProblem("Hello", rng_manager=RNGManager(1))
    population = problem.generate_initial_population(200)
    assert all(len(ind.genes) == 5 for ind in population)
    population.append(StringIndividual("Hello"))
    problem.calculate_fitness(population)
    assert is_sorted_by_fitness(population)
    assert problem.get_best_individual(population).fitness == 0.0
    assert all(ind.fitness == problem.distance(ind.genes) for ind in population)


def test_wrong_length_candidate_is_rejected():
    problem = StringMatchProblem("Hello", rng_manager=RNGManager(1))
    with pytest.raises(DomainValueError):
        problem.calculate_fitness([StringIndividual("Hi")])


def test_crossover_splices_parents():
    problem = StringMatchProblem("abcd", rng_manager=RNGManager(2))
    children = problem.crossover([StringIndividual("aaaa"), StringIndividual("zzzz")], 100)
    assert len(children) == 100
    for child in children:
        text = child.genes
        assert len(text) == 4
        assert text in {"aaaa", "zzzz", "azzz", "aazz", "aaaz", "zaaa", "zzaa", "zzza"}


def test_mutation_extremes():
    problem = StringMatchProblem("Hello World", rng_manager=RNGManager(3))
    population = problem.generate_initial_population(40)
    before = [ind.genes for ind in population]

    problem.mutate(population, 0.0)
    assert [ind.genes for ind in population] == before

    problem.mutate(population, 1.0)
    for old, ind in zip(before, population):
        assert all(a != b for a, b in zip(old, ind.genes))
        assert set(ind.genes) <= set(DEFAULT_VALID_CHARS)


def test_unencodable_text_raises_taxonomy_errors():
    with pytest.raises(ConfigurationError) as info:
        RandomTextHelper(valid_chars="ab\ud800")
    assert info.value.code == "unencodable_text"

    helper = RandomTextHelper(valid_chars="ab")
    with pytest.raises(DomainValueError) as info:
        helper.encode(["a\ud800"])
    assert info.value.code == "unencodable_text"

    problem = StringMatchProblem("ab", rng_manager=RNGManager(4))
    with pytest.raises(DomainValueError):
        problem.calculate_fitness([StringIndividual("a\udfff")])
