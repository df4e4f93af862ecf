import math

import pytest

from genopt.config import PRESET_MINIMAL, PRESET_STANDARD
from genopt.core.params import GeneticOptimizationParams
from genopt.utils.validation import ConfigurationError


def _params(**overrides):
    kwargs = dict(population_size=100, max_generations=10, selection_percent=0.2, mutation_prob=0.01)
    kwargs.update(overrides)
    return GeneticOptimizationParams(**kwargs)


def test_valid_params_are_readable():
    p = _params(target_value=0.0)
    assert p.population_size == 100
    assert p.max_generations == 10
    assert p.selection_percent == 0.2
    assert p.mutation_prob == 0.01
    assert p.target_value == 0.0
    assert p.has_target


def test_default_target_is_never_reached():
    p = _params()
    assert p.target_value == math.inf
    assert not p.has_target
    assert not p.target_reached(0.0)
    assert not p.target_reached(1e308)


@pytest.mark.parametrize("overrides", [
    {"population_size": 0},
    {"population_size": -5},
    {"max_generations": 0},
    {"max_generations": -1},
    {"selection_percent": 0.0},
    {"selection_percent": -0.1},
    {"selection_percent": 1.0001},
    {"mutation_prob": -0.01},
    {"mutation_prob": 1.5},
    {"target_value": math.nan},
    {"target_value": math.inf},
    {"target_value": -math.inf},
    {"population_size": 2.5},
    {"population_size": True},
    {"selection_percent": math.nan},
])
def test_invalid_params_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        _params(**overrides)


def test_boundary_values_are_accepted():
    p = _params(selection_percent=1.0, mutation_prob=0.0)
    assert p.selection_percent == 1.0
    assert p.mutation_prob == 0.0
    p = _params(mutation_prob=1.0)
    assert p.mutation_prob == 1.0


def test_selection_that_keeps_no_parent_is_rejected():
    with pytest.raises(ConfigurationError) as info:
        _params(population_size=10, selection_percent=0.05)
    assert info.value.code == "empty_selection"
    with pytest.raises(ConfigurationError) as info:
        GeneticOptimizationParams(1, 5, 0.5, 0.0)
    assert info.value.code == "empty_selection"
    assert "empty_selection" in GeneticOptimizationParams.__doc__


def test_target_value_setter_validates():
    p = _params()
    p.target_value = 3.5
    assert p.target_value == 3.5
    with pytest.raises(ConfigurationError):
        p.target_value = math.nan
    assert p.target_value == 3.5


def test_exact_target_comparison_by_default():
    p = _params(target_value=0.0)
    assert p.target_reached(0.0)
    assert p.target_reached(-0.0)
    assert not p.target_reached(1e-300)


def test_tolerance_widens_target():
    p = _params(target_value=0.0, target_tolerance=0.01)
    assert p.target_reached(0.005)
    assert p.target_reached(-0.01)
    assert not p.target_reached(0.02)
    with pytest.raises(ConfigurationError):
        _params(target_tolerance=-1.0)


def test_from_config_presets():
    p = GeneticOptimizationParams.from_config(PRESET_STANDARD)
    assert p.population_size == PRESET_STANDARD["population_size"]
    assert not p.has_target

    cfg = dict(PRESET_MINIMAL)
    cfg["target_value"] = 1.0
    p = GeneticOptimizationParams.from_config(cfg)
    assert p.target_value == 1.0
    assert p.to_dict()["target_value"] == 1.0


def test_from_config_missing_key():
    with pytest.raises(ConfigurationError) as info:
        GeneticOptimizationParams.from_config({"population_size": 10})
    assert info.value.code == "missing_param"
    assert "max_generations" in str(info.value)
