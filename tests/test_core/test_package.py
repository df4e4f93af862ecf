import genopt


def test_top_level_exports():
    for name in (
        "GeneticOptimization",
        "GeneticOptimizationParams",
        "ProblemStrategy",
        "Objective",
        "NQueensProblem",
        "StringMatchProblem",
        "MinimizeOneVar",
        "MaximizeOneVar",
        "PhaseExecutor",
        "RNGManager",
        "ConfigurationError",
        "run_report",
    ):
        assert hasattr(genopt, name), name
    assert genopt.PRESET_STANDARD["population_size"] == 1000
    assert genopt.__version__
