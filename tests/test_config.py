import pytest

from main import main, make_evaluator
from minimax.config import DEFAULT_DEPTH, parse_args
from minimax.evaluator import CornerHeuristic, RandomEvaluator


def test_defaults():
    config = parse_args([])
    assert config["mode"] == "bench"
    assert config["games"] == 10
    assert config["search"] == {"depth": DEFAULT_DEPTH, "eager": False, "workers": 0, "evaluator": "heuristic"}
    assert config["game"]["width"] == config["game"]["height"] == 4
    assert config["game"]["score_target"] == 11
    assert config["heuristic"]["corner_multiplier"] == 1.25


def test_rand_mode_uses_random_evaluator():
    config = parse_args(["rand", "--evaluator", "heuristic"])
    assert config["search"]["evaluator"] == "random"


def test_make_evaluator_applies_weights():
    import random

    config = parse_args(["--corner-multiplier", "2.0"])
    evaluator = make_evaluator(config, random.Random(0))
    assert isinstance(evaluator, CornerHeuristic)
    assert evaluator.weights.corner_multiplier == 2.0
    assert isinstance(make_evaluator(parse_args(["rand"]), random.Random(0)), RandomEvaluator)


@pytest.mark.parametrize("argv", [["--depth", "0"], ["--games", "0"]])
def test_invalid_values(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_main_rejects_bad_depth(capsys):
    assert main(["--depth", "0"]) == 2
    assert "--depth" in capsys.readouterr().err


def test_main_bench(capsys, tmp_path):
    argv = ["bench", "--games", "2", "--depth", "1", "--max-moves", "5", "--seed", "1",
            "--save-stats", "--output-dir", str(tmp_path)]
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Statistics for 2 games:" in out
    assert len(list(tmp_path.iterdir())) == 1


def test_main_play(capsys):
    assert main(["play", "--depth", "1", "--max-moves", "3", "--seed", "4"]) == 0
    assert "Move 3: " in capsys.readouterr().out
