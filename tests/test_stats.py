import json

import numpy as np
import pytest

from minimax.stats import NumpyJSONEncoder, analyze_results, format_statistics, save_statistics


def result(score, max_exponent, moves, stop_reason="no_legal_move"):
    return {
        "score": score,
        "max_exponent": max_exponent,
        "max_tile": 0 if max_exponent is None else 1 << max_exponent,
        "moves": moves,
        "won": False,
        "stop_reason": stop_reason,
    }


@pytest.fixture
def results():
    return [
        result(100, 6, 40),
        result(300, 8, 120),
        result(2100, 11, 600, stop_reason="won"),
        result(1, None, 0),
    ]


def test_analyze_results(results):
    stats = analyze_results(results)
    assert stats["num_games"] == 4
    assert stats["avg_score"] == pytest.approx(2501 / 4)
    assert stats["max_score"] == 2100
    assert stats["avg_moves"] == pytest.approx(190)
    assert stats["win_rate"] == pytest.approx(25.0)
    assert stats["win_tile"] == 2048
    assert stats["tile_stats"][2] == (3, 75.0)
    assert stats["tile_stats"][128] == (2, 50.0)
    assert stats["tile_stats"][2048] == (1, 25.0)
    assert stats["stop_reasons"] == {"no_legal_move": 3, "won": 1}


def test_tile_stats_extend_past_target():
    stats = analyze_results([result(5000, 12, 900)], win_exponent=11)
    assert stats["tile_stats"][4096] == (1, 100.0)


def test_analyze_empty_results():
    with pytest.raises(ValueError):
        analyze_results([])


def test_format_statistics(results):
    text = format_statistics(analyze_results(results))
    assert "Statistics for 4 games:" in text
    assert "Win rate (>= 2048 tile): 25.0%" in text
    assert "+" in text and "| Tile" in text
    assert "1/4" in text


def test_save_statistics(results, tmp_path):
    config = {"search": {"evaluator": "heuristic", "depth": 3}, "seed": np.int64(7)}
    path = save_statistics(analyze_results(results), config, str(tmp_path / "out"))
    with open(path) as f:
        saved = json.load(f)
    assert saved["num_games"] == 4
    assert saved["tile_stats"]["2048"] == {"count": 1, "percentage": 25.0}
    assert saved["config"]["seed"] == 7
    assert "heuristic_d3_4games" in path


def test_numpy_encoder():
    encoded = json.dumps({"a": np.arange(3), "b": np.float32(0.5)}, cls=NumpyJSONEncoder)
    assert json.loads(encoded) == {"a": [0, 1, 2], "b": 0.5}
    with pytest.raises(TypeError):
        json.dumps({"c": object()}, cls=NumpyJSONEncoder)
