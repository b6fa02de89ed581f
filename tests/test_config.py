from pathlib import Path

import pytest

from search.config import SolverConfig, load_config


def test_defaults():
    cfg = SolverConfig()
    assert cfg.heuristic == "done,distance,player"
    assert cfg.fallback is None
    assert cfg.check_every == 256


def test_load_yaml(tmp_path):
    p = tmp_path / "solver.yaml"
    p.write_text(
        "solver:\n"
        "  heuristic: matching\n"
        "  fallback: {chain: [corner, done]}\n"
        "  node_limit: 1000\n"
        "  time_limit_s: null\n",
        encoding="utf-8",
    )
    cfg = load_config(str(p))
    assert cfg.heuristic == "matching"
    assert cfg.fallback == {"chain": ["corner", "done"]}
    assert cfg.node_limit == 1000
    assert cfg.time_limit_s is None


def test_load_flat_yaml(tmp_path):
    p = tmp_path / "flat.yaml"
    p.write_text("check_every: 16\n", encoding="utf-8")
    assert load_config(str(p)).check_every == 16


def test_shipped_config():
    cfg = load_config(str(Path(__file__).resolve().parents[1] / "configs" / "solver.yaml"))
    assert cfg.heuristic == {"chain": ["done", "distance", "player"]}
    assert cfg.fallback_time_limit_s == 4.0


@pytest.mark.parametrize("data", [{"heurstic": "done"}, {"check_every": 0}])
def test_bad_config(data):
    with pytest.raises(ValueError):
        SolverConfig.from_dict(data)


@pytest.mark.parametrize("text", ["solver: null\n", "- heuristic: done\n", "solver: [done]\n"])
def test_config_must_be_mapping(tmp_path, text):
    p = tmp_path / "bad.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(p))
