from pathlib import Path

import pytest

from tafl import GameConfig

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def test_from_yaml(tmp_path):
    path = tmp_path / "game.yaml"
    path.write_text("layout_path: boards/custom.txt\nreport_format: json\nmax_ply: 50\n")

    config = GameConfig.from_yaml(path)

    assert config.layout_path == "boards/custom.txt"
    assert config.report_format == "json"
    assert config.max_ply == 50


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert GameConfig.from_yaml(path) == GameConfig()


def test_shipped_default_config_loads():
    assert GameConfig.from_yaml(CONFIG_DIR / "default.yaml") == GameConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": 1},
        {"report_format": "xml"},
        {"max_ply": 0},
    ],
)
def test_invalid_config_rejected(data):
    with pytest.raises(ValueError):
        GameConfig.from_dict(data)


def test_merged_ignores_none():
    config = GameConfig(max_ply=10).merged(max_ply=None, report_path="out.txt")
    assert config.max_ply == 10
    assert config.report_path == "out.txt"
