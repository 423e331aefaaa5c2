"""GraphConfig tests."""

import json

import pytest

from assetgraph import GraphConfig


def test_defaults():
    config = GraphConfig()
    assert ".wav" in config.audio_extensions
    assert config.map_extensions == frozenset({".bsp"})
    assert config.nav_extension == ".aas"
    assert config.levelshot_dir == "levelshots"
    assert config.levelshot_extension == ".tga"
    assert config.type_conflict == "warn"


def test_save_and_load(tmp_path):
    path = tmp_path / "assetgraph.json"
    config = GraphConfig()
    config.update({
        "image_extensions": ["TGA", ".dds"],
        "levelshot_dir": "/Levelshots/",
        "type_conflict": "REJECT",
    })
    config.save(str(path))

    data = json.loads(path.read_text())
    assert data["image_extensions"] == [".dds", ".tga"]
    assert data["type_conflict"] == "reject"

    loaded = GraphConfig(str(path))
    assert loaded.image_extensions == frozenset({".tga", ".dds"})
    assert loaded.levelshot_dir == "levelshots"
    assert loaded.type_conflict == "reject"
    assert loaded.to_dict() == config.to_dict()


def test_partial_file_keeps_other_defaults(tmp_path):
    path = tmp_path / "assetgraph.json"
    path.write_text(json.dumps({"nav_extension": "nav"}))
    config = GraphConfig(str(path))
    assert config.nav_extension == ".nav"
    assert config.model_extensions == GraphConfig.MODEL_EXTENSIONS


def test_missing_file_uses_defaults(tmp_path):
    config = GraphConfig(str(tmp_path / "absent.json"))
    assert config.to_dict() == GraphConfig().to_dict()


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        GraphConfig().update({"type_conflict": "override"})
