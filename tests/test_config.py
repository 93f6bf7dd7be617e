import json

import pytest

from oursweeper.config import DEFAULTS, Config


def test_merge_overlays_nested_values():
    config = Config({"a": {"b": 1, "c": 2}, "d": "keep"})
    config.merge({"a": {"c": 3}})
    assert config["a"] == {"b": 1, "c": 3}
    assert config["d"] == "keep"


def test_merge_adds_new_keys():
    config = Config(DEFAULTS)
    config.merge({"server": "true"})
    assert config["server"] == "true"
    assert config["port"] == DEFAULTS["port"]


def test_merge_replaces_scalar_with_object():
    config = Config({"a": 5})
    config.merge({"a": {"x": 1}})
    assert config["a"] == {"x": 1}


def test_merge_lists_by_index():
    config = Config({"items": [1, 2, 3]})
    config.merge({"items": [9]})
    assert config["items"] == [9, 2, 3]


def test_merge_rejects_non_object():
    config = Config()
    with pytest.raises(ValueError):
        config.merge([1, 2])


def test_contains_get_and_missing_key():
    config = Config({"port": "4096"})
    assert "port" in config
    assert "host" not in config
    assert config.get("host", "fallback") == "fallback"
    with pytest.raises(KeyError):
        config["host"]


def test_setitem():
    config = Config()
    config["host"] = "localhost"
    assert config["host"] == "localhost"


def test_load_missing_file_returns_false(tmp_path):
    config = Config({"port": "4096"})
    assert config.load(str(tmp_path / "missing.json")) is False
    assert config["port"] == "4096"


def test_load_empty_name_returns_false():
    assert Config().load("") is False


def test_load_merges_by_default(tmp_path):
    path = tmp_path / "nmrc"
    path.write_text(json.dumps({"port": "5000"}))
    config = Config({"port": "4096", "game": "save.nm"})
    assert config.load(str(path)) is True
    assert config["port"] == "5000"
    assert config["game"] == "save.nm"


def test_load_without_merge_replaces(tmp_path):
    path = tmp_path / "nmrc"
    path.write_text(json.dumps({"port": "5000"}))
    config = Config({"game": "save.nm"})
    assert config.load(str(path), merge=False) is True
    assert "game" not in config
    assert config["port"] == "5000"


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "nmrc"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        Config().load(str(path))


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "out.json"
    original = Config({"a": {"b": [1, 2]}, "flag": True})
    original.save(str(path))
    restored = Config()
    assert restored.load(str(path)) is True
    assert restored["a"] == {"b": [1, 2]}
    assert restored["flag"] is True


def test_save_uses_loaded_filename(tmp_path):
    path = tmp_path / "nmrc"
    path.write_text(json.dumps({"port": "5000"}))
    config = Config()
    config.load(str(path))
    config["host"] = "localhost"
    config.save()
    assert json.loads(path.read_text()) == {"port": "5000", "host": "localhost"}
    assert path.read_text().endswith("\n")


def test_save_without_filename_raises():
    with pytest.raises(ValueError):
        Config().save()