import json

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(path, **overrides):
    path.write_text(json.dumps(overrides), encoding="utf-8")
    return path


def test_defaults_fill_missing_keys(tmp_path):
    output_dir = tmp_path / "logs"
    path = write_config(tmp_path / "runtime_config.json", tape="1 1 =", output_directory=str(output_dir))

    config = load_config(str(path), verbose=False)

    assert config["tape"] == "1 1 ="
    assert config["max_steps"] == DEFAULT_CONFIG["max_steps"]
    assert output_dir.is_dir()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


@pytest.mark.parametrize("key, value", [("max_steps", "10"), ("trace", 1), ("start_position", True)])
def test_wrong_types_are_rejected(tmp_path, key, value):
    path = write_config(tmp_path / "runtime_config.json", output_directory=str(tmp_path), **{key: value})
    with pytest.raises(TypeError):
        load_config(str(path), verbose=False)


def test_negative_budget_is_rejected():
    config = dict(DEFAULT_CONFIG, max_steps=-1)
    with pytest.raises(ValueError):
        validate_config(config)


def test_missing_key_is_rejected():
    config = dict(DEFAULT_CONFIG)
    del config["tape"]
    with pytest.raises(ValueError, match="tape"):
        validate_config(config)


def test_verbose_load_prints_summary(tmp_path, capsys):
    path = write_config(tmp_path / "runtime_config.json", output_directory=str(tmp_path))
    load_config(str(path))
    assert "Loaded config" in capsys.readouterr().out


def test_save_config(tmp_path):
    path = tmp_path / "runtime_config.json"
    config = dict(DEFAULT_CONFIG, output_directory=str(tmp_path), max_steps=0)
    save_config(config, str(path))
    assert load_config(str(path), verbose=False)["max_steps"] == 0
