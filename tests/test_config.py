import json

import pytest

from wirebox import ConfigurationError, ContainerSettings
from wirebox.config_builder import configuration
from wirebox.config_sources import DictSource, EnvSource, FlatDictSource, JsonTreeSource, YamlTreeSource


def test_defaults():
    settings = configuration()
    assert settings == ContainerSettings(on_name_collision="skip", exclude=())


def test_env_source(monkeypatch):
    monkeypatch.setenv("WIREBOX_ON_NAME_COLLISION", "Error")
    monkeypatch.setenv("WIREBOX_EXCLUDE", "app.legacy*, app.tests.*")

    settings = configuration(EnvSource())

    assert settings.on_name_collision == "error"
    assert settings.exclude == ("app.legacy*", "app.tests.*")


def test_later_sources_and_overrides_win():
    settings = configuration(
        FlatDictSource({"APP_on_name_collision": "error"}, prefix="APP_"),
        DictSource({"on_name_collision": "skip", "exclude": ["a.*"]}),
        overrides={"exclude": "b.*"},
    )

    assert settings.on_name_collision == "skip"
    assert settings.exclude == ("b.*",)


def test_json_tree_source(tmp_path):
    path = tmp_path / "wirebox.json"
    path.write_text(json.dumps({"on_name_collision": "error", "exclude": ["x.*"]}), encoding="utf-8")

    settings = configuration(JsonTreeSource(str(path)))

    assert settings == ContainerSettings(on_name_collision="error", exclude=("x.*",))


def test_json_tree_source_bad_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Failed to load JSON config"):
        configuration(JsonTreeSource(str(tmp_path / "missing.json")))


def test_yaml_tree_source(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "wirebox.yaml"
    path.write_text("on_name_collision: error\nexclude:\n  - legacy.*\n", encoding="utf-8")

    settings = configuration(YamlTreeSource(str(path)))

    assert settings.on_name_collision == "error"
    assert settings.exclude == ("legacy.*",)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"overrides": {"on_name_collision": "replace"}},
        {"overrides": {"unknown": "x"}},
        {"overrides": {"exclude": 3}},
        {"overrides": {"on_name_collision": 1}},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ConfigurationError):
        configuration(**kwargs)


def test_unknown_source_type():
    with pytest.raises(ConfigurationError, match="Unknown configuration source type"):
        configuration(object())


def test_tree_must_be_mapping():
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        configuration(DictSource(["not", "a", "mapping"]))
