"""
Tests for YAML indicator instance configs.
"""

from pathlib import Path

import pytest

from nom_tools.plugins import (
    PluginConfig,
    PluginConfigNotFoundError,
    list_plugin_configs,
    load_plugin_config,
)

SHIPPED_CONFIGS = Path(__file__).resolve().parents[2] / "configs" / "indicators"


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadPluginConfig:
    def test_load_yml(self, tmp_path):
        _write(tmp_path / "es_vwap.yml", (
            "indicator: vwap_bands\n"
            "description: ES weekly\n"
            "params:\n"
            "  timeframe: weekly\n"
            "  band2Enabled: false\n"
        ))
        cfg = load_plugin_config("es_vwap", tmp_path)
        assert cfg.id == "es_vwap"
        assert cfg.indicator == "vwap_bands"
        assert cfg.params == {"timeframe": "weekly", "band2Enabled": False}
        assert cfg.description == "ES weekly"

    def test_yaml_suffix_and_explicit_id(self, tmp_path):
        _write(tmp_path / "lrc.yaml", "id: custom_id\nindicator: linear_regression_channel\n")
        cfg = load_plugin_config("lrc", tmp_path)
        assert cfg.id == "custom_id"
        assert cfg.params == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(PluginConfigNotFoundError, match="nope") as exc_info:
            load_plugin_config("nope", tmp_path)
        assert exc_info.value.searched_paths == [tmp_path / "nope.yml", tmp_path / "nope.yaml"]

    def test_empty_file(self, tmp_path):
        _write(tmp_path / "empty.yml", "")
        with pytest.raises(ValueError, match="empty"):
            load_plugin_config("empty", tmp_path)

    def test_non_mapping(self, tmp_path):
        _write(tmp_path / "list.yml", "- vwap_bands\n- period: 3\n")
        with pytest.raises(ValueError, match="mapping"):
            load_plugin_config("list", tmp_path)

    def test_missing_indicator(self, tmp_path):
        _write(tmp_path / "bad.yml", "params:\n  period: 3\n")
        with pytest.raises(ValueError, match="indicator is required"):
            load_plugin_config("bad", tmp_path)


class TestPluginConfig:
    def test_create_applies_params(self):
        cfg = PluginConfig(id="ha", indicator="heikin_ashi_smoothed", params={"period": 12})
        plugin = cfg.create()
        assert plugin.props["period"] == 12
        assert plugin.smoother.length == 12

    def test_create_rejects_bad_params(self):
        cfg = PluginConfig(id="ha", indicator="heikin_ashi_smoothed", params={"length": 12})
        with pytest.raises(ValueError, match="Unknown params"):
            cfg.create()

    def test_dict_round_trip(self):
        cfg = PluginConfig(id="v", indicator="vwap_bands", params={"timeframe": "monthly"}, description="m")
        assert PluginConfig.from_dict(cfg.to_dict()) == cfg


class TestListPluginConfigs:
    def test_lists_ids_sorted(self, tmp_path):
        _write(tmp_path / "b.yml", "indicator: vwap_bands\n")
        _write(tmp_path / "a.yaml", "indicator: vwap_bands\n")
        _write(tmp_path / "notes.txt", "ignored")
        assert list_plugin_configs(tmp_path) == ["a", "b"]

    def test_missing_dir(self, tmp_path):
        assert list_plugin_configs(tmp_path / "nowhere") == []

    def test_shipped_configs_are_valid(self):
        ids = list_plugin_configs(SHIPPED_CONFIGS)
        assert ids
        for config_id in ids:
            load_plugin_config(config_id, SHIPPED_CONFIGS).create()
