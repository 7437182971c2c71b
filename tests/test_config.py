"""
Tests for configuration loading.
"""

import json

import pytest
import yaml

from prosefmt.config import (
    ProsefmtConfig, create_default_config, find_config, load_config, load_prosefmt_config
)
from prosefmt.errors import ConfigError


class TestProsefmtConfig:
    """Tests for the config dataclass."""

    def test_defaults(self):
        config = ProsefmtConfig()
        assert config.max_workers == 4
        assert config.sample_size == 32 * 1024
        assert config.max_fix_iterations == 5
        assert ".git" in config.exclude_patterns
        assert config.output.format == "compact"
        assert config.rules.disabled == []

    def test_from_dict(self):
        config = ProsefmtConfig.from_dict({
            "exclude": ["build"],
            "jobs": 2,
            "rules": {"disabled": ["TL010"]},
            "output": {"format": "json"},
            "unknown_key": True,
        })
        assert config.exclude_patterns == ["build"]
        assert config.max_workers == 2
        assert config.rules.disabled == ["TL010"]
        assert config.output.format == "json"

    def test_invalid_values(self):
        with pytest.raises(ConfigError):
            ProsefmtConfig(max_workers=0)
        with pytest.raises(ConfigError):
            ProsefmtConfig.from_dict({"output": {"format": "xml"}})
        with pytest.raises(ConfigError):
            ProsefmtConfig.from_dict({"rules": {"bogus": []}})

    def test_empty_sections_use_defaults(self):
        config = ProsefmtConfig.from_dict({"rules": None, "output": None})
        assert config.rules.disabled == []
        assert config.output.format == "compact"

    def test_section_must_be_a_mapping(self):
        with pytest.raises(ConfigError):
            ProsefmtConfig.from_dict({"rules": ["TL010"]})
        with pytest.raises(ConfigError):
            ProsefmtConfig.from_dict({"output": "json"})

    def test_to_dict(self):
        data = ProsefmtConfig().to_dict()
        assert data["rules"] == {"enabled": [], "disabled": []}


class TestLoadConfig:
    """Tests for reading config files."""

    def test_yaml(self, tmp_path):
        path = tmp_path / ".prosefmt.yaml"
        path.write_text("max_workers: 3\nrules:\n  disabled: [TL001]\n")
        config = load_prosefmt_config(str(path))
        assert config.max_workers == 3
        assert config.rules.disabled == ["TL001"]

    def test_json(self, tmp_path):
        path = tmp_path / ".prosefmt.json"
        path.write_text(json.dumps({"max_fix_iterations": 2}))
        assert load_prosefmt_config(str(path)).max_fix_iterations == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".prosefmt.yml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / ".prosefmt.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / ".prosefmt.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_find_config_walks_up(self, tmp_path):
        config_path = tmp_path / ".prosefmt.yaml"
        config_path.write_text("max_workers: 1\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        target = nested / "file.txt"
        target.write_text("x\n")

        assert find_config(str(nested)) == str(config_path.resolve())
        assert find_config(str(target)) == str(config_path.resolve())
        assert load_prosefmt_config(start_dir=str(nested)).max_workers == 1

    def test_default_config_round_trips(self):
        data = yaml.safe_load(create_default_config())
        config = ProsefmtConfig.from_dict(data)
        assert config == ProsefmtConfig()
