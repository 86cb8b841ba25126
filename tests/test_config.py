"""Tests for the configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from testlens.config import ConfigLoader, TestLensConfig, load_config
from testlens.config.loader import SAMPLE_CONFIG, ConfigurationError
from testlens.config.models import ExtractionConfig, RunnerConfig


class TestTestLensConfig:
    """Test the main TestLensConfig model."""

    def test_default_config_creation(self):
        """Test that default configuration can be created."""
        config = TestLensConfig()

        assert config.extraction.module_keywords == ["describe", "module", "context"]
        assert config.extraction.test_keywords == ["it", "test", "specify"]
        assert config.extraction.iteration_methods == [
            "forEach",
            "map",
            "filter",
            "every",
            "some",
        ]
        assert config.parsing.allow_partial is False
        assert "*test.gjs" in config.discovery.test_patterns
        assert "node_modules" in config.discovery.exclude_dirs
        assert config.runner.base_url == "http://localhost:4200/tests"
        assert config.runner.hide_passed is True
        assert config.logging.debug is False

    def test_unknown_section_is_rejected(self):
        with pytest.raises(ValidationError):
            TestLensConfig(coverage={"minimum_line_coverage": 80})

    def test_overlapping_keywords_are_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ExtractionConfig(module_keywords=["describe", "test"])

        assert "overlap" in str(exc_info.value)

    @pytest.mark.parametrize("keywords", [[], ["describe block"], ["1st"]])
    def test_invalid_keywords_are_rejected(self, keywords):
        with pytest.raises(ValidationError):
            ExtractionConfig(module_keywords=keywords)

    def test_runner_url_must_be_http(self):
        with pytest.raises(ValidationError) as exc_info:
            RunnerConfig(base_url="file:///tmp/tests")

        assert "http://" in str(exc_info.value)

    def test_logging_suppresses_no_modules_by_default(self):
        assert TestLensConfig().logging.suppress_modules == []


class TestConfigLoader:
    """Test the configuration loader."""

    def test_load_default_config(self, tmp_path, monkeypatch):
        """Test loading default configuration when no files exist."""
        monkeypatch.chdir(tmp_path)

        config = ConfigLoader().load_config()

        assert isinstance(config, TestLensConfig)
        assert config.extraction.module_keywords == ["describe", "module", "context"]

    def test_load_toml_config(self, tmp_path):
        config_file = tmp_path / ".testlens.toml"
        config_file.write_text(
            '[extraction]\nmodule_keywords = ["suite"]\ntest_keywords = ["spec"]\n'
            '[runner]\nbase_url = "http://localhost:7357/"\n'
        )

        config = ConfigLoader(config_file).load_config()

        assert config.extraction.module_keywords == ["suite"]
        assert config.extraction.test_keywords == ["spec"]
        assert config.runner.base_url == "http://localhost:7357/"

    def test_load_yaml_config(self, tmp_path):
        config_file = tmp_path / "testlens.yml"
        config_file.write_text(
            yaml.dump({"parsing": {"allow_partial": True}, "logging": {"debug": True}})
        )

        config = ConfigLoader(config_file).load_config()

        assert config.parsing.allow_partial is True
        assert config.logging.debug is True

    def test_default_file_is_discovered(self, tmp_path, monkeypatch):
        (tmp_path / "testlens.yaml").write_text("runner:\n  hide_passed: false\n")
        monkeypatch.chdir(tmp_path)

        config = ConfigLoader().load_config()

        assert config.runner.hide_passed is False

    def test_empty_file_uses_defaults(self, tmp_path):
        config_file = tmp_path / ".testlens.yml"
        config_file.write_text("")

        config = ConfigLoader(config_file).load_config()

        assert config.runner.hide_passed is True

    def test_invalid_toml_raises(self, tmp_path):
        config_file = tmp_path / ".testlens.toml"
        config_file.write_text("[extraction\nmodule_keywords = ")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(config_file).load_config()

        assert "Invalid TOML" in str(exc_info.value)

    def test_invalid_values_raise(self, tmp_path):
        config_file = tmp_path / ".testlens.toml"
        config_file.write_text('[runner]\nbase_url = "localhost"\n')

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(config_file).load_config()

        assert "validation failed" in str(exc_info.value)

    def test_environment_variable_overrides(self, tmp_path, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.chdir(tmp_path)
        env_vars = {
            "TESTLENS_RUNNER__HIDE_PASSED": "false",
            "TESTLENS_EXTRACTION__TEST_KEYWORDS": "it, specify",
            "TESTLENS_QUIET": "1",
        }

        with patch.dict(os.environ, env_vars):
            config = ConfigLoader().load_config()

        assert config.runner.hide_passed is False
        assert config.extraction.test_keywords == ["it", "specify"]

    def test_cli_overrides_win(self, tmp_path):
        config_file = tmp_path / ".testlens.toml"
        config_file.write_text("[runner]\nhide_passed = true\n")

        with patch.dict(os.environ, {"TESTLENS_RUNNER__HIDE_PASSED": "true"}):
            config = load_config(config_file, cli_overrides={"runner": {"hide_passed": False}})

        assert config.runner.hide_passed is False

    def test_config_is_cached(self, tmp_path):
        config_file = tmp_path / ".testlens.toml"
        config_file.write_text("[logging]\ndebug = true\n")
        loader = ConfigLoader(config_file)

        first = loader.load_config()
        config_file.write_text("[logging]\ndebug = false\n")

        assert loader.load_config() is first
        assert loader.load_config(reload=True).logging.debug is False

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", True),
            ("off", False),
            ("42", 42),
            ("0.5", 0.5),
            ("a, b", ["a", "b"]),
            ("http://localhost:4200/tests", "http://localhost:4200/tests"),
        ],
    )
    def test_parse_env_value(self, raw, expected):
        assert ConfigLoader()._parse_env_value(raw) == expected

    def test_create_sample_config(self, tmp_path):
        target = tmp_path / ".testlens.toml"

        created = ConfigLoader().create_sample_config(target)

        assert created == target
        assert target.read_text() == SAMPLE_CONFIG
        # The sample must load cleanly
        assert ConfigLoader(target).load_config() == TestLensConfig()

    def test_create_sample_config_refuses_to_overwrite(self, tmp_path):
        target = tmp_path / ".testlens.toml"
        target.write_text("# mine\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader().create_sample_config(target)

        assert target.read_text() == "# mine\n"

    def test_sample_config_path_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        created = ConfigLoader().create_sample_config()

        assert created == Path(".testlens.toml")
        assert (tmp_path / ".testlens.toml").exists()
