"""
Configuration loader for testlens.

Settings come from three layers, lowest priority first: a TOML or YAML
configuration file, ``TESTLENS_<SECTION>__<KEY>`` environment variables, and
overrides passed in by the command line. Layers are deep-merged and the
result is validated by ``TestLensConfig``.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import TestLensConfig
from .models.main import deep_merge

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "yes", "on"}
_FALSE_VALUES = {"false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


SAMPLE_CONFIG = """# testlens configuration
# Uncomment and modify the sections you want to customize.

# =============================================================================
# DECLARATION KEYWORDS
# =============================================================================

[extraction]
# Calls that declare a module (a named group of tests)
module_keywords = ["describe", "module", "context"]
# Calls that declare a single test
test_keywords = ["it", "test", "specify"]
# Array methods whose callbacks are searched without adding a nesting level
iteration_methods = ["forEach", "map", "filter", "every", "some"]

# =============================================================================
# STRUCTURAL PARSING (.js/.ts files)
# =============================================================================

[parsing]
# Use the recovered tree when a file has syntax errors
allow_partial = false

# =============================================================================
# TEST FILE DISCOVERY
# =============================================================================

[discovery]
test_patterns = ["*test.js", "*test.ts", "*test.gjs", "*test.gts"]
exclude = ["*.d.ts", "vendor/*"]
# exclude_dirs = ["node_modules", "dist"]

# =============================================================================
# TEST RUNNER
# =============================================================================

[runner]
base_url = "http://localhost:4200/tests"
hide_passed = true

# =============================================================================
# LOGGING
# =============================================================================

[logging]
debug = false
# Third-party loggers kept at WARNING unless --verbose is given
# suppress_modules = []
"""


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


_READERS = {
    ".toml": (_read_toml, tomllib.TOMLDecodeError, "TOML"),
    ".yml": (_read_yaml, yaml.YAMLError, "YAML"),
    ".yaml": (_read_yaml, yaml.YAMLError, "YAML"),
}


class ConfigLoader:
    """Builds a validated TestLensConfig from files, environment and CLI."""

    DEFAULT_CONFIG_FILES = [
        ".testlens.toml",
        ".testlens.yml",
        ".testlens.yaml",
        "testlens.toml",
        "testlens.yml",
        "testlens.yaml",
    ]

    ENV_PREFIX = "TESTLENS_"

    def __init__(self, config_file: str | Path | None = None):
        """
        Args:
            config_file: Explicit configuration file. When None the first
                existing entry of DEFAULT_CONFIG_FILES in the working
                directory is used.
        """
        self.config_file = Path(config_file) if config_file else None
        self._config_cache: TestLensConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        cli_overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> TestLensConfig:
        """
        Load and validate configuration, caching the result.

        Args:
            env_overrides: Used instead of reading ``os.environ`` when given
            cli_overrides: Highest-priority values
            reload: Ignore the cached configuration

        Raises:
            ConfigurationError: If a file cannot be read or values are invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        layers = [
            ("file", self._load_config_file()),
            ("environment", env_overrides or self._load_env_config()),
            ("command line", cli_overrides),
        ]

        merged: dict[str, Any] = {}
        for source, values in layers:
            if values:
                merged = deep_merge(merged, values)
                logger.debug(f"Applied configuration from {source}")

        try:
            self._config_cache = TestLensConfig(**merged)
        except ValidationError as e:
            message = f"Configuration validation failed: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e

        return self._config_cache

    def _load_config_file(self) -> dict[str, Any] | None:
        config_file = self._find_config_file()
        if config_file is None:
            logger.debug("No configuration file found, using defaults")
            return None

        reader = _READERS.get(config_file.suffix.lower())
        if reader is None:
            logger.warning(f"Unknown configuration file type: {config_file}")
            return None
        read, decode_error, file_type = reader

        try:
            content = read(config_file)
        except decode_error as e:
            message = f"Invalid {file_type} in {config_file}: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e
        except OSError as e:
            message = f"Failed to read {config_file}: {e}"
            logger.error(message)
            raise ConfigurationError(message) from e

        if not content:
            logger.warning(f"Configuration file {config_file} is empty")
            return None
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"Configuration file {config_file} must contain a mapping of sections"
            )

        logger.debug(f"Loaded configuration from {config_file}")
        return content

    def _find_config_file(self) -> Path | None:
        if self.config_file is not None:
            return self.config_file if self.config_file.exists() else None
        for name in self.DEFAULT_CONFIG_FILES:
            candidate = Path(name)
            if candidate.exists():
                return candidate
        return None

    def _load_env_config(self) -> dict[str, Any]:
        """
        Collect ``TESTLENS_SECTION__KEY=value`` variables as nested settings.

        Variables without a ``__`` separator, such as ``TESTLENS_QUIET``, are
        switches read elsewhere and are not configuration keys.
        """
        env_config: dict[str, Any] = {}
        for name, raw in os.environ.items():
            if not name.startswith(self.ENV_PREFIX):
                continue
            key = name[len(self.ENV_PREFIX) :].lower()
            if "__" not in key:
                continue

            *sections, field = key.split("__")
            target = env_config
            for section in sections:
                target = target.setdefault(section, {})
            target[field] = self._parse_env_value(raw)
        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Interpret an environment string as bool, number, list or text."""
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False

        for number_type in (int, float):
            try:
                return number_type(value)
            except ValueError:
                pass

        if "," in value:
            return [item.strip() for item in value.split(",")]
        return value

    def create_sample_config(self, filepath: str | Path | None = None) -> Path:
        """
        Write the commented sample configuration.

        Args:
            filepath: Destination, ``.testlens.toml`` when None

        Raises:
            ConfigurationError: If the file already exists or cannot be written
        """
        filepath = Path(filepath) if filepath is not None else Path(".testlens.toml")

        if filepath.exists():
            raise ConfigurationError(f"Configuration file already exists: {filepath}")

        try:
            filepath.write_text(SAMPLE_CONFIG, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to write {filepath}: {e}") from e

        logger.info(f"Created sample configuration at {filepath}")
        return filepath


def load_config(
    config_file: str | Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> TestLensConfig:
    """Load testlens configuration from the default sources."""
    return ConfigLoader(config_file).load_config(cli_overrides=cli_overrides)
