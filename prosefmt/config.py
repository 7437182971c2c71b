"""
Configuration system for prosefmt.

Supports YAML and JSON configuration files for choosing rules,
excluding paths, tuning the worker pool and selecting output.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from prosefmt.core.classifier import SAMPLE_SIZE
from prosefmt.core.discovery import DEFAULT_EXCLUDE_PATTERNS
from prosefmt.errors import ConfigError
from prosefmt.remediation.fixer import DEFAULT_MAX_ITERATIONS


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".prosefmt.yaml",
    ".prosefmt.yml",
    ".prosefmt.json",
]

OUTPUT_FORMATS = ("compact", "json", "sarif")
VERBOSITY_LEVELS = ("silent", "compact", "verbose")


@dataclass
class RuleSetConfig:
    """Which rules to run, as fnmatch patterns on rule ids."""
    enabled: List[str] = field(default_factory=list)
    disabled: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "compact"
    verbosity: str = "compact"
    output_file: Optional[str] = None
    color: bool = False


@dataclass
class ProsefmtConfig:
    """
    Main configuration for prosefmt.

    Example YAML config:

    ```yaml
    exclude:
      - ".git"
      - "*.min.js"
    max_workers: 4
    max_fix_iterations: 5

    rules:
      disabled:
        - TL010

    output:
      format: compact
      verbosity: compact
    ```
    """
    exclude_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    max_workers: int = 4
    sample_size: int = SAMPLE_SIZE
    max_fix_iterations: int = DEFAULT_MAX_ITERATIONS
    rules: RuleSetConfig = field(default_factory=RuleSetConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.sample_size < 1:
            raise ConfigError(f"sample_size must be at least 1, got {self.sample_size}")
        if self.max_fix_iterations < 1:
            raise ConfigError(f"max_fix_iterations must be at least 1, got {self.max_fix_iterations}")
        if self.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Unknown output format: {self.output.format}")
        if self.output.verbosity not in VERBOSITY_LEVELS:
            raise ConfigError(f"Unknown verbosity: {self.output.verbosity}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProsefmtConfig":
        """Create config from a dictionary."""
        data = dict(data)

        # An empty section ("rules:" with nothing under it) means defaults.
        for key, section_cls in (("rules", RuleSetConfig), ("output", OutputConfig)):
            if key not in data:
                continue
            section = data[key]
            if section is None:
                del data[key]
            elif not isinstance(section, dict):
                raise ConfigError(f"Configuration section '{key}' must be a mapping")
            else:
                try:
                    data[key] = section_cls(**section)
                except TypeError as e:
                    raise ConfigError(f"Invalid configuration: {e}") from e

        # Map some common alternative names
        if "exclude" in data:
            data["exclude_patterns"] = data.pop("exclude")
        if "jobs" in data:
            data["max_workers"] = data.pop("jobs")

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e

    try:
        if config_path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed configuration file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.is_file():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_prosefmt_config(path: Optional[str] = None, start_dir: str = ".") -> ProsefmtConfig:
    """
    Load a ProsefmtConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return ProsefmtConfig()

    return ProsefmtConfig.from_dict(load_config(path))


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {
        "exclude": list(DEFAULT_EXCLUDE_PATTERNS),
        "max_workers": 4,
        "max_fix_iterations": DEFAULT_MAX_ITERATIONS,
        "rules": {
            "enabled": [],
            "disabled": [],
        },
        "output": {
            "format": "compact",
            "verbosity": "compact",
        },
    }

    return yaml.dump(config, default_flow_style=False, sort_keys=False)
