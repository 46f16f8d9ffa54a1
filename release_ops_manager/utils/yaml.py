"""Contains utility functions for loading release configuration from YAML files."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from release_ops_manager.configuration.exceptions import ReleaseConfigurationError
from release_ops_manager.configuration.models import ReleaseConfig

logger = structlog.get_logger(__name__)

yaml = YAML(typ="safe")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Loads a YAML file and returns a dictionary."""
    with open(path, encoding="utf-8") as f:
        return yaml.load(f)  # type: ignore[no-any-return]


def parse_release_config(data: dict[str, Any] | None) -> ReleaseConfig:
    """Build a release configuration from already-parsed YAML data.

    Raises:
        ReleaseConfigurationError: If a value has the wrong type or a key is unknown.
    """
    try:
        return ReleaseConfig.model_validate(data or {})
    except ValidationError as exc:
        raise ReleaseConfigurationError(f"Invalid release configuration: {exc}") from exc


def load_release_config(path: Path | None) -> ReleaseConfig:
    """Load the release configuration from a YAML file, or the defaults when no path is given.

    Raises:
        ReleaseConfigurationError: If the file is missing, malformed, or invalid.
    """
    if path is None:
        return ReleaseConfig()
    if not path.exists():
        raise ReleaseConfigurationError(f"Release configuration file not found: {path.absolute()}")
    try:
        data = load_yaml_file(path)
    except YAMLError as exc:
        raise ReleaseConfigurationError(f"Failed to parse YAML file {path}: {exc}") from exc
    if data is not None and not isinstance(data, dict):
        raise ReleaseConfigurationError(f"Release configuration in {path} must be a mapping")
    config = parse_release_config(data)
    logger.debug("Loaded release configuration", path=str(path), packages_directories=config.packages_directories)
    return config
