"""Locate and parse the project's YAML configuration. Infrastructure I/O only."""

import logging
from pathlib import Path
from typing import Optional

import yaml

from stratify_remediator.domain.constants import (
    CONFIG_FILE_NAMES,
    CONFIG_RESOURCE_DIR,
    POM_FILE,
)
from stratify_remediator.domain.exceptions import ConfigurationError
from stratify_remediator.infrastructure.gateways.pom_gateway import PomGateway

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """
    Loads config from the first YAML file found walking up from a module.

    Each directory is checked for CONFIG_FILE_NAMES directly and under
    src/main/resources. The walk stops at the project root.
    """

    @staticmethod
    def is_project_root(directory: Path) -> bool:
        """A root pom declares no parent or an empty relativePath; a wrapper script also marks the root."""
        if (directory / "mvnw").exists():
            return True
        pom = directory / POM_FILE
        if not pom.exists():
            return False
        try:
            return PomGateway.is_root(pom.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError):
            return False

    @staticmethod
    def find_project_root(start: Optional[Path] = None) -> Path:
        """Nearest enclosing project root; the start directory when none is found."""
        start = (start or Path.cwd()).resolve()
        for directory in (start, *start.parents):
            if ConfigFileLoader.is_project_root(directory):
                return directory
        return start

    @staticmethod
    def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
        current = (start or Path.cwd()).resolve()
        for directory in (current, *current.parents):
            for name in CONFIG_FILE_NAMES:
                for candidate in (directory / name, directory / CONFIG_RESOURCE_DIR / name):
                    if candidate.is_file():
                        return candidate
            if ConfigFileLoader.is_project_root(directory):
                break
        return None

    @staticmethod
    def load_config_from_fs(start: Optional[Path] = None) -> tuple[dict[str, object], Optional[Path]]:
        """
        Returns (config_dict, config_path). An empty dict and None when no file exists.

        Raises ConfigurationError when a file exists but is not a YAML mapping.
        """
        config_file = ConfigFileLoader.find_config_file(start)
        if config_file is None:
            return ({}, None)
        try:
            with config_file.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_file}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {config_file}")
        logger.debug("Loaded configuration from %s", config_file)
        return (data, config_file)
