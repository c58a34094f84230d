"""Workspace discovery and configuration loading.

A workspace is a directory containing ``cashe.toml``::

    name = "personal"
    reporting_currency = "ARS"
    movements_file = "movements.json"
    reports_dir = "reports"
    top_categories = 8

Movements are read lazily from ``movements_file`` (relative to the
workspace directory) the first time they are needed.
"""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from cashe.core.exceptions import ConfigError, WorkspaceNotFoundError
from cashe.core.loader import load_movements
from cashe.core.models import Movement, WorkspaceConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cashe.toml"


class Workspace:
    """A loaded workspace: configuration plus its movements source."""

    def __init__(self, path: Path, config: WorkspaceConfig):
        """Initialize workspace.

        Args:
            path: Workspace directory.
            config: Validated configuration.
        """
        self.path = path
        self.config = config
        self._movements: list[Movement] | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def movements_path(self) -> Path:
        return self.path / self.config.movements_file

    @property
    def reports_dir(self) -> Path:
        return self.path / self.config.reports_dir

    def get_movements(self) -> list[Movement]:
        """Return all movements, loading them on first access."""
        if self._movements is None:
            self._movements = load_movements(self.movements_path)
        return self._movements


def find_workspace_root(start: Path | None = None) -> Path:
    """Walk up from `start` (default: cwd) to the directory holding cashe.toml.

    Raises:
        WorkspaceNotFoundError: If no parent contains the config file.
    """
    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_FILENAME).is_file():
            return candidate
    raise WorkspaceNotFoundError(f"No {CONFIG_FILENAME} found in {current} or its parents")


def load_config(config_path: Path) -> WorkspaceConfig:
    """Read and validate a cashe.toml file.

    Raises:
        ConfigError: If the file is not valid TOML or fails validation.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        return WorkspaceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def load_workspace(path: Path | None = None) -> Workspace:
    """Load the workspace containing `path` (default: current directory)."""
    root = find_workspace_root(path)
    config = load_config(root / CONFIG_FILENAME)
    logger.debug("Loaded workspace '%s' from %s", config.name, root)
    return Workspace(root, config)
