"""Configuration for Branch Diff."""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ValidationError

from branch_diff.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

REPO_ENV_VAR = "BRANCH_DIFF_REPO"
CONFIG_DIR_NAME = ".branch-diff"
CONFIG_FILE_NAME = "config.json"
STATE_FILE_NAME = "state.json"


class BranchDiffConfig(BaseModel):
    """Settings for one workspace."""

    workspace_root: Path
    state_file: Optional[Path] = None
    default_base_branches: List[str] = ["master", "main"]

    model_config = {"arbitrary_types_allowed": True}

    @property
    def config_dir(self) -> Path:
        return self.workspace_root / CONFIG_DIR_NAME

    @property
    def resolved_state_file(self) -> Path:
        if self.state_file is None:
            return self.config_dir / STATE_FILE_NAME
        if self.state_file.is_absolute():
            return self.state_file
        return self.workspace_root / self.state_file


def find_workspace_root(start: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest directory at or above ``start`` that holds a ``.git``."""
    current_dir = Path(start or Path.cwd()).resolve()

    for parent in [current_dir] + list(current_dir.parents):
        if (parent / ".git").exists():
            return parent
    return None


def load_config(repo: Union[str, Path, None] = None) -> BranchDiffConfig:
    """Resolve the workspace root and read ``.branch-diff/config.json`` if present.

    ``repo`` wins over ``BRANCH_DIFF_REPO``, which wins over searching upwards
    from the current directory.
    """
    explicit = repo or os.environ.get(REPO_ENV_VAR)
    if explicit:
        root = Path(explicit).expanduser().resolve()
        if not root.is_dir():
            raise ConfigurationError(f"Workspace folder does not exist: {root}")
    else:
        root = find_workspace_root()
        if root is None:
            raise ConfigurationError("Not in a git repository")

    settings = {}
    config_file = root / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if config_file.exists():
        try:
            settings = json.loads(config_file.read_text())
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid config file {config_file}: {e}") from e
        if not isinstance(settings, dict):
            raise ConfigurationError(f"Invalid config file {config_file}")
        logger.debug("Loaded settings from %s", config_file)

    settings.pop("workspace_root", None)
    try:
        return BranchDiffConfig(workspace_root=root, **settings)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {config_file}: {e}") from e
