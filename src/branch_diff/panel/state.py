"""Panel state persisted between reloads."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, Field, ValidationError

from branch_diff.models import BranchListing, ChangedFile, Commit

logger = logging.getLogger(__name__)


class TotalStats(BaseModel):
    additions: int = 0
    deletions: int = 0


class PanelState(BaseModel):
    """Everything the panel shows, restored verbatim on reload."""

    base_branch: str = Field(default="", alias="baseBranch")
    target_branch: str = Field(default="", alias="targetBranch")
    branches: BranchListing = BranchListing()
    diff_files: List[ChangedFile] = Field(default=[], alias="diffFiles")
    commits: List[Commit] = []
    expanded_folders: Set[str] = Field(default_factory=set, alias="expandedFolders")
    total_stats: TotalStats = Field(default_factory=TotalStats, alias="totalStats")

    model_config = {"populate_by_name": True}


class StateStore:
    """Reads and writes :class:`PanelState` as JSON."""

    def __init__(self, path: Optional[Path]):
        self.path = Path(path) if path is not None else None

    def load(self) -> PanelState:
        if self.path is None or not self.path.exists():
            return PanelState()
        try:
            return PanelState.model_validate(json.loads(self.path.read_text()))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable panel state %s: %s", self.path, e)
            return PanelState()

    def save(self, state: PanelState) -> None:
        if self.path is None:
            return
        data = state.model_dump(mode="json", by_alias=True)
        data["expandedFolders"] = sorted(state.expanded_folders)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False))
