"""Changed file and diff summary models."""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class FileStatus(str, Enum):
    """How a path changed between two revisions."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class ChangedFile(BaseModel):
    """A single path in a branch comparison with its line counts."""

    path: str
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    status: FileStatus = FileStatus.MODIFIED

    model_config = {"frozen": True}

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class DiffSummary(BaseModel):
    """Files changed between two revisions plus aggregate counts."""

    files: List[ChangedFile] = []
    total_additions: int = Field(default=0, alias="totalAdditions")
    total_deletions: int = Field(default=0, alias="totalDeletions")

    model_config = {"frozen": True, "populate_by_name": True}

    @classmethod
    def from_files(cls, files: List[ChangedFile]) -> "DiffSummary":
        """Build a summary whose totals are the sums over ``files``."""
        return cls(
            files=list(files),
            total_additions=sum(f.additions for f in files),
            total_deletions=sum(f.deletions for f in files),
        )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
