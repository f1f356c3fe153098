"""Data models for Branch Diff."""

from .branch import BranchListing
from .change import ChangedFile, DiffSummary, FileStatus
from .commit import Commit

__all__ = ["BranchListing", "ChangedFile", "Commit", "DiffSummary", "FileStatus"]
