"""Messages exchanged between the presentation surface and the dispatcher."""

from typing import Any, Dict, List

from pydantic import BaseModel

from branch_diff.models import BranchListing, Commit, DiffSummary

# Requests
GET_BRANCHES = "getBranches"
GET_DIFF = "getDiff"
GET_COMMIT_HISTORY = "getCommitHistory"
OPEN_DIFF = "openDiff"
OPEN_FILE = "openFile"
REFRESH = "refresh"

# Responses
BRANCHES = "branches"
DIFF = "diff"
COMMITS = "commits"
ERROR = "error"

Message = Dict[str, Any]


class RevisionDocument(BaseModel):
    """One side of a two-revision comparison."""

    root: str
    revision: str
    path: str

    model_config = {"frozen": True}


def request(command: str, **fields: Any) -> Message:
    return {"command": command, **fields}


def branches_response(listing: BranchListing) -> Message:
    return {"command": BRANCHES, "data": listing.to_wire()}


def diff_response(summary: DiffSummary) -> Message:
    return {"command": DIFF, "data": summary.to_wire()}


def commits_response(commits: List[Commit]) -> Message:
    return {"command": COMMITS, "data": [commit.to_wire() for commit in commits]}


def error_response(message: str) -> Message:
    return {"command": ERROR, "message": message}
