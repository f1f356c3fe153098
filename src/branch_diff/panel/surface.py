"""Sidebar presentation state: branch selection, changes tree and commit list."""

import logging
from typing import Callable, List, Optional

from branch_diff.models import BranchListing, ChangedFile, Commit, FileStatus
from branch_diff.panel import protocol
from branch_diff.panel.file_tree import (
    FileTreeNode,
    build_file_tree,
    collect_all_folders,
    find_node,
)
from branch_diff.panel.protocol import Message
from branch_diff.panel.state import PanelState, StateStore, TotalStats

logger = logging.getLogger(__name__)

DEFAULT_BASE_BRANCHES = ("master", "main")


class PresentationSurface:
    """Holds what the panel displays and turns user actions into requests.

    Responses are applied in arrival order; a slow response for an older
    request overwrites newer state.
    """

    def __init__(
        self,
        send: Callable[[Message], None],
        store: Optional[StateStore] = None,
        default_base_branches=DEFAULT_BASE_BRANCHES,
    ):
        self.send = send
        self.store = store or StateStore(None)
        self.default_base_branches = list(default_base_branches)
        self.state = PanelState()
        self.last_error: Optional[str] = None

    def start(self) -> None:
        """Restore persisted state, or ask for branches when there is none."""
        self.state = self.store.load()
        if self.state.branches.local:
            logger.debug(
                "Restored panel state for %s..%s",
                self.state.base_branch,
                self.state.target_branch,
            )
            return
        self.send(protocol.request(protocol.GET_BRANCHES))

    def save(self) -> None:
        self.store.save(self.state)

    # Responses

    def receive(self, message: Message) -> None:
        command = message.get("command")
        if command == protocol.BRANCHES:
            self.populate_branches(BranchListing.model_validate(message["data"]))
        elif command == protocol.DIFF:
            data = message["data"]
            self.apply_diff(
                [ChangedFile.model_validate(f) for f in data["files"]],
                TotalStats(
                    additions=data["totalAdditions"], deletions=data["totalDeletions"]
                ),
            )
        elif command == protocol.COMMITS:
            self.state.commits = [Commit.model_validate(c) for c in message["data"]]
            self.save()
        elif command == protocol.ERROR:
            self.last_error = message.get("message", "")
            logger.error(self.last_error)

    def populate_branches(self, branches: BranchListing) -> None:
        self.state.branches = branches

        if not self.state.base_branch:
            self.state.base_branch = next(
                (b for b in self.default_base_branches if b in branches.local), ""
            )
        if not self.state.target_branch:
            self.state.target_branch = branches.current
        self.save()

        if self.state.base_branch and self.state.target_branch:
            self.load_diff()

    def apply_diff(self, files: List[ChangedFile], totals: TotalStats) -> None:
        self.state.diff_files = files
        self.state.total_stats = totals
        if files and not self.state.expanded_folders:
            self.state.expanded_folders = collect_all_folders(files)
        self.save()

    # User actions

    def select_branches(self, base: Optional[str] = None, target: Optional[str] = None) -> None:
        if base is not None:
            self.state.base_branch = base
        if target is not None:
            self.state.target_branch = target
        self.save()

        if self.state.base_branch and self.state.target_branch:
            self.load_diff()

    def load_diff(self) -> None:
        fields = {
            "baseBranch": self.state.base_branch,
            "targetBranch": self.state.target_branch,
        }
        self.send(protocol.request(protocol.GET_DIFF, **fields))
        self.send(protocol.request(protocol.GET_COMMIT_HISTORY, **fields))

    def refresh(self) -> None:
        self.send(protocol.request(protocol.REFRESH))
        if self.state.base_branch and self.state.target_branch:
            self.load_diff()

    def click(self, path: str) -> None:
        """Toggle a folder, or request the comparison view for a file."""
        node = find_node(self.file_tree(), path)
        if node is None:
            logger.debug("No tree entry for %s", path)
            return

        if node.is_folder:
            self.toggle_folder(node.path)
            return

        self.send(
            protocol.request(
                protocol.OPEN_DIFF,
                baseBranch=self.state.base_branch,
                targetBranch=self.state.target_branch,
                filePath=node.path,
            )
        )

    def toggle_folder(self, path: str) -> bool:
        """Flip a folder's expansion; returns whether it is now expanded."""
        expanded = path not in self.state.expanded_folders
        if expanded:
            self.state.expanded_folders.add(path)
        else:
            self.state.expanded_folders.discard(path)
        self.save()
        return expanded

    def open_file(self, path: str) -> bool:
        """Ask the host to open ``path`` at the target branch.

        Deleted files have nothing to open and are refused.
        """
        node = find_node(self.file_tree(), path, is_folder=False)
        if node is None or node.is_folder or node.file.status == FileStatus.DELETED:
            return False
        self.send(
            protocol.request(
                protocol.OPEN_FILE,
                filePath=node.path,
                targetBranch=self.state.target_branch,
            )
        )
        return True

    # Views

    def file_tree(self) -> List[FileTreeNode]:
        return build_file_tree(self.state.diff_files)

    def search_commits(self, query: str) -> List[Commit]:
        if not query:
            return list(self.state.commits)
        return [commit for commit in self.state.commits if commit.matches(query)]
