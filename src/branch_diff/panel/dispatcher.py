"""Routes panel requests to the git service and produces responses."""

import logging
from pathlib import PurePosixPath
from typing import Callable, Optional

from branch_diff.core.errors import BranchDiffError
from branch_diff.core.git_service import GitService
from branch_diff.panel import protocol
from branch_diff.panel.host import HostCapabilities
from branch_diff.panel.protocol import Message, RevisionDocument

logger = logging.getLogger(__name__)

NO_WORKSPACE_MESSAGE = "No workspace folder found"


def comparison_title(file_path: str, base: str, target: str) -> str:
    return f"{PurePosixPath(file_path).name} ({base} ↔ {target})"


class MessageDispatcher:
    """Stateless request to response mapping.

    Each request produces at most one response, returned from :meth:`handle`
    and also handed to ``post`` when one is given. Failures become ``error``
    responses; nothing is retried.
    """

    def __init__(
        self,
        service: Optional[GitService],
        host: Optional[HostCapabilities] = None,
        post: Optional[Callable[[Message], None]] = None,
    ):
        self.service = service
        self.host = host
        self.post = post
        self._workspace_error_reported = False
        self._handlers = {
            protocol.GET_BRANCHES: self._send_branches,
            protocol.GET_DIFF: self._send_diff,
            protocol.GET_COMMIT_HISTORY: self._send_commit_history,
            protocol.OPEN_DIFF: self._open_diff,
            protocol.OPEN_FILE: self._open_file,
            protocol.REFRESH: self._send_branches,
        }

    def handle(self, message: Message) -> Optional[Message]:
        command = message.get("command") if isinstance(message, dict) else None
        handler = self._handlers.get(command) if isinstance(command, str) else None
        if handler is None:
            logger.debug("Ignoring unknown message: %r", message)
            return None

        if self.service is None:
            return self._report_missing_workspace()

        response = handler(message)
        if response is not None and self.post is not None:
            self.post(response)
        return response

    def _report_missing_workspace(self) -> Optional[Message]:
        if self._workspace_error_reported:
            return None
        self._workspace_error_reported = True
        logger.error(NO_WORKSPACE_MESSAGE)
        response = protocol.error_response(NO_WORKSPACE_MESSAGE)
        if self.post is not None:
            self.post(response)
        return response

    def _send_branches(self, message: Message) -> Message:
        try:
            return protocol.branches_response(self.service.list_branches())
        except BranchDiffError as e:
            logger.warning("Failed to get branches: %s", e)
            return protocol.error_response(f"Failed to get branches: {e}")

    def _send_diff(self, message: Message) -> Message:
        try:
            base, target = message["baseBranch"], message["targetBranch"]
            return protocol.diff_response(self.service.diff(base, target))
        except (BranchDiffError, KeyError) as e:
            logger.warning("Failed to get diff: %s", e)
            return protocol.error_response(f"Failed to get diff: {e}")

    def _send_commit_history(self, message: Message) -> Message:
        try:
            base, target = message["baseBranch"], message["targetBranch"]
            commits = self.service.commit_history(base, target)
            return protocol.commits_response(commits)
        except (BranchDiffError, KeyError) as e:
            logger.warning("Failed to get commits: %s", e)
            return protocol.error_response(f"Failed to get commits: {e}")

    def _open_diff(self, message: Message) -> None:
        if self.host is None:
            return
        try:
            base = message["baseBranch"]
            target = message["targetBranch"]
            file_path = message["filePath"]
            root = str(self.service.workspace_root)
            self.host.show_comparison(
                RevisionDocument(root=root, revision=base, path=file_path),
                RevisionDocument(root=root, revision=target, path=file_path),
                comparison_title(file_path, base, target),
            )
        except (BranchDiffError, KeyError) as e:
            logger.warning("Failed to open diff: %s", e)
            self.host.show_error(f"Failed to open diff: {e}")

    def _open_file(self, message: Message) -> None:
        if self.host is None:
            return
        try:
            self.host.open_text_at(message["filePath"], message["targetBranch"])
        except (BranchDiffError, KeyError) as e:
            logger.warning("Failed to open file: %s", e)
            self.host.show_error(f"Failed to open file: {e}")
