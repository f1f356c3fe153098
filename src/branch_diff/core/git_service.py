"""Read-only branch comparison queries against a local git repository."""

import logging
from pathlib import Path
from typing import List, Optional, Union

import git
from git import Repo

from branch_diff.core.dates import format_relative_date, parse_git_date
from branch_diff.core.diff_parser import parse_numstat_z
from branch_diff.core.errors import AdapterError, ConfigurationError
from branch_diff.core.languages import language_for_path
from branch_diff.core.message_formatter import DelimitedListFormatter, MessageFormatter
from branch_diff.models import BranchListing, Commit, DiffSummary

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"
# hash, parents, author name, strict ISO author date, subject, body
LOG_FORMAT = "%H%x1f%P%x1f%an%x1f%aI%x1f%s%x1f%b%x1e"
LOG_FIELD_COUNT = 6


def check_revision(revision: str) -> str:
    """Reject revisions git would read as a command line option."""
    if not isinstance(revision, str) or not revision or revision.startswith("-"):
        raise AdapterError(f"Invalid revision: {revision!r}")
    return revision


class GitService:
    """Answers branch, diff, history and file content queries for one repository."""

    def __init__(
        self,
        workspace_root: Union[str, Path, None],
        formatter: Optional[MessageFormatter] = None,
    ):
        if not workspace_root:
            raise ConfigurationError("No workspace folder found")
        self.workspace_root = Path(workspace_root)
        self.formatter = formatter or DelimitedListFormatter()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        """Get the git repository, opening it on first use."""
        if self._repo is None:
            try:
                self._repo = Repo(self.workspace_root)
            except git.exc.NoSuchPathError as e:
                raise ConfigurationError(
                    f"Workspace folder does not exist: {self.workspace_root}"
                ) from e
            except git.exc.InvalidGitRepositoryError as e:
                raise ConfigurationError(
                    f"No git repository found in {self.workspace_root}"
                ) from e
        return self._repo

    def list_branches(self) -> BranchListing:
        """List local branches, remote branches and the checked-out branch."""
        try:
            local = [head.name for head in self.repo.heads]
            remote = [
                ref.name
                for ref in self.repo.references
                if isinstance(ref, git.RemoteReference) and ref.remote_head != "HEAD"
            ]
            if self.repo.head.is_detached:
                current = self.repo.head.commit.hexsha[:7]
            else:
                current = self.repo.active_branch.name
        except (git.exc.GitError, ValueError) as e:
            raise AdapterError(f"Could not list branches: {e}") from e

        return BranchListing(local=local, remote=remote, current=current)

    def diff(self, base: str, target: str) -> DiffSummary:
        """Per-file insertions and deletions between ``base`` and ``target``."""
        check_revision(base)
        check_revision(target)
        try:
            output = self.repo.git.diff("--numstat", "-M", "-z", base, target)
        except git.exc.CommandError as e:
            raise AdapterError(f"Git diff failed: {e}") from e

        summary = parse_numstat_z(output)
        logger.debug(
            "diff %s..%s: %d files (+%d -%d)",
            base,
            target,
            len(summary.files),
            summary.total_additions,
            summary.total_deletions,
        )
        return summary

    def commit_history(
        self, base: str, target: str, include_parents: bool = True
    ) -> List[Commit]:
        """Commits reachable from ``target`` but not ``base``, newest first."""
        check_revision(base)
        check_revision(target)
        if base == target:
            return []

        try:
            output = self.repo.git.log(
                f"{base}..{target}", f"--format={LOG_FORMAT}"
            )
        except git.exc.CommandError as e:
            raise AdapterError(f"Git log failed: {e}") from e

        commits = [
            self._parse_log_record(record, include_parents)
            for record in output.split(RECORD_SEPARATOR)
            if record.strip()
        ]
        logger.debug("log %s..%s: %d commits", base, target, len(commits))
        return commits

    def file_content_at(self, revision: str, path: str) -> str:
        """Full text of ``path`` at ``revision``; empty if it did not exist there."""
        check_revision(revision)
        try:
            return self.repo.git.show(
                f"{revision}:{path}", strip_newline_in_stdout=False
            )
        except git.exc.CommandError:
            logger.debug("%s not found at %s", path, revision)
            return ""

    def language_for_path(self, path: str) -> str:
        return language_for_path(path)

    def _parse_log_record(self, record: str, include_parents: bool) -> Commit:
        fields = record.lstrip("\n").split(FIELD_SEPARATOR)
        if len(fields) != LOG_FIELD_COUNT:
            raise AdapterError(f"Unexpected git log record: {record!r}")

        commit_hash, parents, author, date, subject, body = fields
        try:
            when = parse_git_date(date)
        except ValueError as e:
            raise AdapterError(f"Unexpected commit date {date!r}") from e

        return Commit(
            hash=commit_hash,
            message=self.formatter.format(subject, body),
            author=author,
            date=format_relative_date(when),
            parents=parents.split() if include_parents else [],
        )
