"""Editor host capabilities used to open comparison and file views."""

import difflib
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax

from branch_diff.core.git_service import GitService
from branch_diff.panel.protocol import RevisionDocument


class HostCapabilities(ABC):
    """What the surrounding editor must provide to the panel."""

    @abstractmethod
    def show_comparison(
        self, left: RevisionDocument, right: RevisionDocument, title: str
    ) -> None:
        """Open a side-by-side comparison of two revisions of a file."""

    @abstractmethod
    def open_text_at(self, path: str, revision: str) -> None:
        """Open ``path`` as it exists at ``revision``."""

    @abstractmethod
    def show_error(self, message: str) -> None:
        """Tell the user something went wrong."""


class ConsoleHost(HostCapabilities):
    """Terminal host: comparisons as unified diffs, files as highlighted text."""

    def __init__(self, service: GitService, console: Optional[Console] = None):
        self.service = service
        self.console = console or Console()

    def show_comparison(
        self, left: RevisionDocument, right: RevisionDocument, title: str
    ) -> None:
        left_content = self.service.file_content_at(left.revision, left.path)
        right_content = self.service.file_content_at(right.revision, right.path)

        diff_text = "\n".join(
            difflib.unified_diff(
                left_content.splitlines(),
                right_content.splitlines(),
                fromfile=f"{left.revision}/{left.path}",
                tofile=f"{right.revision}/{right.path}",
                lineterm="",
            )
        )
        if not diff_text:
            self.console.print(f"[yellow]{escape(title)}: no differences[/yellow]")
            return

        syntax = Syntax(diff_text, "diff", theme="monokai", word_wrap=True)
        self.console.print(Panel(syntax, title=escape(title), border_style="blue", padding=(0, 1)))

    def open_text_at(self, path: str, revision: str) -> None:
        content = self.service.file_content_at(revision, path)
        syntax = Syntax(
            content,
            self.service.language_for_path(path),
            theme="monokai",
            line_numbers=True,
            word_wrap=True,
        )
        self.console.print(Panel(syntax, title=escape(f"{path} @ {revision}"), border_style="green"))

    def show_error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")
