"""Rich renderables for the changes tree and commit list."""

from typing import List, Set

from rich.console import Group
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from branch_diff.models import Commit, FileStatus
from branch_diff.panel.file_tree import FileTreeNode

STATUS_LETTERS = {
    FileStatus.ADDED: ("A", "green"),
    FileStatus.MODIFIED: ("M", "yellow"),
    FileStatus.DELETED: ("D", "red"),
    FileStatus.RENAMED: ("R", "blue"),
}

NO_CHANGES = "No changes between branches"
NO_COMMITS = "No commits to display"


def changes_header(file_count: int, additions: int, deletions: int) -> Text:
    header = Text(f"{file_count} Changes ", style="bold")
    header.append(f"+{additions}", style="green")
    header.append(" ")
    header.append(f"-{deletions}", style="red")
    return header


def file_label(node: FileTreeNode) -> Text:
    letter, style = STATUS_LETTERS.get(node.file.status, ("•", "white"))
    label = Text(f"{letter} ", style=f"bold {style}")
    label.append(node.name)
    if node.file.additions > 0:
        label.append(f" +{node.file.additions}", style="green")
    if node.file.deletions > 0:
        label.append(f" -{node.file.deletions}", style="red")
    return label


def _add_nodes(parent: Tree, nodes: List[FileTreeNode], expanded: Set[str]) -> None:
    for node in nodes:
        if node.is_folder:
            is_open = node.path in expanded
            marker = "▼" if is_open else "▶"
            branch = parent.add(Text(f"{marker} {node.name}", style="bold cyan"))
            if is_open:
                _add_nodes(branch, node.children, expanded)
        else:
            parent.add(file_label(node))


def render_file_tree(
    nodes: List[FileTreeNode], expanded: Set[str], additions: int, deletions: int
):
    file_count = _count_files(nodes)
    header = changes_header(file_count, additions, deletions)
    if not nodes:
        return Group(header, Text(NO_CHANGES, style="dim"))

    tree = Tree(header, guide_style="dim")
    _add_nodes(tree, nodes, expanded)
    return tree


def _count_files(nodes: List[FileTreeNode]) -> int:
    return sum(_count_files(n.children) if n.is_folder else 1 for n in nodes)


def render_commits(commits: List[Commit], title: str = "Commits"):
    if not commits:
        return Text(NO_COMMITS, style="dim")

    table = Table(title=Text(title, style="table.title"))
    table.add_column("Hash", style="cyan", no_wrap=True)
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Author", style="green")
    table.add_column("Message")

    for commit in commits:
        table.add_row(
            Text(commit.short_hash),
            Text(commit.date),
            Text(commit.author),
            Text(commit.message),
        )
    return table
