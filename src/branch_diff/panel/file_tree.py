"""Hierarchical view of a flat list of changed files."""

from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from pydantic import BaseModel

from branch_diff.models import ChangedFile

SEPARATOR = "/"


class FileTreeNode(BaseModel):
    """A folder or file in the changes tree."""

    name: str
    path: str
    is_folder: bool
    file: Optional[ChangedFile] = None
    children: List["FileTreeNode"] = []


FileTreeNode.model_rebuild()


def _sort_key(node: FileTreeNode) -> Tuple[bool, str]:
    return (not node.is_folder, node.name)


def _new_level() -> Dict[str, dict]:
    return {"folders": {}, "files": {}}


def _to_nodes(level: Dict[str, dict], parent: str) -> List[FileTreeNode]:
    nodes = []
    for name, children in level["folders"].items():
        path = f"{parent}{SEPARATOR}{name}" if parent else name
        nodes.append(
            FileTreeNode(
                name=name,
                path=path,
                is_folder=True,
                children=_to_nodes(children, path),
            )
        )
    for name, changed in level["files"].items():
        nodes.append(
            FileTreeNode(name=name, path=changed.path, is_folder=False, file=changed)
        )
    return sorted(nodes, key=_sort_key)


def build_file_tree(files: Iterable[ChangedFile]) -> List[FileTreeNode]:
    """Split each path on ``/`` and nest it; folders sort before files.

    A file and a folder may share a name when a file was replaced by a
    directory between the two revisions; both are kept.
    """
    root = _new_level()

    for changed in files:
        parts = [part for part in changed.path.split(SEPARATOR) if part]
        if not parts:
            continue
        level = root
        for folder in parts[:-1]:
            level = level["folders"].setdefault(folder, _new_level())
        level["files"][parts[-1]] = changed

    return _to_nodes(root, "")


def collect_all_folders(files: Iterable[ChangedFile]) -> Set[str]:
    """Every ancestor folder path of every file."""
    folders: Set[str] = set()
    for changed in files:
        parts = changed.path.split(SEPARATOR)
        current = ""
        for part in parts[:-1]:
            current = f"{current}{SEPARATOR}{part}" if current else part
            folders.add(current)
    return folders


def find_node(
    nodes: List[FileTreeNode], path: str, is_folder: Optional[bool] = None
) -> Optional[FileTreeNode]:
    """Find the node at ``path``; folders win unless ``is_folder`` says otherwise."""
    for node in nodes:
        if node.path == path and is_folder in (None, node.is_folder):
            return node
        if node.is_folder and path.startswith(node.path + SEPARATOR):
            found = find_node(node.children, path, is_folder)
            if found is not None:
                return found
    return None


def iter_visible(
    nodes: List[FileTreeNode], expanded: Set[str], depth: int = 0
) -> Iterator[Tuple[int, FileTreeNode]]:
    """Yield ``(depth, node)`` for rows shown given the expanded folders."""
    for node in nodes:
        yield depth, node
        if node.is_folder and node.path in expanded:
            yield from iter_visible(node.children, expanded, depth + 1)
