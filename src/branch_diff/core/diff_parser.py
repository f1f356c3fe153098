"""Parsing of ``git diff --numstat`` output into diff summaries."""

import re
from typing import List, Tuple

from branch_diff.core.errors import AdapterError
from branch_diff.models.change import ChangedFile, DiffSummary, FileStatus

RENAME_ARROW = " => "
_BRACKETED_RENAME = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


def has_rename_notation(raw_path: str) -> bool:
    return RENAME_ARROW in raw_path


def resolve_rename(raw_path: str) -> Tuple[str, bool]:
    """Return the post-rename path and whether ``raw_path`` used rename notation.

    ``src/{old => new}/mod.py`` becomes ``src/new/mod.py``; ``a.txt => b.txt``
    (no common prefix) becomes ``b.txt``.
    """
    if not has_rename_notation(raw_path):
        return raw_path, False

    if _BRACKETED_RENAME.search(raw_path):
        path = _BRACKETED_RENAME.sub(lambda m: m.group(2), raw_path)
        # "{old => }/x" leaves an empty segment behind
        path = re.sub(r"/{2,}", "/", path).strip("/")
        return path, True

    return raw_path.split(RENAME_ARROW, 1)[1], True


def classify(raw_path: str, additions: int, deletions: int) -> FileStatus:
    """Infer the change status; rename notation wins over line counts."""
    return status_for(additions, deletions, has_rename_notation(raw_path))


def status_for(additions: int, deletions: int, renamed: bool) -> FileStatus:
    if renamed:
        return FileStatus.RENAMED
    if additions > 0 and deletions == 0:
        return FileStatus.ADDED
    if deletions > 0 and additions == 0:
        return FileStatus.DELETED
    return FileStatus.MODIFIED


def _parse_count(value: str, line: str) -> int:
    if value == "-":  # binary file
        return 0
    try:
        count = int(value)
    except ValueError:
        raise AdapterError(f"Unexpected diff stat line: {line!r}")
    if count < 0:
        raise AdapterError(f"Unexpected diff stat line: {line!r}")
    return count


def parse_numstat_line(line: str) -> ChangedFile:
    parts = line.split("\t", 2)
    if len(parts) != 3 or not parts[2]:
        raise AdapterError(f"Unexpected diff stat line: {line!r}")

    additions = _parse_count(parts[0], line)
    deletions = _parse_count(parts[1], line)
    raw_path = parts[2]
    path, _ = resolve_rename(raw_path)

    return ChangedFile(
        path=path,
        additions=additions,
        deletions=deletions,
        status=classify(raw_path, additions, deletions),
    )


def parse_numstat(output: str) -> DiffSummary:
    """Parse ``git diff --numstat`` output, one file per non-blank line."""
    files: List[ChangedFile] = [
        parse_numstat_line(line) for line in output.splitlines() if line.strip()
    ]
    return DiffSummary.from_files(files)


def _parse_counts(record: str) -> Tuple[int, int, str]:
    parts = record.split("\t", 2)
    if len(parts) != 3:
        raise AdapterError(f"Unexpected diff stat record: {record!r}")
    return _parse_count(parts[0], record), _parse_count(parts[1], record), parts[2]


def parse_numstat_z(output: str) -> DiffSummary:
    """Parse ``git diff --numstat -z`` output.

    Paths come through unquoted. A record with an empty path field is a
    rename and is followed by the old and the new path as separate fields.
    """
    fields = output.split("\0")
    files: List[ChangedFile] = []
    index = 0

    while index < len(fields):
        record = fields[index].lstrip("\n")
        index += 1
        if not record:
            continue

        additions, deletions, path = _parse_counts(record)
        renamed = not path
        if renamed:
            if index + 1 >= len(fields) or not fields[index + 1]:
                raise AdapterError(f"Truncated rename record: {record!r}")
            path = fields[index + 1]
            index += 2

        files.append(
            ChangedFile(
                path=path,
                additions=additions,
                deletions=deletions,
                status=status_for(additions, deletions, renamed),
            )
        )

    return DiffSummary.from_files(files)
