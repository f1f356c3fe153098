"""Map file extensions to syntax highlighting names."""

from pathlib import PurePosixPath

LANGUAGE_BY_EXTENSION = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".vue": "html",
    ".json": "json",
    ".html": "html",
    ".css": "css",
    ".less": "less",
    ".scss": "scss",
    ".md": "markdown",
    ".py": "python",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".sh": "bash",
}

DEFAULT_LANGUAGE = "text"


def language_for_path(path: str) -> str:
    suffix = PurePosixPath(path).suffix.lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, DEFAULT_LANGUAGE)
