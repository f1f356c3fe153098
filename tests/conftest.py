"""Shared fixtures: a real repository with a ``main`` and a ``feature`` branch."""

import tempfile
from pathlib import Path

import pytest
from git import Repo

APP_BEFORE = "def main():\n    print('hello')\n\n\nif __name__ == '__main__':\n    main()\n"
APP_AFTER = APP_BEFORE.replace("print('hello')", "print('hello, world')")
GUIDE = "Guide\n\nInstall the package.\nRun the command.\nRead the output.\n"


def _commit(repo: Repo, message: str) -> str:
    repo.git.add(A=True)
    repo.git.commit("-m", message)
    return repo.head.commit.hexsha


@pytest.fixture
def branch_repo():
    """Repository whose ``feature`` branch adds, modifies, deletes and renames files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)
        repo = Repo.init(project_path)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")
            config.set_value("commit", "gpgsign", "false")

        (project_path / "README.md").write_text("# Project\n")
        (project_path / "src").mkdir()
        (project_path / "src" / "app.py").write_text(APP_BEFORE)
        (project_path / "docs").mkdir()
        (project_path / "docs" / "guide.txt").write_text(GUIDE)
        (project_path / "old.txt").write_text("obsolete\nfile\n")
        _commit(repo, "Initial commit")
        repo.git.branch("-M", "main")

        repo.git.checkout("-b", "feature")

        repo.git.mv("docs/guide.txt", "docs/manual.txt")
        repo.git.rm("old.txt")
        (project_path / "src" / "new_module.py").write_text("VALUE = 1\nOTHER = 2\n")
        _commit(repo, "Fix bug - Update docs - Add tests")

        (project_path / "CHANGELOG.md").write_text("## 1.2.3\n")
        _commit(repo, "chore: release\n\nv1.2.3")

        (project_path / "src" / "app.py").write_text(APP_AFTER)
        _commit(repo, "Refactor app\n\nLine one\nLine two")

        yield project_path, repo
