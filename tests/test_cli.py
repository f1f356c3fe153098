"""Tests for the branch-diff command line."""

import json

import pytest
from click.testing import CliRunner

from branch_diff.cli.main import main


@pytest.fixture
def runner():
    return CliRunner()


def _invoke(runner, project_path, *args, **kwargs):
    return runner.invoke(main, ["--repo", str(project_path), *args], **kwargs)


def test_branches(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "branches")

    assert result.exit_code == 0
    assert "* feature" in result.output
    assert "main" in result.output


def test_diff_json(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "diff", "main", "feature", "--json")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["totalAdditions"] == 4
    assert data["totalDeletions"] == 3
    statuses = {f["path"]: f["status"] for f in data["files"]}
    assert statuses["docs/manual.txt"] == "renamed"
    assert statuses["old.txt"] == "deleted"


def test_diff_tree(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "diff", "main", "feature")

    assert result.exit_code == 0
    assert "5 Changes" in result.output
    assert "manual.txt" in result.output
    assert "new_module.py" in result.output


def test_diff_unknown_branch_fails(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "diff", "main", "nope")

    assert result.exit_code != 0
    assert "Error:" in result.output


def test_log_search(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "log", "main", "feature", "--search", "RELEASE", "--json")

    assert result.exit_code == 0
    commits = json.loads(result.output)
    assert [c["message"] for c in commits] == ["chore: release\nv1.2.3"]
    assert commits[0]["shortHash"] == commits[0]["hash"][:7]


def test_log_empty_range(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "log", "main", "main")

    assert result.exit_code == 0
    assert "No commits to display" in result.output


def test_show(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "show", "main", "old.txt")

    assert result.exit_code == 0
    assert "obsolete" in result.output


def test_compare(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "compare", "main", "feature", "src/app.py")

    assert result.exit_code == 0
    assert "hello, world" in result.output


def test_panel_persists_state(runner, branch_repo):
    project_path, _ = branch_repo
    state_file = project_path / ".branch-diff" / "state.json"

    result = _invoke(runner, project_path, "panel")
    assert result.exit_code == 0
    assert "Base: main" in result.output
    state = json.loads(state_file.read_text())
    assert state["targetBranch"] == "feature"
    assert state["expandedFolders"] == ["docs", "src"]

    result = _invoke(runner, project_path, "panel", "--toggle", "src")
    assert result.exit_code == 0
    assert json.loads(state_file.read_text())["expandedFolders"] == ["docs"]


def test_panel_refuses_to_open_deleted_file(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "panel", "--open", "old.txt")

    assert result.exit_code == 0
    assert "Cannot open old.txt" in result.output


def test_bridge(runner, branch_repo):
    project_path, _ = branch_repo
    requests = "\n".join(
        [
            json.dumps({"command": "getDiff", "baseBranch": "main", "targetBranch": "feature"}),
            json.dumps({"command": "launchRockets"}),
            "not json",
            json.dumps({"command": "getCommitHistory", "baseBranch": "main", "targetBranch": "main"}),
        ]
    )
    result = _invoke(runner, project_path, "bridge", input=requests + "\n")

    assert result.exit_code == 0
    responses = [
        json.loads(line) for line in result.output.splitlines() if line.startswith('{"command"')
    ]
    assert [r["command"] for r in responses] == ["diff", "commits"]
    assert responses[0]["data"]["totalAdditions"] == 4
    assert responses[1]["data"] == []


def test_missing_repo_aborts(runner):
    result = runner.invoke(main, ["--repo", "/definitely/not/here", "branches"])

    assert result.exit_code != 0
    assert "Error:" in result.output


def test_error_text_with_markup_is_escaped(runner, branch_repo):
    project_path, _ = branch_repo
    result = _invoke(runner, project_path, "diff", "main", "[/bold]nope")

    assert result.exit_code != 0
    assert "Error:" in result.output
    assert "[/bold]nope" in result.output


def test_bridge_ignores_unhashable_command(runner, branch_repo):
    project_path, _ = branch_repo
    requests = "\n".join(
        [
            json.dumps({"command": []}),
            json.dumps({"command": "getBranches"}),
        ]
    )
    result = _invoke(runner, project_path, "bridge", input=requests + "\n")

    assert result.exit_code == 0
    responses = [
        json.loads(line) for line in result.output.splitlines() if line.startswith('{"command"')
    ]
    assert [r["command"] for r in responses] == ["branches"]
