"""Main CLI interface for Branch Diff."""

import json
import sys
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from branch_diff import __version__
from branch_diff.config import BranchDiffConfig, load_config
from branch_diff.core.errors import BranchDiffError
from branch_diff.core.git_service import GitService
from branch_diff.logging_setup import configure_logging
from branch_diff.panel.dispatcher import MessageDispatcher
from branch_diff.panel.file_tree import build_file_tree, collect_all_folders
from branch_diff.panel.host import ConsoleHost
from branch_diff.panel.render import render_commits, render_file_tree
from branch_diff.panel.state import StateStore
from branch_diff.panel.surface import PresentationSurface

console = Console()
err_console = Console(stderr=True)


class AppContext:
    """Lazily resolved configuration and git service for a CLI invocation."""

    def __init__(self, repo: Optional[str]):
        self.repo = repo
        self._config: Optional[BranchDiffConfig] = None
        self._service: Optional[GitService] = None

    @property
    def config(self) -> BranchDiffConfig:
        if self._config is None:
            self._config = load_config(self.repo)
        return self._config

    @property
    def service(self) -> GitService:
        if self._service is None:
            self._service = GitService(self.config.workspace_root)
        return self._service


def _abort(e: Exception):
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    raise click.Abort() from e


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--repo",
    envvar="BRANCH_DIFF_REPO",
    type=click.Path(file_okay=False),
    help="Repository root (defaults to the enclosing git repository)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, repo: Optional[str], verbose: bool):
    """Branch Diff - changed files and commits between two branches."""
    configure_logging(verbose)
    ctx.obj = AppContext(repo)


@main.command()
@click.pass_obj
def branches(app: AppContext):
    """List local and remote branches."""
    try:
        listing = app.service.list_branches()
    except BranchDiffError as e:
        _abort(e)

    for name in listing.local:
        marker = "*" if name == listing.current else " "
        style = "green" if name == listing.current else "white"
        console.print(f"{marker} [{style}]{escape(name)}[/{style}]")
    for name in listing.remote:
        console.print(f"  [red]remotes/{escape(name)}[/red]")


@main.command()
@click.argument("base")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print the diff summary as JSON")
@click.pass_obj
def diff(app: AppContext, base: str, target: str, as_json: bool):
    """Show files changed between BASE and TARGET."""
    try:
        summary = app.service.diff(base, target)
    except BranchDiffError as e:
        _abort(e)

    if as_json:
        click.echo(json.dumps(summary.to_wire(), indent=2))
        return

    console.print(
        render_file_tree(
            build_file_tree(summary.files),
            collect_all_folders(summary.files),
            summary.total_additions,
            summary.total_deletions,
        )
    )


@main.command()
@click.argument("base")
@click.argument("target")
@click.option("--search", "-s", default="", help="Filter by message, author or hash")
@click.option("--json", "as_json", is_flag=True, help="Print commits as JSON")
@click.pass_obj
def log(app: AppContext, base: str, target: str, search: str, as_json: bool):
    """Show commits on TARGET that are not on BASE."""
    try:
        commits = app.service.commit_history(base, target)
    except BranchDiffError as e:
        _abort(e)

    if search:
        commits = [commit for commit in commits if commit.matches(search)]

    if as_json:
        click.echo(json.dumps([c.to_wire() for c in commits], indent=2))
        return

    console.print(render_commits(commits, title=f"{base}..{target}"))


@main.command()
@click.argument("revision")
@click.argument("path")
@click.pass_obj
def show(app: AppContext, revision: str, path: str):
    """Print PATH as it exists at REVISION."""
    try:
        ConsoleHost(app.service, console).open_text_at(path, revision)
    except BranchDiffError as e:
        _abort(e)


@main.command()
@click.argument("base")
@click.argument("target")
@click.argument("path")
@click.pass_obj
def compare(app: AppContext, base: str, target: str, path: str):
    """Show PATH changes between BASE and TARGET."""
    try:
        service = app.service
    except BranchDiffError as e:
        _abort(e)

    dispatcher = MessageDispatcher(service, ConsoleHost(service, console))
    dispatcher.handle(
        {"command": "openDiff", "baseBranch": base, "targetBranch": target, "filePath": path}
    )


@main.command()
@click.option("--base", "-b", help="Base branch")
@click.option("--target", "-t", help="Target branch")
@click.option("--toggle", multiple=True, help="Toggle a folder or open a file's diff")
@click.option("--open", "open_path", help="Open a changed file at the target branch")
@click.option("--search", "-s", default="", help="Filter commits")
@click.option("--refresh", is_flag=True, help="Reload branches and the comparison")
@click.pass_obj
def panel(
    app: AppContext,
    base: Optional[str],
    target: Optional[str],
    toggle: Tuple[str, ...],
    open_path: Optional[str],
    search: str,
    refresh: bool,
):
    """Show the branch comparison panel; its state persists between runs."""
    try:
        config = app.config
        service = app.service
    except BranchDiffError as e:
        _abort(e)

    host = ConsoleHost(service, console)
    surface: PresentationSurface

    dispatcher = MessageDispatcher(service, host, post=lambda m: surface.receive(m))
    surface = PresentationSurface(
        dispatcher.handle,
        StateStore(config.resolved_state_file),
        default_base_branches=config.default_base_branches,
    )

    surface.start()
    if refresh:
        surface.refresh()
    if base is not None or target is not None:
        surface.select_branches(base, target)
    for path in toggle:
        surface.click(path)
    if open_path and not surface.open_file(open_path):
        console.print(f"[yellow]Cannot open {escape(open_path)}[/yellow]")

    state = surface.state
    console.print(
        f"[bold]Base:[/bold] {escape(state.base_branch or '-')}   "
        f"[bold]Target:[/bold] {escape(state.target_branch or '-')}"
    )
    if surface.last_error:
        console.print(f"[red]{escape(surface.last_error)}[/red]")
    console.print(
        render_file_tree(
            surface.file_tree(),
            state.expanded_folders,
            state.total_stats.additions,
            state.total_stats.deletions,
        )
    )
    console.print(render_commits(surface.search_commits(search)))


@main.command()
@click.pass_obj
def bridge(app: AppContext):
    """Answer newline-delimited JSON requests from stdin on stdout."""
    try:
        service: Optional[GitService] = app.service
    except BranchDiffError:
        service = None

    def post(message):
        sys.stdout.write(json.dumps(message, ensure_ascii=False) + "\n")
        sys.stdout.flush()

    host = ConsoleHost(service, err_console) if service is not None else None
    dispatcher = MessageDispatcher(service, host, post=post)

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            err_console.print(f"[red]Ignoring malformed request: {escape(line)}[/red]")
            continue
        dispatcher.handle(message)


if __name__ == "__main__":
    main()
