"""CLI entry point for gitdata."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, TypeVar

import structlog
import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from gitdata.config import GitDataConfig, load_config
from gitdata.config.loader import DEFAULT_CONFIG_TEMPLATE
from gitdata.errors import GitDataError
from gitdata.objects import MODE_FILE, Commit, Reference, Sha, Tree, TreeEntry, decode
from gitdata.remote import GitDataStore, create_store, resolve_token

T = TypeVar("T")

app = typer.Typer(
    name="gitdata",
    help="Read and write git blobs, trees, commits and refs over the git data API.",
)

blob_app = typer.Typer(help="Read and write blobs.")
app.add_typer(blob_app, name="blob")

tree_app = typer.Typer(help="Read and write trees.")
app.add_typer(tree_app, name="tree")

commit_app = typer.Typer(help="Read commits.")
app.add_typer(commit_app, name="commit")

ref_app = typer.Typer(help="Inspect and move references.")
app.add_typer(ref_app, name="ref")

config_app = typer.Typer(help="Manage gitdata configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: GitDataConfig | None = None

TokenOption = Annotated[
    str | None, typer.Option("--token", "-t", help="Access token (defaults to api.token_env)")
]

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Fixed objects in a public repository, used by `gitdata demo`
DEMO_OWNER = "fpco"
DEMO_REPO = "gitlib"
DEMO_BLOB_SHA = "3340a84bddc2c1a945b4e1ad232f4e1d0ae2a2dc"
DEMO_TREE_SHA = "d2ce27a394f9fa8ce5a83fb52405a2701feeadd3"
DEMO_COMMIT_SHA = "a3f4494be204612f7bd526d65cd8db587e32c46d"


def _configure_logging(cfg: GitDataConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
                foreign_pre_chain=[
                    structlog.stdlib.add_logger_name,
                    structlog.stdlib.add_log_level,
                    structlog.processors.TimeStamper(fmt="iso"),
                ],
            )
        )
    else:
        # stderr, so `blob read` output on stdout stays clean
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _get_config() -> GitDataConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to gitdata.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _validate_repo_id(repo_id: str) -> tuple[str, str]:
    """Validate and split a repo identifier into (owner, repo_name).

    Raises ValueError if format is invalid.
    """
    parts = repo_id.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid repo identifier '{repo_id}': expected 'owner/repo'")
    return parts[0], parts[1]


def _read_token(explicit: str | None) -> str | None:
    """Token for read commands: optional, so a missing one is not an error."""
    return explicit or os.environ.get(_get_config().api.token_env) or None


def _write_token(explicit: str | None) -> str:
    try:
        return resolve_token(_get_config().api, explicit)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _run(action: Callable[[GitDataStore], Awaitable[T]]) -> T:
    """Run ``action`` against a fresh store, turning failures into exit code 1."""

    async def _main() -> T:
        async with create_store(_get_config().api) as store:
            return await action(store)

    try:
        return asyncio.run(_main())
    except (GitDataError, ValueError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _require(value: T | None, what: str) -> T:
    if value is None:
        rprint(f"[red]Error:[/red] {what} not found or could not be decoded")
        raise typer.Exit(1)
    return value


def _repo(repo: str) -> tuple[str, str]:
    try:
        return _validate_repo_id(repo)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _display_tree(tree: Tree) -> None:
    table = Table(title=f"Tree {tree.sha or '(unsaved)'} ({len(tree.tree)} entries)")
    table.add_column("Mode", style="dim")
    table.add_column("Type")
    table.add_column("Sha", style="yellow")
    table.add_column("Size", justify="right")
    table.add_column("Path", style="cyan")
    for e in tree.tree:
        table.add_row(e.mode, e.type, e.sha, "-" if e.size < 0 else str(e.size), e.path)
    rprint(table)


def _display_commit(commit: Commit) -> None:
    committer = commit.committer or commit.author
    parents = ", ".join(commit.parent_shas) or "(root commit)"
    panel_text = (
        f"[dim]Tree:[/dim]      {commit.tree_sha}\n"
        f"[dim]Parents:[/dim]   {parents}\n"
        f"[dim]Author:[/dim]    {commit.author.name} <{commit.author.email}> {commit.author.date}\n"
        f"[dim]Committer:[/dim] {committer.name} <{committer.email}> {committer.date}\n\n"
        f"{escape(commit.message)}"
    )
    rprint(Panel(panel_text, title=f"Commit {commit.sha}", border_style="blue"))


def _display_refs(refs: list[Reference]) -> None:
    table = Table(title=f"References ({len(refs)})")
    table.add_column("Ref", style="cyan")
    table.add_column("Type")
    table.add_column("Sha", style="yellow")
    for r in refs:
        table.add_row(r.ref, r.object.type, r.object.sha)
    rprint(table)


# ── blob ─────────────────────────────────────────────────────────────


@blob_app.command("read")
def blob_read(
    repo: str = typer.Argument(..., help="owner/repo"),
    sha: str = typer.Argument(..., help="Blob sha"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write content to file"),
    token: TokenOption = None,
) -> None:
    """Fetch a blob and write its decoded content."""
    owner, name = _repo(repo)
    tok = _read_token(token)
    data = _run(lambda store: store.read_blob(owner, name, sha, token=tok))
    if out is not None:
        out.write_bytes(data)
        rprint(f"[green]Wrote[/green] {len(data)} bytes to {out}")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


@blob_app.command("write")
def blob_write(
    repo: str = typer.Argument(..., help="owner/repo"),
    path: Path = typer.Argument(..., help="File to upload", exists=True, dir_okay=False),
    token: TokenOption = None,
) -> None:
    """Create a blob from a file and print its sha."""
    owner, name = _repo(repo)
    tok = _write_token(token)
    data = path.read_bytes()
    result = _require(_run(lambda store: store.write_blob(tok, owner, name, data)), "blob")
    rprint(result.sha)


# ── tree ─────────────────────────────────────────────────────────────


@tree_app.command("read")
def tree_read(
    repo: str = typer.Argument(..., help="owner/repo"),
    sha: str = typer.Argument(..., help="Tree sha"),
    token: TokenOption = None,
) -> None:
    """Fetch a tree and list its entries."""
    owner, name = _repo(repo)
    tok = _read_token(token)
    tree = _require(_run(lambda store: store.read_tree(owner, name, sha, token=tok)), "tree")
    _display_tree(tree)


@tree_app.command("write")
def tree_write(
    repo: str = typer.Argument(..., help="owner/repo"),
    path: Path = typer.Argument(
        ..., help='JSON file: {"tree": [{"type", "path", "mode", "sha"}, ...]}',
        exists=True, dir_okay=False,
    ),
    token: TokenOption = None,
) -> None:
    """Create a tree from a JSON description and print its sha."""
    owner, name = _repo(repo)
    tok = _write_token(token)
    try:
        raw = json.loads(path.read_text())
        if isinstance(raw, dict):
            raw.setdefault("sha", None)
        tree = decode(Tree, raw)
    except (json.JSONDecodeError, GitDataError) as e:
        rprint(f"[red]Error:[/red] {path}: {escape(str(e))}")
        raise typer.Exit(1)
    created = _require(_run(lambda store: store.write_tree(tok, owner, name, tree)), "tree")
    rprint(created.sha)


# ── commit ───────────────────────────────────────────────────────────


@commit_app.command("read")
def commit_read(
    repo: str = typer.Argument(..., help="owner/repo"),
    sha: str = typer.Argument(..., help="Commit sha"),
    token: TokenOption = None,
) -> None:
    """Fetch a commit and show its metadata."""
    owner, name = _repo(repo)
    tok = _read_token(token)
    commit = _require(
        _run(lambda store: store.read_commit(owner, name, sha, token=tok)), "commit"
    )
    _display_commit(commit)


# ── ref ──────────────────────────────────────────────────────────────


@ref_app.command("get")
def ref_get(
    repo: str = typer.Argument(..., help="owner/repo"),
    ref: str = typer.Argument(..., help="Fully-qualified ref, e.g. refs/heads/main"),
    token: TokenOption = None,
) -> None:
    """Show where a reference points."""
    owner, name = _repo(repo)
    tok = _read_token(token)
    reference = _require(
        _run(lambda store: store.get_ref(owner, name, ref, token=tok)), "reference"
    )
    _display_refs([reference])


@ref_app.command("list")
def ref_list(
    repo: str = typer.Argument(..., help="owner/repo"),
    namespace: str = typer.Argument("refs", help="Namespace, e.g. refs/heads"),
    token: TokenOption = None,
) -> None:
    """List references under a namespace."""
    owner, name = _repo(repo)
    tok = _read_token(token)
    refs = _require(
        _run(lambda store: store.get_all_refs(owner, name, namespace, token=tok)),
        "references",
    )
    _display_refs(refs)


@ref_app.command("update")
def ref_update(
    repo: str = typer.Argument(..., help="owner/repo"),
    ref: str = typer.Argument(..., help="Fully-qualified ref, e.g. refs/heads/main"),
    sha: str = typer.Argument(..., help="New target sha"),
    token: TokenOption = None,
) -> None:
    """Force-move a reference to a new sha."""
    owner, name = _repo(repo)
    tok = _write_token(token)
    reference = _require(
        _run(lambda store: store.update_ref(tok, owner, name, ref, Sha(sha=sha))),
        "reference",
    )
    rprint(f"[yellow]Forced[/yellow] {reference.ref} -> {reference.object.sha}")


@ref_app.command("delete")
def ref_delete(
    repo: str = typer.Argument(..., help="owner/repo"),
    ref: str = typer.Argument(..., help="Fully-qualified ref"),
    token: TokenOption = None,
) -> None:
    """Delete a reference (unsupported)."""
    owner, name = _repo(repo)
    tok = _write_token(token)
    _run(lambda store: store.delete_ref(tok, owner, name, ref))


# ── demo ─────────────────────────────────────────────────────────────


@app.command()
def demo(token: str = typer.Argument(..., help="Access token used for the write calls")) -> None:
    """Exercise blob, tree and commit calls against a fixed public repository."""

    def _show(label: str, value: object) -> None:
        rprint(f"[bold]{label}[/bold] {escape(repr(value))}")

    async def _demo(store: GitDataStore) -> None:
        try:
            _show("read_blob", await store.read_blob(DEMO_OWNER, DEMO_REPO, DEMO_BLOB_SHA))
        except GitDataError as e:
            rprint(f"[bold]read_blob[/bold] [red]{escape(str(e))}[/red]")

        _show("write_blob", await store.write_blob(token, DEMO_OWNER, DEMO_REPO, b"Hello, world!"))
        _show("read_tree", await store.read_tree(DEMO_OWNER, DEMO_REPO, DEMO_TREE_SHA))

        tree = Tree(
            tree=[TreeEntry(type="blob", mode=MODE_FILE, path="sample", sha=DEMO_BLOB_SHA)]
        )
        _show("write_tree", await store.write_tree(token, DEMO_OWNER, DEMO_REPO, tree))
        _show("read_commit", await store.read_commit(DEMO_OWNER, DEMO_REPO, DEMO_COMMIT_SHA))

    _run(_demo)


# ── config ───────────────────────────────────────────────────────────


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default gitdata.yaml in current directory."""
    target = Path("gitdata.yaml")
    if target.exists() and not force:
        rprint("[yellow]gitdata.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
