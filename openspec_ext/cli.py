"""
OpenSpec CLI: The Host

Drives the change-management workflow from a terminal:
  1. openspec-ext run <command> [args...]      (raw host dispatch)
  2. openspec-ext init | proposal | apply | archive | list
                  audit | validate | coverage  (one per command)

Plus utilities:
  - openspec-ext status   (external CLI, API keys, workspace layout)
  - openspec-ext config   (effective configuration as YAML)
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
import yaml
from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from openspec_ext.config_loader import load_config, unknown_fallback_providers, validate_api_keys
from openspec_ext.identity import BANNER, __codename__, __tagline__, __version__
from openspec_ext.router import build_router
from openspec_ext.spec_tool import OpenSpecCLI
from openspec_ext.workspace import Workspace

# Provider API keys may live in a .env next to the workspace or in the home dir
load_dotenv()
load_dotenv(Path.home() / ".openspec" / ".env")

app = typer.Typer(
    name="openspec-ext",
    help=f"{__codename__} — {__tagline__}\nSpec-driven change management.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

WorkspaceOption = typer.Option(Path("."), "--workspace", "-w", help="Workspace root directory")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


def version_callback(value: bool):
    if value:
        console.print(f"{__codename__} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    pass


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _dispatch(command: str, args: list[str], workspace: Path, verbose: bool) -> None:
    _configure_logging(verbose)

    root = workspace.resolve()
    if not root.is_dir():
        console.print(f"[red]Workspace not found: {root}[/]")
        raise typer.Exit(1)

    router = build_router(load_config(root))
    result = router.dispatch(command, args, root)

    if not result.ok:
        console.print(f"[red]{escape(result.text)}[/]", highlight=False)
        raise typer.Exit(1)
    console.print(result.text, highlight=False, markup=False)


@app.command()
def run(
    command: str = typer.Argument(..., help="Command name, e.g. list-changes"),
    args: Optional[List[str]] = typer.Argument(None, help="Positional command arguments"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """Dispatch a raw command name with positional arguments."""
    _dispatch(command, list(args or []), workspace, verbose)


@app.command()
def init(workspace: Path = WorkspaceOption, verbose: bool = VerboseOption):
    """Initialize OpenSpec in the workspace."""
    _dispatch("initialize-workspace", [], workspace, verbose)


@app.command()
def proposal(
    name: str = typer.Argument(..., help="Proposal name (letters, digits, '-', '_')"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """Create a new change proposal."""
    _dispatch("create-proposal", [name], workspace, verbose)


@app.command()
def apply(
    change_id: str = typer.Argument(..., help="Change to generate code for"),
    provider: Optional[str] = typer.Argument(None, help="LLM provider (defaults to configured)"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """Generate code for a change."""
    args = [change_id] + ([provider] if provider else [])
    _dispatch("apply-change", args, workspace, verbose)


@app.command()
def archive(
    change_id: str = typer.Argument(..., help="Change to archive"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """Archive a completed change."""
    _dispatch("archive-change", [change_id], workspace, verbose)


@app.command(name="list")
def list_changes(workspace: Path = WorkspaceOption, verbose: bool = VerboseOption):
    """List active changes."""
    _dispatch("list-changes", [], workspace, verbose)


@app.command()
def audit(
    audit_filter: Optional[str] = typer.Argument(None, metavar="FILTER", help="Audit filter"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """View the code generation audit trail."""
    _dispatch("view-audit", [audit_filter] if audit_filter else [], workspace, verbose)


@app.command()
def validate(
    file_path: str = typer.Argument(..., help="Spec file, relative to the workspace"),
    workspace: Path = WorkspaceOption,
    verbose: bool = VerboseOption,
):
    """Validate the structure of a spec file."""
    _dispatch("validate-file", [file_path], workspace, verbose)


@app.command()
def coverage(workspace: Path = WorkspaceOption, verbose: bool = VerboseOption):
    """Show spec coverage analysis."""
    _dispatch("show-coverage", [], workspace, verbose)


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


@app.command()
def status(workspace: Path = WorkspaceOption):
    """Check OpenSpec configuration and readiness."""
    _print_banner()

    root = workspace.resolve()
    config = load_config(root)

    # External CLI
    tool = OpenSpecCLI()
    version = tool.version(root) if tool.available else None
    if version:
        console.print(f"[green]✓ openspec CLI {version}[/]")
    else:
        console.print("[red]✗ openspec CLI not found[/]")
        console.print("  [dim]npm install -g @fission-ai/openspec@latest[/]")

    # API Keys
    key_table = Table(title="API Keys", border_style="cyan")
    key_table.add_column("Key")
    key_table.add_column("Status")
    for key, available in validate_api_keys(config).items():
        status_str = "[green]✓ Available[/]" if available else "[red]✗ Missing[/]"
        key_table.add_row(key, status_str)
    console.print(key_table)

    # Providers
    provider_table = Table(title="LLM Providers", border_style="magenta")
    provider_table.add_column("Provider")
    provider_table.add_column("Model")
    provider_table.add_column("Max tokens")
    provider_table.add_column("Endpoint")
    for name, provider in sorted(config.llm.providers.items()):
        label = f"{name} [dim](default)[/]" if name == config.llm.default_provider else name
        provider_table.add_row(label, provider.model, f"{provider.max_tokens:,}", provider.endpoint or "-")
    console.print(provider_table)

    console.print(f"\n[bold]Fallback chain:[/] {' → '.join(config.llm.fallback_chain) or '-'}")
    for name in unknown_fallback_providers(config):
        console.print(f"  [yellow]⚠ '{name}' is not a configured provider[/]")

    # Workspace layout
    ws = Workspace(root)
    layout_table = Table(title=f"Workspace {root}", border_style="cyan")
    layout_table.add_column("Path")
    layout_table.add_column("Status")
    for label, path in [
        ("Spec root", ws.spec_root),
        ("Changes", ws.changes_dir),
        ("Audit trail", ws.audit_dir),
    ]:
        found = ws.dir_exists(path)
        s = "[green]✓ present[/]" if found else "[dim]✗ missing[/]"
        layout_table.add_row(f"{label} ({path.relative_to(root)})", s)
    console.print(layout_table)


@app.command()
def config(workspace: Path = WorkspaceOption):
    """Print the effective configuration as YAML."""
    cfg = load_config(workspace.resolve())
    console.print(yaml.safe_dump(cfg.model_dump(), sort_keys=False), highlight=False, markup=False)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _print_banner():
    console.print(f"[bright_green]{BANNER}[/]")
    console.print(f"  [dim]v{__version__} — {__tagline__}[/]\n")


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.add(
            lambda msg: console.print(f"[dim]{escape(str(msg))}[/]", highlight=False),
            level="DEBUG",
            format="{time:HH:mm:ss} | {level:<7} | {message}",
        )
    else:
        logger.add(
            lambda msg: console.print(f"[dim]{escape(str(msg))}[/]", highlight=False),
            level="WARNING",
            format="{message}",
        )


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
