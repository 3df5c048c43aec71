"""Command line interface for linkredirect."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linkredirect.config import AppConfig
from linkredirect.console import ConsoleNotifier, ConsolePicker
from linkredirect.models import Document, RedirectOutcome
from linkredirect.redirect.service import Redirector, format_summary
from linkredirect.vault.filesystem import FilesystemVault
from linkredirect.vault.links import VaultLinkIndex
from linkredirect.vault.protocols import Notifier, Picker
from linkredirect.web.app import app as web_app


console = Console()
app = typer.Typer(help="linkredirect - point incoming links of a note at another note")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(vault: Optional[Path], *, dry_run: bool = False) -> AppConfig:
    return AppConfig(
        vault_path=vault if vault is not None else AppConfig().vault_path,
        dry_run=dry_run,
    )


def _open_vault(config: AppConfig) -> FilesystemVault:
    resolved = config.resolve_vault_path(Path.cwd())
    try:
        return FilesystemVault(resolved, extensions=config.extensions)
    except FileNotFoundError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _find_note(store: FilesystemVault, name: str) -> Document:
    document = store.find(name)
    if document is None:
        raise typer.BadParameter(f"Note not found: {name}")
    return document


@app.command()
def redirect(
    source: str = typer.Argument(..., help="Note whose incoming links should move."),
    target: Optional[str] = typer.Argument(None, help="Note to point the links at; prompts when omitted."),
    vault: Path = typer.Option(None, "--vault", help="Vault directory"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Redirect every link to SOURCE so it points at TARGET."""
    _setup_logging(verbose)
    notifier: Notifier = ConsoleNotifier(console)
    config = _build_config(vault, dry_run=dry_run)
    store = _open_vault(config)
    source_doc = _find_note(store, source)

    index = VaultLinkIndex(store)
    redirector = Redirector(store, index, dry_run=config.dry_run)
    backlinks = redirector.find_backlinks(source_doc)
    if not backlinks:
        notifier.info("No incoming links found for this note")
        return

    if target is None:
        picker: Picker = ConsolePicker(console)
        target_doc = picker.choose(store.list_all_documents())
        if target_doc is None:
            notifier.info("No target selected.")
            return
    else:
        target_doc = _find_note(store, target)

    summary = redirector.redirect(source_doc, target_doc, backlinks)
    message = format_summary(summary)
    if config.dry_run and summary.outcome is RedirectOutcome.REDIRECTED:
        message = f"(dry run) {message}"

    if summary.outcome is RedirectOutcome.REDIRECTED:
        notifier.success(message)
    elif summary.outcome is RedirectOutcome.SAME_DOCUMENT:
        notifier.error(message)
    else:
        notifier.info(message)

    failures = summary.result.failures
    if failures:
        table = Table(show_header=True, header_style="bold red")
        table.add_column("Note")
        table.add_column("Stage")
        table.add_column("Error")
        for failure in failures:
            table.add_row(escape(failure.document.path), failure.stage, escape(failure.error))
        console.print(table)


@app.command()
def backlinks(
    note: str = typer.Argument(..., help="Note to inspect"),
    vault: Path = typer.Option(None, "--vault", help="Vault directory"),
) -> None:
    """List notes that link to NOTE."""
    store = _open_vault(_build_config(vault))
    document = _find_note(store, note)
    index = VaultLinkIndex(store)
    found = Redirector(store, index).find_backlinks(document)
    if not found:
        console.print("[yellow]No incoming links found.[/yellow]")
        return

    links = index.references_of()
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Note")
    table.add_column("Path")
    table.add_column("Links")
    for source in found:
        count = links.get(source.path, {}).get(document.path, 0)
        table.add_row(escape(source.basename), escape(source.path), str(count))
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    vault: Path = typer.Option(None, "--vault", help="Vault directory"),
) -> None:
    """Start the JSON API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    store = _open_vault(_build_config(vault))
    web_app.state.vault_path = store.root

    console.print(f"Starting API on http://{host}:{port} (vault: {escape(str(store.root))})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
