"""FastAPI application exposing backlink lookup and redirects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from linkredirect.config import AppConfig
from linkredirect.models import Document, RedirectOutcome
from linkredirect.redirect.service import Redirector, format_summary
from linkredirect.vault.filesystem import FilesystemVault
from linkredirect.vault.links import VaultLinkIndex

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="linkredirect", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class RedirectPayload(BaseModel):
    source: str
    target: str
    vault: Path | None = None
    dry_run: bool = False


def _build_config(vault: Path | None, *, dry_run: bool = False) -> AppConfig:
    if vault is None:
        vault = getattr(app.state, "vault_path", None)
    return AppConfig(
        vault_path=vault if vault is not None else AppConfig().vault_path,
        dry_run=dry_run,
    )


def _resolve_vault_path(vault: Path | None) -> Path:
    return _build_config(vault).resolve_vault_path(Path.cwd())


def _open_vault(config: AppConfig) -> FilesystemVault:
    resolved = config.resolve_vault_path(Path.cwd())
    try:
        return FilesystemVault(resolved, extensions=config.extensions)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Vault not found at {resolved}")


def _find_note(store: FilesystemVault, name: str) -> Document:
    document = store.find(name)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Note not found: {name}")
    return document


def _describe(document: Document) -> dict[str, str]:
    return {"path": document.path, "name": document.basename}


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/documents")
async def list_documents(vault: Path | None = None) -> dict[str, List[dict[str, str]]]:
    """List every note in the vault."""
    store = _open_vault(_build_config(vault))
    return {"documents": [_describe(doc) for doc in store.list_all_documents()]}


@app.get("/backlinks")
async def list_backlinks(note: str, vault: Path | None = None) -> dict[str, Any]:
    store = _open_vault(_build_config(vault))
    document = _find_note(store, note)
    found = Redirector(store, VaultLinkIndex(store)).find_backlinks(document)
    return {"note": _describe(document), "backlinks": [_describe(doc) for doc in found]}


@app.post("/redirect")
async def redirect_links(payload: RedirectPayload) -> dict[str, Any]:
    config = _build_config(payload.vault, dry_run=payload.dry_run)
    store = _open_vault(config)
    source = _find_note(store, payload.source)
    target = _find_note(store, payload.target)

    redirector = Redirector(store, VaultLinkIndex(store), dry_run=config.dry_run)
    summary = redirector.redirect(source, target)
    if summary.outcome is RedirectOutcome.SAME_DOCUMENT:
        raise HTTPException(status_code=400, detail=format_summary(summary))

    LOGGER.info("Redirect %s -> %s: %s", source.path, target.path, summary.outcome.value)
    return {
        "outcome": summary.outcome.value,
        "modified": summary.modified,
        "message": format_summary(summary),
        "dry_run": config.dry_run,
        "documents": [doc.path for doc in summary.result.modified_documents],
        "failures": [
            {"path": failure.document.path, "stage": failure.stage, "error": failure.error}
            for failure in summary.result.failures
        ],
    }
