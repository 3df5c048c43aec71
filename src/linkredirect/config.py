"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

VAULT_ENV_VAR = "LINKREDIRECT_VAULT"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md",)


def _get_default_vault_path() -> Path:
    """Get the default vault path from the environment or the working directory."""
    env_vault = os.environ.get(VAULT_ENV_VAR)
    if env_vault:
        return Path(env_vault).expanduser()
    return Path(".")


@dataclass(slots=True)
class AppConfig:
    vault_path: Path | None = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.vault_path is None:
            self.vault_path = _get_default_vault_path()

    def resolve_vault_path(self, base_dir: Path | None = None) -> Path:
        if self.vault_path is None:
            self.vault_path = _get_default_vault_path()
        if Path(self.vault_path).is_absolute() or base_dir is None:
            return Path(self.vault_path)
        return base_dir / self.vault_path
