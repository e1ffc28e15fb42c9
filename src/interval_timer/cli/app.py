"""Shared Typer app object, shared option types, and store utility."""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config_loader import AppConfig, load_app_config
from ..io.history_store import (
    ConfigurationStore,
    DeletedTemplatesStore,
    IntentionsStore,
    SessionHistoryStore,
)
from ..io.kv_store import KeyValueStore, get_default_store_path
from ..io.settings_store import SettingsStore

# Shared --store-path option type used across all commands
StorePathOption = Annotated[
    Optional[Path],
    typer.Option("--store-path", "-p", help="Path to the JSON data store"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="interval-timer",
    help="Interval workout timer: get ready, work, rest, repeat.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@dataclass
class Stores:
    """Every persisted collection, sharing one key-value file."""

    kv: KeyValueStore
    app_config: AppConfig
    history: SessionHistoryStore
    configs: ConfigurationStore
    deleted_templates: DeletedTemplatesStore
    intentions: IntentionsStore
    settings: SettingsStore


def get_stores(store_path: Path | None) -> Stores:
    """Open the stores at ``store_path`` or the default location."""
    if store_path is None:
        store_path = get_default_store_path()
    kv = KeyValueStore(store_path)
    app_config = load_app_config()
    return Stores(
        kv=kv,
        app_config=app_config,
        history=SessionHistoryStore(kv),
        configs=ConfigurationStore(kv),
        deleted_templates=DeletedTemplatesStore(kv),
        intentions=IntentionsStore(kv),
        settings=SettingsStore(kv, app_config),
    )
