"""CLI helpers for building services from the click context.

Everything a command needs travels in ``ctx.obj``; tests can pre-populate
``client_factory`` or ``registry`` to replace the real collaborators.
"""

from pathlib import Path

import click

from quickynab.config import Settings, default_config_path, load_settings
from quickynab.domain.csv_import import CSVImportService
from quickynab.domain.dialects import (
    DialectRegistry,
    default_registry,
    fetch_bank2ynab_configs,
    write_snapshot,
)
from quickynab.domain.errors import DomainError
from quickynab.domain.upload import UploadService
from quickynab.logging_setup import get_logger
from quickynab.ynab.factories import create_ynab_client

logger = get_logger(__name__)

USER_DIALECTS_FILE = "bank_dialects.json"


def user_dialects_path(ctx: click.Context) -> Path:
    """Location of the snapshot written by ``update-dialects``."""
    config_path = ctx.obj.get("config_path") or default_config_path()
    return Path(config_path).parent / USER_DIALECTS_FILE


def get_settings(ctx: click.Context) -> Settings:
    if "settings" not in ctx.obj:
        ctx.obj["settings"] = load_settings(ctx.obj.get("config_path"))
    return ctx.obj["settings"]


def _first_run_registry(ctx: click.Context) -> DialectRegistry:
    """Download the full bank2ynab set into the user snapshot.

    Falls back to the bundled snapshot when the download fails.
    """
    path = user_dialects_path(ctx)
    try:
        configs = fetch_bank2ynab_configs()
    except DomainError as e:
        logger.warning("%s; using the bundled bank formats", e)
        return default_registry()

    try:
        write_snapshot(configs, path)
    except OSError as e:
        logger.warning("Could not save bank formats to %s: %s", path, e)
    else:
        logger.info("Saved %d bank formats to %s", len(configs), path)
    return DialectRegistry.from_dict(configs)


def get_registry(ctx: click.Context) -> DialectRegistry:
    """Dialects from ``--dialects``, else the user snapshot.

    Without a user snapshot the full set is fetched once and saved.
    """
    if "registry" not in ctx.obj:
        path = ctx.obj.get("dialects_path")
        if path is not None:
            ctx.obj["registry"] = DialectRegistry.load(path)
        elif user_dialects_path(ctx).exists():
            ctx.obj["registry"] = DialectRegistry.load(user_dialects_path(ctx))
        else:
            ctx.obj["registry"] = _first_run_registry(ctx)
    return ctx.obj["registry"]


def get_import_service(ctx: click.Context) -> CSVImportService:
    return CSVImportService(get_registry(ctx))


def get_upload_service(ctx: click.Context, settings: Settings | None = None) -> UploadService:
    """Build an upload service; raises ConfigError without an access token."""
    settings = settings or get_settings(ctx)
    client_factory = ctx.obj.get("client_factory", create_ynab_client)
    return UploadService(client_factory(settings), settings)
