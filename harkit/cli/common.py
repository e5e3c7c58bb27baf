"""
Shared CLI helpers: context object, common options and HAR loading.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError

from harkit.core.source_schemas.har import HarEntry
from harkit.core.store import KeyValueStore, open_store
from harkit.services.capture import load_har

logger = logging.getLogger(__name__)


class CLIContext:
    """
    State shared by all commands through ``ctx.obj``.

    The store is opened lazily so commands that don't persist anything
    never touch the data directory.
    """

    def __init__(self, store_path: Optional[Path] = None, ephemeral: bool = False):
        self.store_path = store_path
        self.ephemeral = ephemeral
        self._store: Optional[KeyValueStore] = None

    def get_store(self) -> KeyValueStore:
        if self._store is None:
            self._store = open_store(self.store_path, ephemeral=self.ephemeral)
        return self._store

    def close(self) -> None:
        if self._store is not None and hasattr(self._store, "close"):
            self._store.close()
        self._store = None


har_file_argument = click.argument(
    'har_file', type=click.Path(exists=True, dir_okay=False, path_type=Path)
)

index_option = click.option(
    '--index', '-i',
    type=int,
    default=0,
    show_default=True,
    help='Entry index within the HAR file (negative counts from the end)'
)


def read_entries(har_file: Path) -> List[HarEntry]:
    """Load all entries from ``har_file``, aborting with a message on bad input."""
    try:
        return load_har(har_file).entries
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        click.secho(f"Could not read HAR file {har_file}: {e}", fg='red', err=True)
        raise click.Abort()


def read_entry(har_file: Path, index: int) -> HarEntry:
    entries = read_entries(har_file)
    if not entries:
        click.secho(f"No entries in {har_file}", fg='red', err=True)
        raise click.Abort()
    try:
        return entries[index]
    except IndexError:
        click.secho(
            f"Entry index {index} out of range ({len(entries)} entries)", fg='red', err=True
        )
        raise click.Abort()
