"""Snapshot file storage.

``SnapshotStore`` does raw line I/O and turns ``OSError`` into
``PersistenceIOError``. ``load_directory`` and ``save_directory`` combine it
with the codec:

* load: a missing file or an unreadable one yields an empty directory;
* save: a full rewrite of the file on every call. It is not atomic, so a
  crash mid-write can leave a truncated snapshot; the decoder's per-record
  recovery is the only safeguard.
"""

from __future__ import annotations

import logging
from pathlib import Path

from trading import codec
from trading.directory import UserDirectory
from trading.errors import PersistenceIOError
from trading.market import StockRegistry

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes the snapshot file at *path*."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read_lines(self) -> list[str] | None:
        """Return the file's lines, or ``None`` if it does not exist."""
        try:
            with self._path.open(encoding="utf-8") as fh:
                return fh.read().splitlines()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceIOError(self._path, str(exc)) from exc

    def write_lines(self, lines: list[str]) -> None:
        """Replace the file contents with *lines*."""
        try:
            with self._path.open("w", encoding="utf-8", newline="\n") as fh:
                for line in lines:
                    fh.write(line)
                    fh.write("\n")
        except OSError as exc:
            raise PersistenceIOError(self._path, str(exc)) from exc


def load_directory(store: SnapshotStore, registry: StockRegistry) -> UserDirectory:
    """Restore the directory from *store*, or start empty."""
    try:
        lines = store.read_lines()
    except PersistenceIOError as exc:
        logger.error("Error loading portfolio data: %s", exc)
        return UserDirectory()

    if lines is None:
        logger.info("No existing portfolio data found at %s.", store.path)
        return UserDirectory()

    directory = codec.decode(lines, registry)
    logger.info("Loaded %d user(s) from %s.", len(directory), store.path)
    return directory


def save_directory(store: SnapshotStore, directory: UserDirectory) -> None:
    """Write the full directory to *store*.

    Raises ``PersistenceIOError``; callers decide whether that is fatal.
    """
    store.write_lines(codec.encode(directory))
    logger.debug("Saved %d user(s) to %s.", len(directory), store.path)
