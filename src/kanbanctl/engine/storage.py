# src/kanbanctl/engine/storage.py

"""
Board persistence.

The board lives under a single fixed key of a key-value store. Two
stores are provided:

- MemoryStore: dict-backed, for tests and embedding;
- FileStore: one YAML file per key inside a data directory.

BoardStorage sits on top and never trusts what it reads: undecodable or
inconsistent data is reported as "nothing stored" so the caller can
start from a fresh board.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional, Protocol

from loguru import logger

from .model import BoardState
from .ops import render_document
from .parse import ParseError, load_document, parse_state
from .validate import validate_board


STORAGE_KEY: Final[str] = "simple-kanban-v1"
FILE_SUFFIX: Final[str] = ".yml"


# ---------------------------------------------------------------------
# Key-value stores
# ---------------------------------------------------------------------

class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, data: Optional[dict[str, str]] = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStore:
    """
    Stores each key as `<root>/<key>.yml`.

    Writes go to a temporary file first and are moved into place, so a
    reader never sees a half-written document.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / f"{key}{FILE_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(value)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)


# ---------------------------------------------------------------------
# Board storage
# ---------------------------------------------------------------------

class BoardStorage:
    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def load(self) -> Optional[BoardState]:
        """
        Return the stored board, or None when absent or unusable.
        """
        try:
            raw = self.store.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read stored board {}: {}", self.key, e)
            return None

        if raw is None or not raw.strip():
            logger.debug("No stored board under {}", self.key)
            return None

        try:
            state = parse_state(load_document(raw))
        except ParseError as e:
            logger.warning("Ignoring stored board {}: {}", self.key, e)
            return None

        result = validate_board(state, path=self.key)
        if not result.ok:
            for issue in result.issues:
                logger.warning("Ignoring stored board {}: {}: {}", self.key, issue.code, issue.message)
            return None

        return state

    def save(self, state: BoardState) -> None:
        self.store.set(self.key, render_document(state))
        logger.debug("Saved board under {} ({} workspaces)", self.key, len(state.workspace_order))
