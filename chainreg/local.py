# chainreg/local.py
"""
Chain registry backed by a local clone of the repository.

    git clone https://github.com/cosmos/chain-registry
    registry = LocalRegistry("chain-registry")
    cache = await PathCache.build(registry)

Disk reads run in worker threads so concurrent fetches during a cache
build do not block the event loop.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import RetrievalError
from .source import DirEntry, RegistrySource

logger = logging.getLogger(__name__)


class LocalRegistry(RegistrySource):
    """
    Reads registry documents from a directory on disk.

    Args:
        root: Root of the repository checkout
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path.strip("/") if path.strip("/") else self.root

    async def fetch_document(self, path: str) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self._read_document, path)

    async def list_entries(self, path: str = "") -> List[DirEntry]:
        return await asyncio.to_thread(self._read_directory, path)

    def _read_document(self, path: str) -> Optional[Dict[str, Any]]:
        file_path = self._resolve(path)
        if not file_path.is_file():
            logger.debug(f"Not found: {file_path}")
            return None

        try:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RetrievalError(path, f"Failed to read {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise RetrievalError(path, f"Expected a JSON object, got {type(data).__name__}")
        return data

    def _read_directory(self, path: str) -> List[DirEntry]:
        dir_path = self._resolve(path)
        if not dir_path.is_dir():
            raise RetrievalError(path or "/", f"Not a directory: {dir_path}")

        try:
            children = sorted(dir_path.iterdir())
        except OSError as e:
            raise RetrievalError(path or "/", f"Failed to list {dir_path}: {e}") from e
        return [DirEntry(name=child.name, is_dir=child.is_dir()) for child in children]
