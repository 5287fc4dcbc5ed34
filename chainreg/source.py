# chainreg/source.py
"""
Registry source base class.

A source resolves repository-relative paths to decoded JSON documents and
directory listings. Subclasses implement the two primitives
(fetch_document, list_entries); the typed accessors for chains, asset
lists and IBC paths are built on top of them here.

Repository layout:
    <chain>/chain.json
    <chain>/assetlist.json
    _IBC/<chainA>-<chainB>.json
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .assets import AssetList
from .chain import ChainRecord
from .paths import Path, path_key

logger = logging.getLogger(__name__)

IBC_DIR = "_IBC"
CHAIN_FILE = "chain.json"
ASSETLIST_FILE = "assetlist.json"


@dataclass(frozen=True)
class DirEntry:
    """A name in a directory listing."""
    name: str
    is_dir: bool = False


class RegistrySource(ABC):
    """Base class for anything that can serve chain registry documents."""

    @abstractmethod
    async def fetch_document(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Fetch and decode a JSON document.

        Args:
            path: Repository-relative path (e.g. "osmosis/chain.json")

        Returns:
            The decoded document, or None if it does not exist

        Raises:
            RetrievalError: transport or decode failure
        """

    @abstractmethod
    async def list_entries(self, path: str = "") -> List[DirEntry]:
        """
        List a directory.

        Raises:
            RetrievalError: the directory is missing or cannot be read
        """

    async def list_directory(self, path: str = "") -> List[str]:
        """Names of all entries in a directory."""
        return [e.name for e in await self.list_entries(path)]

    async def list_chain_names(self) -> List[str]:
        """
        Names of all chains in the registry.

        Chains are the top-level directories; directories starting with
        "_" or "." (such as _IBC, .github) are not chains.
        """
        entries = await self.list_entries("")
        return sorted(
            e.name for e in entries
            if e.is_dir and not e.name.startswith(("_", "."))
        )

    async def list_path_names(self) -> List[str]:
        """Identifiers ("chainA-chainB") of all IBC paths."""
        names = []
        for entry in await self.list_entries(IBC_DIR):
            if entry.is_dir or not entry.name.endswith(".json"):
                logger.warning(f"Skipping non-path entry in {IBC_DIR}: {entry.name}")
                continue
            names.append(entry.name[: -len(".json")])
        return sorted(names)

    async def fetch_chain(self, chain_name: str) -> Optional[ChainRecord]:
        """Fetch a chain descriptor, None if the chain is unknown."""
        data = await self.fetch_document(f"{chain_name}/{CHAIN_FILE}")
        if data is None:
            return None
        return ChainRecord.from_dict(data)

    async def fetch_assets(self, chain_name: str) -> Optional[AssetList]:
        """Fetch a chain's asset list, None if it has none."""
        data = await self.fetch_document(f"{chain_name}/{ASSETLIST_FILE}")
        if data is None:
            return None
        return AssetList.from_dict(data)

    async def fetch_path(self, chain_a: str, chain_b: str) -> Optional[Path]:
        """
        Fetch the IBC path between two chains.

        Order of the arguments does not matter. Returns None if no path is
        registered, or if both names are the same.
        """
        key = path_key(chain_a, chain_b)
        if key is None:
            return None
        data = await self.fetch_document(f"{IBC_DIR}/{key}.json")
        if data is None:
            return None
        return Path.from_dict(data)

    async def aclose(self) -> None:
        """Release any resources held by the source."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
