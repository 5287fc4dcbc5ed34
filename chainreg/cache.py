# chainreg/cache.py
"""
In-memory cache of IBC paths for lookup and filtering.

Building a cache fetches every path in the registry (one listing request
plus one request per path), so build it once at startup in long-running
processes and keep it around:

    async with RegistryClient() as client:
        cache = await PathCache.build(client)

    cache.get_path("osmosis", "cosmoshub")
    cache.get_paths_filtered(Dex("osmosis"))

The cache is frozen after it is built: there is no update API and the
underlying mapping is exposed read-only, so it can be shared between
readers without locking. To pick up registry changes, build a new one.
"""

import asyncio
import logging
import time
from types import MappingProxyType
from typing import Callable, Iterator, List, Mapping, Optional, Tuple

from .errors import DataInconsistency
from .paths import Path, Tag, channel_matches, path_key
from .source import RegistrySource

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


def split_identifier(identifier: str) -> Tuple[str, str]:
    """
    Split a published path identifier ("chainA-chainB") into chain names.

    Splits on the first "-".
    """
    chain_a, sep, chain_b = identifier.partition("-")
    if not sep or not chain_a or not chain_b:
        raise DataInconsistency(identifier)
    return chain_a, chain_b


class PathCache:
    """
    Read-only mapping of canonical path keys to IBC paths.

    Args:
        paths: Mapping of "chainA-chainB" identifiers to paths. The mapping
            is copied; later changes to it do not affect the cache.
    """

    def __init__(self, paths: Mapping[str, Path]):
        self._paths: Mapping[str, Path] = MappingProxyType(dict(paths))

    @classmethod
    async def build(
        cls,
        source: RegistrySource,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> "PathCache":
        """
        Build a cache from every path a registry source lists.

        Path fetches run concurrently, at most `concurrency` at a time.
        Either every listed path is fetched or no cache is built.

        Args:
            source: Registry to read from
            concurrency: Maximum number of fetches in flight

        Returns:
            The populated cache

        Raises:
            RetrievalError: listing or fetching failed
            DataInconsistency: a listed path could not be fetched
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        start = time.time()
        identifiers = await source.list_path_names()
        logger.info(f"Fetching {len(identifiers)} paths (concurrency={concurrency})")

        semaphore = asyncio.Semaphore(concurrency)

        async def fetch(identifier: str) -> Tuple[str, Path]:
            chain_a, chain_b = split_identifier(identifier)
            async with semaphore:
                path = await source.fetch_path(chain_a, chain_b)
            if path is None:
                raise DataInconsistency(identifier)
            return identifier, path

        tasks = [asyncio.ensure_future(fetch(i)) for i in identifiers]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        cache = cls(dict(results))
        logger.info(f"Cached {len(cache)} paths in {time.time() - start:.2f}s")
        return cache

    def _select(self, predicate: Callable[[Path], bool]) -> List[Path]:
        return [path for path in self._paths.values() if predicate(path)]

    def get_path(self, chain_a: str, chain_b: str) -> Optional[Path]:
        """
        Get the path between two chains, in either order.

        Returns None if there is no such path. Passing the same chain twice
        always returns None.
        """
        key = path_key(chain_a, chain_b)
        if key is None:
            return None
        return self._paths.get(key)

    def get_paths_for_chain(self, chain_name: str) -> List[Path]:
        """All paths with `chain_name` on either side."""
        return self._select(lambda path: path.involves(chain_name))

    def get_all_paths(self) -> List[Path]:
        """All cached paths."""
        return list(self._paths.values())

    def get_paths_by_channel(self, channel_id: str) -> List[Path]:
        """Paths with a channel using `channel_id` on either side."""
        return self._select(
            lambda path: any(c.has_channel_id(channel_id) for c in path.channels)
        )

    def get_paths_by_client(self, client_id: str) -> List[Path]:
        """Paths whose chain_1 or chain_2 light client is `client_id`."""
        return self._select(
            lambda path: client_id in (path.chain_1.client_id, path.chain_2.client_id)
        )

    def get_paths_filtered(self, tag: Tag) -> List[Path]:
        """
        Paths with at least one channel matching a tag.

        Matching paths are returned whole, including their non-matching
        channels. Channels without tags never match.

        Example:
            live = cache.get_paths_filtered(Status("live"))
            preferred = cache.get_paths_filtered(Preferred(True))
        """
        return self._select(
            lambda path: any(channel_matches(c, tag) for c in path.channels)
        )

    def chain_names(self) -> List[str]:
        """Sorted names of every chain appearing in a cached path."""
        names = set()
        for path in self._paths.values():
            names.update(path.chain_names)
        names.discard("")
        return sorted(names)

    def keys(self) -> List[str]:
        """Path identifiers as published by the registry."""
        return list(self._paths.keys())

    def as_mapping(self) -> Mapping[str, Path]:
        """Read-only view of the identifier -> path mapping."""
        return self._paths

    def __contains__(self, key: str) -> bool:
        return key in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths.values())

    def __repr__(self) -> str:
        return f"PathCache({len(self)} paths)"
