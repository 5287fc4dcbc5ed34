# tests/conftest.py
"""Shared fixtures: an in-memory registry source and sample documents."""

from typing import Any, Dict, List, Optional

import pytest

from chainreg.errors import RetrievalError
from chainreg.source import DirEntry, RegistrySource


class FakeRegistry(RegistrySource):
    """Registry source serving documents from a dict of path -> JSON."""

    def __init__(self, documents: Dict[str, Dict[str, Any]]):
        self.documents = documents
        self.fetched: List[str] = []

    async def fetch_document(self, path: str) -> Optional[Dict[str, Any]]:
        self.fetched.append(path)
        return self.documents.get(path)

    async def list_entries(self, path: str = "") -> List[DirEntry]:
        prefix = f"{path}/" if path else ""
        entries = {}
        for doc_path in self.documents:
            if not doc_path.startswith(prefix):
                continue
            head, sep, _ = doc_path[len(prefix):].partition("/")
            entries[head] = bool(sep)
        if not entries:
            raise RetrievalError(path or "/", "Not a directory")
        return [DirEntry(name=n, is_dir=d) for n, d in sorted(entries.items())]


def make_path_doc(chain_1: str, chain_2: str, channels: List[Dict[str, Any]] = None,
                  client_1: str = "07-tendermint-0", client_2: str = "07-tendermint-0"):
    return {
        "$schema": "../ibc_data.schema.json",
        "chain_1": {"chain_name": chain_1, "client_id": client_1, "connection_id": "connection-0"},
        "chain_2": {"chain_name": chain_2, "client_id": client_2, "connection_id": "connection-0"},
        "channels": channels or [],
    }


def make_channel(channel_1: str, channel_2: str, tags: Dict[str, Any] = None):
    channel = {
        "chain_1": {"channel_id": channel_1, "port_id": "transfer"},
        "chain_2": {"channel_id": channel_2, "port_id": "transfer"},
        "ordering": "unordered",
        "version": "ics20-1",
    }
    if tags is not None:
        channel["tags"] = tags
    return channel


@pytest.fixture
def hub_osmosis_doc():
    """The cosmoshub <-> osmosis path."""
    return make_path_doc(
        "cosmoshub", "osmosis",
        channels=[make_channel("channel-141", "channel-0",
                               tags={"status": "live", "preferred": True, "dex": "osmosis"})],
        client_1="07-tendermint-259",
        client_2="07-tendermint-1",
    )


@pytest.fixture
def path_documents(hub_osmosis_doc):
    """A small registry: four paths, one chain/asset document each for two chains."""
    return {
        "_IBC/cosmoshub-osmosis.json": hub_osmosis_doc,
        "_IBC/juno-osmosis.json": make_path_doc(
            "juno", "osmosis",
            channels=[
                make_channel("channel-0", "channel-42",
                             tags={"status": "live", "preferred": False}),
                make_channel("channel-47", "channel-169",
                             tags={"status": "live", "preferred": True, "dex": "osmosis"}),
            ],
            client_1="07-tendermint-0",
            client_2="07-tendermint-1457",
        ),
        "_IBC/akash-osmosis.json": make_path_doc(
            "akash", "osmosis",
            channels=[make_channel("channel-9", "channel-1")],
            client_1="07-tendermint-53",
            client_2="07-tendermint-1",
        ),
        "_IBC/cosmoshub-juno.json": make_path_doc(
            "cosmoshub", "juno",
            channels=[make_channel("channel-207", "channel-1",
                                   tags={"properties": "wasm", "status": "closed"})],
            client_1="07-tendermint-451",
            client_2="07-tendermint-2",
        ),
        "osmosis/chain.json": {
            "chain_name": "osmosis",
            "chain_id": "osmosis-1",
            "bech32_prefix": "osmo",
            "slip44": 118,
        },
        "osmosis/assetlist.json": {
            "chain_name": "osmosis",
            "assets": [{"base": "uosmo", "display": "osmo", "symbol": "OSMO", "name": "Osmosis"}],
        },
        "cosmoshub/chain.json": {
            "chain_name": "cosmoshub",
            "chain_id": "cosmoshub-4",
            "bech32_prefix": "cosmos",
        },
    }


@pytest.fixture
def registry(path_documents):
    return FakeRegistry(path_documents)


@pytest.fixture
def fake_registry_cls():
    """The FakeRegistry class, for tests that subclass it."""
    return FakeRegistry
