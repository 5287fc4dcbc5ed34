# chainreg - Typed access to the Cosmos chain registry
#
# Reads chain descriptors, asset lists and IBC paths from the
# cosmos/chain-registry repository (remote or a local clone) and caches
# IBC paths in memory for lookup and filtering.
#
# Core concepts:
# - RegistrySource: Resolves chain names and chain pairs to typed records
# - Path: The IBC connectivity record between two chains
# - PathCache: Frozen in-memory index of every path, built once
# - Tag: Channel tag predicate (Dex, Preferred, Properties, Status)

from .assets import Asset, AssetList, DenomUnit
from .cache import PathCache
from .chain import ChainRecord
from .client import RegistryClient
from .config import RegistryConfig
from .errors import DataInconsistency, RegistryError, RetrievalError
from .local import LocalRegistry
from .paths import (
    ChainEndpoint,
    Channel,
    ChannelEndpoint,
    Dex,
    Path,
    Preferred,
    Properties,
    Status,
    Tag,
    Tags,
    path_key,
)
from .source import RegistrySource

__all__ = [
    # Records
    "ChainRecord",
    "Asset",
    "AssetList",
    "DenomUnit",
    "Path",
    "ChainEndpoint",
    "Channel",
    "ChannelEndpoint",
    "Tags",
    "path_key",
    # Tags
    "Tag",
    "Dex",
    "Preferred",
    "Properties",
    "Status",
    # Sources
    "RegistrySource",
    "RegistryClient",
    "LocalRegistry",
    "RegistryConfig",
    # Cache
    "PathCache",
    # Errors
    "RegistryError",
    "RetrievalError",
    "DataInconsistency",
]

__version__ = "0.1.0"
