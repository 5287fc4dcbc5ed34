# chainreg/paths.py
"""
IBC path records from the `_IBC/` directory of the chain registry.

A path describes the connection between exactly two chains and the
channels opened over it. The JSON layout is:

    {
      "$schema": "../ibc_data.schema.json",
      "chain_1": {"chain_name": ..., "client_id": ..., "connection_id": ...},
      "chain_2": {...},
      "channels": [
        {
          "chain_1": {"channel_id": ..., "port_id": ...},
          "chain_2": {...},
          "ordering": "unordered",
          "version": "ics20-1",
          "tags": {"dex": ..., "preferred": true, "properties": ..., "status": "live"}
        }
      ]
    }

Every field is optional when parsing; missing values fall back to
defaults and unknown keys are ignored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple, Type


def path_key(chain_a: str, chain_b: str) -> Optional[str]:
    """
    Canonical identifier for the path between two chains.

    The smaller name (lexical order) comes first, so the key is the same
    whichever way round the chains are given. Returns None when both
    names are equal: a chain has no path to itself.
    """
    if chain_a == chain_b:
        return None
    if chain_a < chain_b:
        return f"{chain_a}-{chain_b}"
    return f"{chain_b}-{chain_a}"


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ChainEndpoint:
    """One side of a path: the chain and its light client / connection."""
    chain_name: str = ""
    client_id: str = ""
    connection_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chain_name": self.chain_name,
            "client_id": self.client_id,
            "connection_id": self.connection_id,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ChainEndpoint":
        data = data or {}
        return cls(
            chain_name=data.get("chain_name", ""),
            client_id=data.get("client_id", ""),
            connection_id=data.get("connection_id", ""),
        )


@dataclass(frozen=True)
class ChannelEndpoint:
    """One side of a channel."""
    channel_id: str = ""
    port_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"channel_id": self.channel_id, "port_id": self.port_id}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ChannelEndpoint":
        data = data or {}
        return cls(
            channel_id=data.get("channel_id", ""),
            port_id=data.get("port_id", ""),
        )


@dataclass(frozen=True)
class Tags:
    """Classification tags attached to a channel."""
    dex: Optional[str] = None
    preferred: bool = False
    properties: Optional[str] = None
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "dex": self.dex,
            "preferred": self.preferred,
            "properties": self.properties,
            "status": self.status,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tags":
        # Only a JSON boolean counts; "false" or 1 are not preferred
        preferred = data.get("preferred")
        return cls(
            dex=data.get("dex"),
            preferred=preferred if isinstance(preferred, bool) else False,
            properties=data.get("properties"),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class Channel:
    """
    A channel opened over a path.

    Attributes:
        chain_1: Channel/port on the path's chain_1
        chain_2: Channel/port on the path's chain_2
        ordering: "ordered" / "unordered", None if unspecified
        version: Channel version string (e.g. "ics20-1")
        tags: Classification tags, None if the channel has no tags block
    """
    chain_1: ChannelEndpoint = field(default_factory=ChannelEndpoint)
    chain_2: ChannelEndpoint = field(default_factory=ChannelEndpoint)
    ordering: Optional[str] = None
    version: Optional[str] = None
    tags: Optional[Tags] = None

    def has_channel_id(self, channel_id: str) -> bool:
        return channel_id in (self.chain_1.channel_id, self.chain_2.channel_id)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "chain_1": self.chain_1.to_dict(),
            "chain_2": self.chain_2.to_dict(),
            "ordering": self.ordering,
            "version": self.version,
            "tags": self.tags.to_dict() if self.tags is not None else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Channel":
        tags = data.get("tags")
        return cls(
            chain_1=ChannelEndpoint.from_dict(data.get("chain_1")),
            chain_2=ChannelEndpoint.from_dict(data.get("chain_2")),
            ordering=data.get("ordering"),
            version=data.get("version"),
            tags=Tags.from_dict(tags) if isinstance(tags, dict) else None,
        )


@dataclass(frozen=True)
class Path:
    """
    The IBC connectivity record between two chains.

    chain_1/chain_2 order carries no meaning: the path between A and B is
    the same record as the path between B and A.
    """
    chain_1: ChainEndpoint = field(default_factory=ChainEndpoint)
    chain_2: ChainEndpoint = field(default_factory=ChainEndpoint)
    channels: Tuple[Channel, ...] = ()
    schema: Optional[str] = None

    @property
    def chain_names(self) -> Tuple[str, str]:
        return (self.chain_1.chain_name, self.chain_2.chain_name)

    @property
    def key(self) -> Optional[str]:
        """Canonical key derived from the endpoint chain names."""
        return path_key(self.chain_1.chain_name, self.chain_2.chain_name)

    def involves(self, chain_name: str) -> bool:
        return chain_name in self.chain_names

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.schema is not None:
            data["$schema"] = self.schema
        data["chain_1"] = self.chain_1.to_dict()
        data["chain_2"] = self.chain_2.to_dict()
        data["channels"] = [c.to_dict() for c in self.channels]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Path":
        return cls(
            chain_1=ChainEndpoint.from_dict(data.get("chain_1")),
            chain_2=ChainEndpoint.from_dict(data.get("chain_2")),
            channels=tuple(Channel.from_dict(c) for c in data.get("channels") or []),
            schema=data.get("$schema"),
        )


class Tag(ABC):
    """
    A channel tag predicate.

    Exactly four variants exist: Dex, Preferred, Properties and Status.
    A new tag dimension means a new variant here, not a string lookup.
    """

    kind: ClassVar[str]

    @abstractmethod
    def matches(self, tags: Tags) -> bool:
        """Check a channel's tags block against this predicate."""

    @staticmethod
    def parse(text: str) -> "Tag":
        """
        Build a tag from "<kind>:<value>" text.

        Examples: "dex:osmosis", "preferred:true", "status:live"
        """
        kind, sep, value = text.partition(":")
        if not sep:
            raise ValueError(f"Invalid tag {text!r}. Expected kind:value")
        tag_cls = _TAG_KINDS.get(kind.strip().lower())
        if tag_cls is None:
            raise ValueError(
                f"Unknown tag kind {kind!r}. Expected one of: {', '.join(sorted(_TAG_KINDS))}"
            )
        value = value.strip()
        if tag_cls is Preferred:
            return Preferred(_parse_bool(value))
        return tag_cls(value)


@dataclass(frozen=True)
class Dex(Tag):
    value: str
    kind: ClassVar[str] = "dex"

    def matches(self, tags: Tags) -> bool:
        return tags.dex is not None and tags.dex == self.value


@dataclass(frozen=True)
class Preferred(Tag):
    value: bool
    kind: ClassVar[str] = "preferred"

    def matches(self, tags: Tags) -> bool:
        return tags.preferred == self.value


@dataclass(frozen=True)
class Properties(Tag):
    value: str
    kind: ClassVar[str] = "properties"

    def matches(self, tags: Tags) -> bool:
        return tags.properties is not None and tags.properties == self.value


@dataclass(frozen=True)
class Status(Tag):
    value: str
    kind: ClassVar[str] = "status"

    def matches(self, tags: Tags) -> bool:
        return tags.status is not None and tags.status == self.value


_TAG_KINDS: Dict[str, Type[Tag]] = {
    cls.kind: cls for cls in (Dex, Preferred, Properties, Status)
}


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise ValueError(f"Invalid boolean {value!r}")


def channel_matches(channel: Channel, tag: Tag) -> bool:
    """
    Check a channel against a tag.

    A channel without a tags block never matches, not even Preferred(False).
    """
    if channel.tags is None:
        return False
    return tag.matches(channel.tags)
