# chainreg/chain.py
"""
Chain descriptors (`<chain>/chain.json`).

Only the commonly used parts of the schema are modelled. Parsing never
fails on missing or unknown keys.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class FeeToken:
    denom: str = ""
    fixed_min_gas_price: Optional[float] = None
    low_gas_price: Optional[float] = None
    average_gas_price: Optional[float] = None
    high_gas_price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"denom": self.denom}
        for name in ("fixed_min_gas_price", "low_gas_price",
                     "average_gas_price", "high_gas_price"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeeToken":
        return cls(
            denom=data.get("denom", ""),
            fixed_min_gas_price=data.get("fixed_min_gas_price"),
            low_gas_price=data.get("low_gas_price"),
            average_gas_price=data.get("average_gas_price"),
            high_gas_price=data.get("high_gas_price"),
        )


@dataclass
class StakingToken:
    denom: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"denom": self.denom}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StakingToken":
        return cls(denom=data.get("denom", ""))


@dataclass
class Codebase:
    git_repo: str = ""
    recommended_version: str = ""
    compatible_versions: List[str] = field(default_factory=list)
    cosmwasm_enabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "git_repo": self.git_repo,
            "recommended_version": self.recommended_version,
            "compatible_versions": list(self.compatible_versions),
            "cosmwasm_enabled": self.cosmwasm_enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Codebase":
        cosmwasm = data.get("cosmwasm") or {}
        return cls(
            git_repo=data.get("git_repo", ""),
            recommended_version=data.get("recommended_version", ""),
            compatible_versions=data.get("compatible_versions", []),
            # Newer registry files nest the flag under "cosmwasm": {"enabled": ...}
            cosmwasm_enabled=bool(data.get("cosmwasm_enabled", cosmwasm.get("enabled", False))),
        )


@dataclass
class Endpoint:
    address: str = ""
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"address": self.address}
        if self.provider is not None:
            data["provider"] = self.provider
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Endpoint":
        return cls(address=data.get("address", ""), provider=data.get("provider"))


@dataclass
class Apis:
    rpc: List[Endpoint] = field(default_factory=list)
    rest: List[Endpoint] = field(default_factory=list)
    grpc: List[Endpoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc": [e.to_dict() for e in self.rpc],
            "rest": [e.to_dict() for e in self.rest],
            "grpc": [e.to_dict() for e in self.grpc],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Apis":
        return cls(
            rpc=[Endpoint.from_dict(e) for e in data.get("rpc", [])],
            rest=[Endpoint.from_dict(e) for e in data.get("rest", [])],
            grpc=[Endpoint.from_dict(e) for e in data.get("grpc", [])],
        )


@dataclass
class Peer:
    id: str = ""
    address: str = ""
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "address": self.address}
        if self.provider is not None:
            data["provider"] = self.provider
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Peer":
        return cls(
            id=data.get("id", ""),
            address=data.get("address", ""),
            provider=data.get("provider"),
        )


@dataclass
class Peers:
    seeds: List[Peer] = field(default_factory=list)
    persistent_peers: List[Peer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seeds": [p.to_dict() for p in self.seeds],
            "persistent_peers": [p.to_dict() for p in self.persistent_peers],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Peers":
        return cls(
            seeds=[Peer.from_dict(p) for p in data.get("seeds", [])],
            persistent_peers=[Peer.from_dict(p) for p in data.get("persistent_peers", [])],
        )


@dataclass
class Explorer:
    kind: str = ""
    url: str = ""
    tx_page: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "url": self.url, "tx_page": self.tx_page}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Explorer":
        return cls(
            kind=data.get("kind", ""),
            url=data.get("url", ""),
            tx_page=data.get("tx_page", ""),
        )


@dataclass
class ChainRecord:
    """
    A chain descriptor.

    Attributes:
        chain_name: Registry directory name (e.g. "osmosis")
        chain_id: Network chain id (e.g. "osmosis-1")
        bech32_prefix: Address prefix (e.g. "osmo")
        slip44: BIP-44 coin type
        fee_tokens / staking_tokens: Denominations used for fees and staking
        apis: Public RPC / REST / gRPC endpoints
    """
    chain_name: str = ""
    chain_id: str = ""
    pretty_name: str = ""
    status: str = ""
    network_type: str = ""
    bech32_prefix: str = ""
    daemon_name: str = ""
    node_home: str = ""
    key_algos: List[str] = field(default_factory=list)
    slip44: int = 0
    fee_tokens: List[FeeToken] = field(default_factory=list)
    staking_tokens: List[StakingToken] = field(default_factory=list)
    codebase: Codebase = field(default_factory=Codebase)
    apis: Apis = field(default_factory=Apis)
    peers: Peers = field(default_factory=Peers)
    explorers: List[Explorer] = field(default_factory=list)
    schema: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.schema is not None:
            data["$schema"] = self.schema
        data.update({
            "chain_name": self.chain_name,
            "chain_id": self.chain_id,
            "pretty_name": self.pretty_name,
            "status": self.status,
            "network_type": self.network_type,
            "bech32_prefix": self.bech32_prefix,
            "daemon_name": self.daemon_name,
            "node_home": self.node_home,
            "key_algos": list(self.key_algos),
            "slip44": self.slip44,
            "fees": {"fee_tokens": [t.to_dict() for t in self.fee_tokens]},
            "staking": {"staking_tokens": [t.to_dict() for t in self.staking_tokens]},
            "codebase": self.codebase.to_dict(),
            "apis": self.apis.to_dict(),
            "peers": self.peers.to_dict(),
            "explorers": [e.to_dict() for e in self.explorers],
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChainRecord":
        fees = data.get("fees") or {}
        staking = data.get("staking") or {}
        return cls(
            chain_name=data.get("chain_name", ""),
            chain_id=data.get("chain_id", ""),
            pretty_name=data.get("pretty_name", ""),
            status=data.get("status", ""),
            network_type=data.get("network_type", ""),
            bech32_prefix=data.get("bech32_prefix", ""),
            daemon_name=data.get("daemon_name", ""),
            node_home=data.get("node_home", ""),
            key_algos=data.get("key_algos", []),
            slip44=data.get("slip44", 0),
            fee_tokens=[FeeToken.from_dict(t) for t in fees.get("fee_tokens", [])],
            staking_tokens=[StakingToken.from_dict(t) for t in staking.get("staking_tokens", [])],
            codebase=Codebase.from_dict(data.get("codebase") or {}),
            apis=Apis.from_dict(data.get("apis") or {}),
            peers=Peers.from_dict(data.get("peers") or {}),
            explorers=[Explorer.from_dict(e) for e in data.get("explorers", [])],
            schema=data.get("$schema"),
        )
