# chainreg/assets.py
"""
Asset lists (`<chain>/assetlist.json`).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class DenomUnit:
    denom: str = ""
    exponent: int = 0
    aliases: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"denom": self.denom, "exponent": self.exponent}
        if self.aliases:
            data["aliases"] = list(self.aliases)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DenomUnit":
        return cls(
            denom=data.get("denom", ""),
            exponent=data.get("exponent", 0),
            aliases=data.get("aliases", []),
        )


@dataclass
class LogoURIs:
    png: Optional[str] = None
    svg: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in (("png", self.png), ("svg", self.svg)) if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogoURIs":
        return cls(png=data.get("png"), svg=data.get("svg"))


@dataclass
class Asset:
    """
    A single asset on a chain.

    Attributes:
        base: Base (smallest) denomination, e.g. "uosmo"
        display: Display denomination, e.g. "osmo"
        symbol: Ticker, e.g. "OSMO"
        denom_units: Conversion table between denominations
    """
    base: str = ""
    name: str = ""
    display: str = ""
    symbol: str = ""
    description: str = ""
    type_asset: str = ""
    coingecko_id: Optional[str] = None
    denom_units: List[DenomUnit] = field(default_factory=list)
    logo_uris: LogoURIs = field(default_factory=LogoURIs)

    def exponent(self, denom: str) -> Optional[int]:
        """Exponent of a denomination (or alias), None if unknown."""
        for unit in self.denom_units:
            if unit.denom == denom or denom in unit.aliases:
                return unit.exponent
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "description": self.description,
            "denom_units": [u.to_dict() for u in self.denom_units],
            "base": self.base,
            "name": self.name,
            "display": self.display,
            "symbol": self.symbol,
            "type_asset": self.type_asset,
            "logo_URIs": self.logo_uris.to_dict(),
        }
        if self.coingecko_id is not None:
            data["coingecko_id"] = self.coingecko_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            base=data.get("base", ""),
            name=data.get("name", ""),
            display=data.get("display", ""),
            symbol=data.get("symbol", ""),
            description=data.get("description", ""),
            type_asset=data.get("type_asset", ""),
            coingecko_id=data.get("coingecko_id"),
            denom_units=[DenomUnit.from_dict(u) for u in data.get("denom_units", [])],
            logo_uris=LogoURIs.from_dict(data.get("logo_URIs") or {}),
        )


@dataclass
class AssetList:
    """All assets registered for one chain."""
    chain_name: str = ""
    assets: List[Asset] = field(default_factory=list)
    schema: Optional[str] = None

    def find(self, symbol: str) -> Optional[Asset]:
        """Find the first asset with a given symbol."""
        for asset in self.assets:
            if asset.symbol == symbol:
                return asset
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.schema is not None:
            data["$schema"] = self.schema
        data["chain_name"] = self.chain_name
        data["assets"] = [a.to_dict() for a in self.assets]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssetList":
        return cls(
            chain_name=data.get("chain_name", ""),
            assets=[Asset.from_dict(a) for a in data.get("assets", [])],
            schema=data.get("$schema"),
        )
