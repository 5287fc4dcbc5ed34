#!/usr/bin/env python3
"""
Query the live chain registry.

Fetches a chain, its assets and an IBC path, then builds the path cache
and runs a few filters. Needs network access to GitHub.
"""

import asyncio
import sys
from pathlib import Path

# Add chainreg to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chainreg import Dex, PathCache, Preferred, RegistryClient, RegistryConfig, Status


async def run() -> int:
    config = RegistryConfig.from_env()

    async with RegistryClient(config) as client:
        chains = await client.list_chain_names()
        print(f"Found {len(chains)} chains")
        print(f"  Sample: {chains[:5]}")
        print()

        chain = await client.fetch_chain("osmosis")
        if chain is None:
            print("Osmosis chain not found")
            return 1
        print(f"Chain: {chain.pretty_name} ({chain.chain_id})")
        print(f"  Bech32 prefix: {chain.bech32_prefix}")
        print(f"  RPC endpoints: {len(chain.apis.rpc)}")
        print()

        assets = await client.fetch_assets("osmosis")
        if assets is not None:
            osmo = assets.find("OSMO")
            print(f"Assets: {len(assets.assets)}")
            if osmo:
                print(f"  OSMO base denom: {osmo.base}, exponent {osmo.exponent(osmo.display)}")
            print()

        path = await client.fetch_path("osmosis", "cosmoshub")
        if path is None:
            print("No path between osmosis and cosmoshub")
            return 1
        channel = path.channels[0]
        print(f"Path: {path.chain_1.chain_name} <-> {path.chain_2.chain_name}")
        print(f"  Channel: {channel.chain_1.channel_id} <-> {channel.chain_2.channel_id}")
        print()

        print("=== Building path cache ===")
        cache = await PathCache.build(client, concurrency=config.concurrency)

    print(f"Cached paths: {len(cache)}")
    print(f"Paths involving osmosis: {len(cache.get_paths_for_chain('osmosis'))}")
    print(f"Osmosis DEX paths: {len(cache.get_paths_filtered(Dex('osmosis')))}")
    print(f"Preferred paths: {len(cache.get_paths_filtered(Preferred(True)))}")
    print(f"Live paths: {len(cache.get_paths_filtered(Status('live')))}")
    return 0


def main():
    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
