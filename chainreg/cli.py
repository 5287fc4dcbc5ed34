#!/usr/bin/env python3
"""
chainreg CLI

Query the Cosmos chain registry from the command line:
  chainreg chains - List chain names
  chainreg chain <name> - Show a chain descriptor
  chainreg assets <name> - Show a chain's asset list
  chainreg path <chain_a> <chain_b> - Show the IBC path between two chains
  chainreg paths [filters] - Build the path cache and list matching paths

Usage:
  chainreg paths --chain osmosis --tag preferred:true
  chainreg --local ./chain-registry path cosmoshub osmosis
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from .cache import PathCache
from .client import RegistryClient
from .config import RegistryConfig
from .errors import RegistryError
from .local import LocalRegistry
from .paths import Path, Tag
from .source import RegistrySource


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def load_config(args) -> RegistryConfig:
    """Resolve configuration: config file if given, else environment."""
    if args.config:
        config = RegistryConfig.from_file(args.config)
    else:
        config = RegistryConfig.from_env()
    if args.ref:
        config.ref = args.ref
    return config


def make_source(args, config: RegistryConfig) -> RegistrySource:
    if args.local:
        return LocalRegistry(args.local)
    return RegistryClient(config)


def select_paths(cache: PathCache, args) -> List[Path]:
    """
    Apply the paths subcommand filters to a cache.

    Every given filter must match; with no filters all paths are returned.
    """
    # Match on path key, not object identity
    selected = dict(cache.as_mapping())

    def keep(paths: List[Path]) -> None:
        keys = {p.key for p in paths}
        for identifier, path in list(selected.items()):
            if path.key not in keys:
                del selected[identifier]

    if args.chain:
        keep(cache.get_paths_for_chain(args.chain))
    if args.channel:
        keep(cache.get_paths_by_channel(args.channel))
    if args.client:
        keep(cache.get_paths_by_client(args.client))
    for tag in args.tag or []:
        keep(cache.get_paths_filtered(tag))

    return [selected[identifier] for identifier in sorted(selected)]


async def cmd_chains(source: RegistrySource, args) -> int:
    for name in await source.list_chain_names():
        print(name)
    return 0


async def cmd_chain(source: RegistrySource, args) -> int:
    chain = await source.fetch_chain(args.name)
    if chain is None:
        print(f"Chain not found: {args.name}", file=sys.stderr)
        return 1
    _print_json(chain.to_dict())
    return 0


async def cmd_assets(source: RegistrySource, args) -> int:
    assets = await source.fetch_assets(args.name)
    if assets is None:
        print(f"Asset list not found: {args.name}", file=sys.stderr)
        return 1
    _print_json(assets.to_dict())
    return 0


async def cmd_path(source: RegistrySource, args) -> int:
    path = await source.fetch_path(args.chain_a, args.chain_b)
    if path is None:
        print(f"No path between {args.chain_a} and {args.chain_b}", file=sys.stderr)
        return 1
    _print_json(path.to_dict())
    return 0


async def cmd_paths(source: RegistrySource, args, concurrency: int) -> int:
    cache = await PathCache.build(source, concurrency=concurrency)
    paths = select_paths(cache, args)
    _print_json([p.to_dict() for p in paths])
    print(f"{len(paths)} of {len(cache)} paths", file=sys.stderr)
    return 0


async def run(args) -> int:
    config = load_config(args)
    async with make_source(args, config) as source:
        if args.command == "chains":
            return await cmd_chains(source, args)
        if args.command == "chain":
            return await cmd_chain(source, args)
        if args.command == "assets":
            return await cmd_assets(source, args)
        if args.command == "path":
            return await cmd_path(source, args)
        return await cmd_paths(source, args, config.concurrency)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainreg",
        description="Query the Cosmos chain registry",
    )
    parser.add_argument("--local", metavar="DIR", help="Read from a local registry clone")
    parser.add_argument("--config", metavar="FILE", help="YAML config file")
    parser.add_argument("--ref", help="Branch, tag or commit to read (remote only)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("chains", help="List chain names")

    chain_parser = subparsers.add_parser("chain", help="Show a chain descriptor")
    chain_parser.add_argument("name", help="Chain name (e.g. osmosis)")

    assets_parser = subparsers.add_parser("assets", help="Show a chain's asset list")
    assets_parser.add_argument("name", help="Chain name (e.g. osmosis)")

    path_parser = subparsers.add_parser("path", help="Show the IBC path between two chains")
    path_parser.add_argument("chain_a", help="First chain")
    path_parser.add_argument("chain_b", help="Second chain")

    paths_parser = subparsers.add_parser("paths", help="List cached paths matching filters")
    paths_parser.add_argument("--chain", help="Paths involving this chain")
    paths_parser.add_argument("--channel", help="Paths using this channel id")
    paths_parser.add_argument("--client", help="Paths using this client id")
    paths_parser.add_argument("--tag", action="append", type=Tag.parse,
                              help="Channel tag kind:value (dex, preferred, properties, status)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run(args))
    except RegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
