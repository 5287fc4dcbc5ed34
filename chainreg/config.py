# chainreg/config.py
"""
Registry source configuration.

Defaults point at the public cosmos/chain-registry repository on GitHub.
Values can be overridden from the environment or a YAML file:

    owner: cosmos
    repo: chain-registry
    ref: master
    timeout: 30
    concurrency: 8
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class RegistryConfig:
    """
    Where and how to read the registry.

    Attributes:
        owner: GitHub organisation or user owning the repository
        repo: Repository name
        ref: Branch, tag or commit to read from
        raw_url: Base URL for raw file content
        api_url: Base URL of the GitHub REST API (directory listings via git trees)
        timeout: Per-request timeout in seconds
        concurrency: Maximum concurrent path fetches while building a cache
        github_token: Optional token for the GitHub API rate limit
    """
    owner: str = "cosmos"
    repo: str = "chain-registry"
    ref: str = "master"
    raw_url: str = "https://raw.githubusercontent.com"
    api_url: str = "https://api.github.com"
    timeout: float = 30.0
    concurrency: int = 8
    github_token: Optional[str] = None

    def __post_init__(self):
        self.raw_url = self.raw_url.rstrip("/")
        self.api_url = self.api_url.rstrip("/")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")

    def raw_document_url(self, path: str) -> str:
        return f"{self.raw_url}/{self.owner}/{self.repo}/{self.ref}/{path.lstrip('/')}"

    def tree_url(self, path: str = "") -> str:
        """Git Trees API URL for a directory ("<ref>:<path>" tree-ish)."""
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}/git/trees/{self.ref}"
        path = path.strip("/")
        return f"{url}:{path}" if path else url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "repo": self.repo,
            "ref": self.ref,
            "raw_url": self.raw_url,
            "api_url": self.api_url,
            "timeout": self.timeout,
            "concurrency": self.concurrency,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistryConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Path | str) -> "RegistryConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "RegistryConfig":
        """
        Build configuration from environment variables.

        Reads CHAINREG_OWNER, CHAINREG_REPO, CHAINREG_REF, CHAINREG_TIMEOUT,
        CHAINREG_CONCURRENCY and GITHUB_TOKEN. Unset variables keep defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}
        if "CHAINREG_OWNER" in env:
            kwargs["owner"] = env["CHAINREG_OWNER"]
        if "CHAINREG_REPO" in env:
            kwargs["repo"] = env["CHAINREG_REPO"]
        if "CHAINREG_REF" in env:
            kwargs["ref"] = env["CHAINREG_REF"]
        if "CHAINREG_TIMEOUT" in env:
            kwargs["timeout"] = float(env["CHAINREG_TIMEOUT"])
        if "CHAINREG_CONCURRENCY" in env:
            kwargs["concurrency"] = int(env["CHAINREG_CONCURRENCY"])
        kwargs["github_token"] = env.get("GITHUB_TOKEN") or None
        return cls(**kwargs)
