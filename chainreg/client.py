# chainreg/client.py
"""
Client for the chain registry hosted on GitHub.

Documents are read from raw.githubusercontent.com; directory listings come
from the Git Trees API.

Usage:
    async with RegistryClient() as client:
        chain = await client.fetch_chain("osmosis")
        path = await client.fetch_path("osmosis", "cosmoshub")
        print(chain.chain_id, len(path.channels))
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import RegistryConfig
from .errors import RetrievalError
from .source import DirEntry, RegistrySource

logger = logging.getLogger(__name__)


class RegistryClient(RegistrySource):
    """
    Async client for the remote chain registry.

    Args:
        config: Repository location and request settings (defaults to
            the public cosmos/chain-registry on master)
        http_client: Optional httpx.AsyncClient to use. A client passed in
            is left open by aclose(); one created here is closed.
    """

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or RegistryConfig()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _api_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get(self, path: str, url: str, **kwargs) -> httpx.Response:
        """GET a URL, turning transport failures into RetrievalError."""
        logger.debug(f"GET {url}")
        try:
            return await self._http.get(url, **kwargs)
        except httpx.HTTPError as e:
            raise RetrievalError(path, f"Request failed: {e}") from e

    @staticmethod
    def _decode(path: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RetrievalError(path, f"Invalid JSON: {e}") from e

    async def fetch_document(self, path: str) -> Optional[Dict[str, Any]]:
        url = self.config.raw_document_url(path)
        response = await self._get(path, url)

        if response.status_code == 404:
            logger.debug(f"Not found: {path}")
            return None
        if response.status_code != 200:
            raise RetrievalError(path, response.text[:200], status=response.status_code)

        data = self._decode(path, response)
        if not isinstance(data, dict):
            raise RetrievalError(path, f"Expected a JSON object, got {type(data).__name__}")
        return data

    async def list_entries(self, path: str = "") -> List[DirEntry]:
        """
        List a directory through the Git Trees API.

        The contents API stops at 1,000 entries without saying so; a tree
        response carries a `truncated` flag, and a truncated listing is
        an error rather than a partial result.
        """
        url = self.config.tree_url(path)
        response = await self._get(path, url, headers=self._api_headers())

        if response.status_code != 200:
            message = response.text[:200]
            try:
                message = response.json().get("message", message)
            except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                pass
            raise RetrievalError(path or "/", message, status=response.status_code)

        data = self._decode(path, response)
        if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
            raise RetrievalError(path or "/", "Not a directory")
        if data.get("truncated"):
            raise RetrievalError(
                path or "/", f"Listing truncated after {len(data['tree'])} entries"
            )
        return [
            DirEntry(name=item["path"], is_dir=item.get("type") == "tree")
            for item in data["tree"]
            if isinstance(item, dict) and item.get("path")
        ]
