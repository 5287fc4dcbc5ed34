# tests/test_client.py
"""Tests for the remote registry client (HTTP faked with httpx.MockTransport)."""

import json
from urllib.parse import unquote

import httpx
import pytest

from chainreg.cache import PathCache
from chainreg.client import RegistryClient
from chainreg.config import RegistryConfig
from chainreg.errors import RetrievalError
from chainreg.paths import Dex

RAW = "https://raw.githubusercontent.com/cosmos/chain-registry/master/"
API = "https://api.github.com/repos/cosmos/chain-registry/git/trees/"


def tree_listing(documents, directory):
    """Git Trees API response for a directory of the fake repo."""
    prefix = f"{directory}/" if directory else ""
    entries = {}
    for path in documents:
        if path.startswith(prefix):
            head, sep, _ = path[len(prefix):].partition("/")
            entries[head] = "tree" if sep else "blob"
    return [{"path": name, "type": kind} for name, kind in sorted(entries.items())]


def make_handler(documents, requests=None):
    """Serve a dict of path -> JSON as raw files plus git tree listings."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        url = unquote(str(request.url).split("?")[0])
        if url.startswith(RAW):
            path = url[len(RAW):]
            if path in documents:
                return httpx.Response(200, json=documents[path])
            return httpx.Response(404, text="404: Not Found")
        if url.startswith(API):
            _, _, directory = url[len(API):].partition(":")
            listing = tree_listing(documents, directory)
            if not listing:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"sha": "abc", "tree": listing, "truncated": False})
        return httpx.Response(500)

    return handler


def make_client(handler, config=None):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RegistryClient(config, http_client=http), http


class TestFetchDocument:
    """Test raw document retrieval."""

    @pytest.mark.asyncio
    async def test_fetch(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            data = await client.fetch_document("osmosis/chain.json")
        assert data["chain_id"] == "osmosis-1"

    @pytest.mark.asyncio
    async def test_not_found(self, path_documents):
        """Test 404 is absence, not an error."""
        client, http = make_client(make_handler(path_documents))
        async with http:
            assert await client.fetch_document("stargaze/chain.json") is None

    @pytest.mark.asyncio
    async def test_server_error(self):
        client, http = make_client(lambda request: httpx.Response(503, text="unavailable"))
        async with http:
            with pytest.raises(RetrievalError) as exc_info:
                await client.fetch_document("osmosis/chain.json")
        assert exc_info.value.status == 503
        assert exc_info.value.path == "osmosis/chain.json"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client, http = make_client(lambda request: httpx.Response(200, text="{not json"))
        async with http:
            with pytest.raises(RetrievalError, match="Invalid JSON"):
                await client.fetch_document("osmosis/chain.json")

    @pytest.mark.asyncio
    async def test_non_object_json(self):
        client, http = make_client(lambda request: httpx.Response(200, json=[1, 2]))
        async with http:
            with pytest.raises(RetrievalError):
                await client.fetch_document("osmosis/chain.json")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, http = make_client(handler)
        async with http:
            with pytest.raises(RetrievalError, match="Request failed"):
                await client.fetch_document("osmosis/chain.json")

    @pytest.mark.asyncio
    async def test_ref_in_url(self, path_documents):
        """Test the configured ref selects the branch."""
        requests = []
        config = RegistryConfig(ref="v1.0")
        client, http = make_client(make_handler(path_documents, requests), config)
        async with http:
            await client.fetch_document("osmosis/chain.json")
        assert str(requests[0].url) == (
            "https://raw.githubusercontent.com/cosmos/chain-registry/v1.0/osmosis/chain.json"
        )


class TestListing:
    """Test directory listings."""

    @pytest.mark.asyncio
    async def test_list_chain_names(self, path_documents):
        """Test only non-hidden directories are chains."""
        documents = dict(path_documents)
        documents[".github/workflows/ci.json"] = {}
        documents["README.json"] = {}
        client, http = make_client(make_handler(documents))
        async with http:
            names = await client.list_chain_names()
        assert names == ["cosmoshub", "osmosis"]

    @pytest.mark.asyncio
    async def test_list_path_names(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            names = await client.list_path_names()
        assert names == ["akash-osmosis", "cosmoshub-juno", "cosmoshub-osmosis", "juno-osmosis"]

    @pytest.mark.asyncio
    async def test_list_directory(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            names = await client.list_directory("osmosis")
        assert names == ["assetlist.json", "chain.json"]

    @pytest.mark.asyncio
    async def test_missing_directory(self, path_documents):
        """Test listing a missing directory is an error."""
        client, http = make_client(make_handler(path_documents))
        async with http:
            with pytest.raises(RetrievalError) as exc_info:
                await client.list_directory("stargaze")
        assert exc_info.value.status == 404
        assert "Not Found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_listing_sends_ref_and_token(self, path_documents):
        requests = []
        config = RegistryConfig(github_token="secret")
        client, http = make_client(make_handler(path_documents, requests), config)
        async with http:
            await client.list_directory("_IBC")
        request = requests[0]
        assert unquote(request.url.path).endswith("/git/trees/master:_IBC")
        assert request.headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_listing_without_token(self, path_documents):
        requests = []
        client, http = make_client(make_handler(path_documents, requests))
        async with http:
            await client.list_directory("_IBC")
        assert "Authorization" not in requests[0].headers

    @pytest.mark.asyncio
    async def test_listing_a_file(self):
        """Test a response without a tree is rejected."""
        client, http = make_client(
            lambda request: httpx.Response(200, json={"sha": "abc", "type": "blob"})
        )
        async with http:
            with pytest.raises(RetrievalError, match="Not a directory"):
                await client.list_directory("osmosis/chain.json")

    @pytest.mark.asyncio
    async def test_large_listing_complete(self):
        """Test directories past 1,000 entries are listed in full."""
        tree = [{"path": f"chain{i:04d}-osmosis.json", "type": "blob"} for i in range(1500)]
        client, http = make_client(
            lambda request: httpx.Response(200, json={"sha": "abc", "tree": tree, "truncated": False})
        )
        async with http:
            names = await client.list_path_names()
        assert len(names) == 1500

    @pytest.mark.asyncio
    async def test_truncated_listing(self):
        """Test a truncated tree is an error, not a partial listing."""
        tree = [{"path": f"chain{i:04d}-osmosis.json", "type": "blob"} for i in range(1000)]
        client, http = make_client(
            lambda request: httpx.Response(200, json={"sha": "abc", "tree": tree, "truncated": True})
        )
        async with http:
            with pytest.raises(RetrievalError, match="truncated"):
                await client.list_path_names()

    @pytest.mark.asyncio
    async def test_truncated_listing_aborts_build(self, path_documents):
        """Test a cache is never built from a truncated listing."""
        handler = make_handler(path_documents)

        def truncating(request):
            response = handler(request)
            if unquote(request.url.path).endswith(":_IBC"):
                data = response.json()
                data["tree"] = data["tree"][:2]
                data["truncated"] = True
                return httpx.Response(200, json=data)
            return response

        client, http = make_client(truncating)
        async with http:
            with pytest.raises(RetrievalError):
                await PathCache.build(client)


class TestTypedAccessors:
    """Test typed record fetching."""

    @pytest.mark.asyncio
    async def test_fetch_chain(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            chain = await client.fetch_chain("osmosis")
            missing = await client.fetch_chain("nonexistent_chain_xyz")
        assert chain.chain_name == "osmosis"
        assert chain.bech32_prefix == "osmo"
        assert chain.slip44 == 118
        assert missing is None

    @pytest.mark.asyncio
    async def test_fetch_assets(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            assets = await client.fetch_assets("osmosis")
            missing = await client.fetch_assets("cosmoshub")
        assert assets.find("OSMO").base == "uosmo"
        assert missing is None

    @pytest.mark.asyncio
    async def test_fetch_path_either_order(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            forward = await client.fetch_path("cosmoshub", "osmosis")
            reverse = await client.fetch_path("osmosis", "cosmoshub")
        assert forward == reverse
        assert forward.chain_1.chain_name == "cosmoshub"
        assert forward.chain_2.chain_name == "osmosis"

    @pytest.mark.asyncio
    async def test_fetch_path_missing(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            assert await client.fetch_path("nonexistent1", "nonexistent2") is None

    @pytest.mark.asyncio
    async def test_fetch_path_same_chain(self, path_documents):
        """Test a self-pair returns None without a request."""
        requests = []
        client, http = make_client(make_handler(path_documents, requests))
        async with http:
            assert await client.fetch_path("osmosis", "osmosis") is None
        assert requests == []


class TestClientLifecycle:
    """Test client ownership and cache building over HTTP."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, path_documents):
        client, http = make_client(make_handler(path_documents))
        async with http:
            async with client:
                pass
            assert not http.is_closed

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        client = RegistryClient()
        async with client:
            pass
        assert client._http.is_closed

    @pytest.mark.asyncio
    async def test_build_cache(self, path_documents):
        requests = []
        client, http = make_client(make_handler(path_documents, requests))
        async with http:
            cache = await PathCache.build(client, concurrency=3)

        assert len(cache) == 4
        assert len(cache.get_paths_filtered(Dex("osmosis"))) == 2
        # One listing plus one request per path
        assert len(requests) == 5

    @pytest.mark.asyncio
    async def test_build_cache_fails_on_http_error(self, path_documents):
        handler = make_handler(path_documents)

        def flaky(request):
            if request.url.path.endswith("juno-osmosis.json"):
                return httpx.Response(500, text=json.dumps({"error": "boom"}))
            return handler(request)

        client, http = make_client(flaky)
        async with http:
            with pytest.raises(RetrievalError):
                await PathCache.build(client)
