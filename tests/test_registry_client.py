"""Tests for the SynBioHub REST client."""

import asyncio
from urllib.parse import unquote

import httpx
import pytest

from conftest import PASSWORD, PRIVATE_COLLECTION, SERVER, TOKEN
from partgate.auth import Anonymous, PasswordCredential, TokenCredential
from partgate.errors import NotFound, PermissionDenied, RegistryError
from partgate.registry.client import RegistryClient, encode_search_query, list_registries
from partgate.search import SearchQuery


def _call(registry, method, *args, credential=None, **kwargs):
    async def run():
        async with RegistryClient(SERVER, transport=registry.transport) as client:
            if credential is not None:
                await client.authenticate(credential)
            return await getattr(client, method)(*args, **kwargs)

    return asyncio.run(run())


def test_login_returns_token(registry):
    assert _call(registry, "login", "alice@example.org", PASSWORD) == TOKEN
    request = registry.requests[0]
    assert request.method == "POST"
    assert request.headers["Accept"] == "text/plain"


def test_login_rejected(registry):
    with pytest.raises(PermissionDenied):
        _call(registry, "login", "alice@example.org", "wrong")


def test_token_sent_in_header(registry):
    _call(registry, "get_root_collection_metadata", credential=TokenCredential(TOKEN))
    assert registry.requests[0].headers["X-authorization"] == TOKEN


def test_password_credential_logs_in_first(registry):
    _call(
        registry,
        "get_root_collection_metadata",
        credential=PasswordCredential("alice@example.org", PASSWORD),
    )
    assert registry.paths == ["/login", "/rootCollections"]
    assert registry.requests[1].headers["X-authorization"] == TOKEN


def test_anonymous_sends_no_token(registry):
    _call(registry, "get_root_collection_metadata", credential=Anonymous())
    assert "X-authorization" not in registry.requests[0].headers


def test_metadata_records(registry):
    records = _call(registry, "get_root_collection_metadata")
    assert records[0].uri == PRIVATE_COLLECTION
    assert records[0].display_id == "designs_collection"
    assert records[0].name == "Designs"


def test_sub_collections_path(registry):
    _call(registry, "get_sub_collection_metadata", PRIVATE_COLLECTION)
    assert str(registry.requests[0].url) == f"{PRIVATE_COLLECTION}/subCollections"


def test_uri_prefix_is_mapped_to_backend():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json=[])

    async def run():
        async with RegistryClient(
            "https://backend.example.org",
            uri_prefix="https://namespace.example.org",
            transport=httpx.MockTransport(handler),
        ) as client:
            await client.get_sub_collection_metadata("https://namespace.example.org/user/a/c/1")

    asyncio.run(run())
    assert seen == ["https://backend.example.org/user/a/c/1/subCollections"]


def test_component_search_criteria(registry):
    _call(
        registry,
        "get_matching_component_metadata",
        roles=["http://identifiers.org/so/SO:0000167"],
        collections=[PRIVATE_COLLECTION],
    )
    path = unquote(registry.requests[0].url.raw_path.decode())
    assert path == (
        "/search/objectType=ComponentDefinition&"
        "role=<http://identifiers.org/so/SO:0000167>&"
        f"collection=<{PRIVATE_COLLECTION}>&"
    )


def test_encode_search_query():
    query = SearchQuery()
    query.add_criteria("objectType", "ModuleDefinition")
    query.add_criteria("http://example.org/key", "literal")
    query.add_criteria("name", "tetR")
    assert unquote(encode_search_query(query)) == (
        "objectType=ModuleDefinition&<http://example.org/key>='literal'&tetR"
    )
    assert "/" not in encode_search_query(query)


def test_search_pagination(registry):
    _call(registry, "search", SearchQuery(offset=10, limit=5))
    params = registry.requests[0].url.params
    assert params["offset"] == "10"
    assert params["limit"] == "5"


def test_get_sbol_recursive(registry):
    content = _call(registry, "get_sbol", f"{SERVER}/user/alice/designs/pTet/1")
    assert registry.requests[0].url.path.endswith("/pTet/1/sbol")
    assert content.startswith(b"<?xml")


def test_get_sbol_non_recursive(registry):
    _call(registry, "get_sbol", f"{SERVER}/user/alice/designs/pTet/1", recursive=False)
    assert registry.requests[0].url.path.endswith("/sbolnr")


def test_add_to_collection(registry):
    _call(
        registry,
        "add_to_collection",
        PRIVATE_COLLECTION,
        True,
        b"<?xml version='1.0'?><rdf:RDF/>",
        credential=TokenCredential(TOKEN),
    )
    (submission,) = registry.submissions
    assert submission["rootCollections"]
    assert submission["overwrite"]


@pytest.mark.parametrize(
    "status, error",
    [(401, PermissionDenied), (403, PermissionDenied), (404, NotFound), (500, RegistryError)],
)
def test_status_errors(registry, status, error):
    registry.fail_with = status
    with pytest.raises(error):
        _call(registry, "get_root_collection_metadata")


@pytest.mark.parametrize("payload", [{"error": "oops"}, ["a", "b"], "text"])
def test_unexpected_metadata_shape(registry, payload):
    registry.root_collections = payload
    with pytest.raises(RegistryError, match="unexpected metadata"):
        _call(registry, "get_root_collection_metadata")


def test_unreachable_registry():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with RegistryClient(SERVER, transport=httpx.MockTransport(handler)) as client:
            await client.get_root_collection_metadata()

    with pytest.raises(RegistryError, match="Failed to reach registry"):
        asyncio.run(run())


def test_list_registries(registry):
    instances = asyncio.run(
        list_registries("https://wor.example.org/instances/", transport=registry.transport)
    )
    assert [i.instance_url for i in instances] == ["https://synbiohub.org/", SERVER]
