"""Async SynBioHub REST client.

Wraps the subset of the SynBioHub API the gateway needs: login, collection
listings, criteria search, SBOL download, and submission into a collection.
The user token travels in the ``X-authorization`` header.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import quote

import httpx

from partgate.auth.credentials import Anonymous, Credential, PasswordCredential, TokenCredential
from partgate.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_WOR_URL
from partgate.errors import NotFound, PermissionDenied, RegistryError
from partgate.registry.models import IdentifiedMetadata, RegistryInstance
from partgate.search.models import SearchQuery

logger = logging.getLogger(__name__)

COMPONENT_DEFINITION = "ComponentDefinition"
MODULE_DEFINITION = "ModuleDefinition"

# overwrite_merge values understood by /submit
_OVERWRITE = "3"
_MERGE = "2"


class RegistryClient:
    """Client for one SynBioHub instance.

    ``uri_prefix`` is the namespace the instance mints URIs under; it is
    swapped for ``backend_url`` when a record URI is dereferenced. It
    defaults to the backend URL itself.
    """

    def __init__(
        self,
        backend_url: str,
        uri_prefix: str | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.backend_url = backend_url.rstrip("/")
        self.uri_prefix = (uri_prefix or backend_url).rstrip("/")
        self.user: str | None = None
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> RegistryClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def set_user(self, token: str | None) -> None:
        self.user = token

    async def authenticate(self, credential: Credential) -> None:
        """Bind *credential* to this client.

        Tokens are used directly; an email/password pair is exchanged for a
        token through ``login``. Anonymous credentials leave the client
        unauthenticated.
        """
        if isinstance(credential, TokenCredential):
            self.set_user(credential.token)
        elif isinstance(credential, PasswordCredential):
            await self.login(credential.email, credential.secret)
        elif isinstance(credential, Anonymous):
            self.set_user(None)

    async def login(self, email: str, password: str) -> str:
        """Log in and return the user token. Raises ``PermissionDenied`` on rejection."""
        resp = await self._request(
            "POST",
            f"{self.backend_url}/login",
            data={"email": email, "password": password},
            headers={"Accept": "text/plain"},
        )
        self.user = resp.text.strip()
        return self.user

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    async def get_root_collection_metadata(self) -> list[IdentifiedMetadata]:
        """Root collections visible to the current user."""
        return await self._get_metadata(f"{self.backend_url}/rootCollections")

    async def get_sub_collection_metadata(self, collection_uri: str) -> list[IdentifiedMetadata]:
        """Direct sub-collections of a collection."""
        return await self._get_metadata(f"{self._resolve(collection_uri)}/subCollections")

    async def get_matching_component_metadata(
        self,
        roles: Iterable[str] = (),
        types: Iterable[str] = (),
        collections: Iterable[str] = (),
        name: str | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[IdentifiedMetadata]:
        """Component definitions matching all of the given constraints."""
        query = SearchQuery(offset=offset, limit=limit)
        query.add_criteria("objectType", COMPONENT_DEFINITION)
        for uri in roles:
            query.add_criteria("role", uri)
        for uri in types:
            query.add_criteria("type", uri)
        for uri in collections:
            query.add_criteria("collection", uri)
        if name is not None:
            query.add_criteria("name", name)
        return await self.search(query)

    async def search(self, query: SearchQuery) -> list[IdentifiedMetadata]:
        """Run a criteria query against ``/search``."""
        params = {}
        if query.offset is not None:
            params["offset"] = str(query.offset)
        if query.limit is not None:
            params["limit"] = str(query.limit)
        url = f"{self.backend_url}/search/{encode_search_query(query)}"
        return await self._get_metadata(url, params=params or None)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def get_sbol(self, uri: str, recursive: bool = True) -> bytes:
        """Download a design as SBOL RDF/XML.

        ``recursive`` includes every definition the design references.
        """
        suffix = "sbol" if recursive else "sbolnr"
        resp = await self._request(
            "GET",
            f"{self._resolve(uri)}/{suffix}",
            headers=self._headers("text/plain"),
        )
        return resp.content

    async def add_to_collection(self, collection_uri: str, overwrite: bool, document: bytes) -> None:
        """Submit an SBOL document into an existing collection."""
        await self._request(
            "POST",
            f"{self.backend_url}/submit",
            data={
                "rootCollections": collection_uri,
                "overwrite_merge": _OVERWRITE if overwrite else _MERGE,
            },
            files={"file": ("document.xml", document, "application/xml")},
            headers=self._headers("text/plain"),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, uri: str) -> str:
        uri = uri.rstrip("/")
        if uri.startswith(self.uri_prefix):
            return self.backend_url + uri[len(self.uri_prefix):]
        return uri

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {"Accept": accept}
        if self.user:
            headers["X-authorization"] = self.user
        return headers

    async def _get_metadata(self, url: str, params: dict | None = None) -> list[IdentifiedMetadata]:
        resp = await self._request(
            "GET", url, params=params, headers=self._headers("application/json")
        )
        try:
            data = resp.json()
        except ValueError as exc:
            raise RegistryError(f"Registry returned invalid JSON from {url}") from exc
        data = data or []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise RegistryError(f"Registry returned unexpected metadata from {url}")
        return [IdentifiedMetadata.from_json(item) for item in data]

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            resp = await self._http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise RegistryError(f"Failed to reach registry: {exc}") from exc
        _raise_for_status(resp)
        return resp


def _raise_for_status(resp: httpx.Response) -> None:
    code = resp.status_code
    if code < 400:
        return
    if code in (401, 403):
        raise PermissionDenied("Registry rejected the credentials", code)
    if code == 404:
        raise NotFound(f"Registry resource not found: {resp.request.url}", code)
    detail = resp.text.strip()[:200]
    raise RegistryError(f"Registry error {code}: {detail}" if detail else f"Registry error {code}", code)


def encode_search_query(query: SearchQuery) -> str:
    """Encode criteria the way the SynBioHub ``/search`` path expects.

    URI keys and values are wrapped in angle brackets, literals in single
    quotes. ``objectType`` is passed bare and ``name`` becomes the free-text
    part of the query.
    """
    text = ""
    path = ""
    for criteria in query.criteria:
        if criteria.key == "objectType":
            path += f"objectType={criteria.value}&"
            continue
        if criteria.key == "name":
            text = criteria.value
            continue
        key = f"<{criteria.key}>" if criteria.key.startswith("http") else criteria.key
        value = f"<{criteria.value}>" if criteria.value.startswith("http") else f"'{criteria.value}'"
        path += f"{key}={value}&"
    return quote(path + text, safe="")


async def list_registries(
    url: str = DEFAULT_WOR_URL,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RegistryInstance]:
    """List SynBioHub instances from the Web of Registries."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            resp = await client.get(url, headers={"Accept": "application/json"})
        except httpx.RequestError as exc:
            raise RegistryError(f"Failed to reach registry index: {exc}") from exc
        _raise_for_status(resp)
        try:
            data = resp.json()
        except ValueError as exc:
            raise RegistryError("Registry index returned invalid JSON") from exc
    data = data or []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise RegistryError("Registry index returned an unexpected listing")
    return [RegistryInstance.from_json(item) for item in data]
