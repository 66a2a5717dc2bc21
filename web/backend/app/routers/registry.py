"""Registry router -- search, fetch, and contribute parts on a SynBioHub registry."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse

from partgate import documents
from partgate.auth import Credential, require_identity
from partgate.config import Settings
from partgate.convert import GRAPH_MEDIA_TYPE, DocumentConverter
from partgate.errors import (
    BadRequest,
    ConversionError,
    GatewayError,
    PermissionDenied,
    RegistryError,
    Unauthorized,
    UpstreamFailure,
)
from partgate.registry.client import RegistryClient, list_registries
from partgate.registry.models import IdentifiedMetadata
from partgate.search import build_listing_request, dispatch, list_my_collections
from partgate.search.dispatcher import check_request

from web.backend.app.dependencies import get_converter, get_gateway_settings, get_transport
from web.backend.app.middleware.auth import get_credential
from web.backend.app.models.api import ResultRecordResponse

logger = logging.getLogger("partgate.web")

router = APIRouter(tags=["registry"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _record_to_response(record: IdentifiedMetadata) -> ResultRecordResponse:
    """Convert an IdentifiedMetadata dataclass to a Pydantic response model."""
    return ResultRecordResponse(
        uri=record.uri,
        name=record.name,
        display_id=record.display_id,
        version=record.version,
        description=record.description,
    )


def _require(**params: Optional[str]) -> None:
    """Raise ``BadRequest`` naming every missing or blank parameter."""
    missing = [name for name, value in params.items() if value is None or not value.strip()]
    if missing:
        raise BadRequest(f"{', '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


def _client(server: str, settings: Settings, transport) -> RegistryClient:
    return RegistryClient(server, timeout=settings.http_timeout, transport=transport)


@contextmanager
def _upstream(action: str) -> Iterator[None]:
    """Surface registry, converter and transport failures as ``UpstreamFailure``."""
    try:
        yield
    except GatewayError:
        raise
    except (RegistryError, ConversionError, httpx.HTTPError) as exc:
        logger.warning("%s failed: %s", action, exc)
        raise UpstreamFailure(str(exc)) from exc


async def _authenticate(client: RegistryClient, credential: Credential) -> None:
    try:
        await client.authenticate(credential)
    except PermissionDenied as exc:
        raise Unauthorized("Invalid email or password") from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/registries",
    response_model=list[str],
    summary="List known registry instances",
)
async def get_registries(
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
):
    """Base URLs of the SynBioHub instances in the Web of Registries."""
    with _upstream("registries"):
        instances = await list_registries(
            settings.wor_url, timeout=settings.http_timeout, transport=transport
        )
    return [i.instance_url for i in instances]


@router.get(
    "/login",
    response_class=PlainTextResponse,
    summary="Log in to a registry",
)
async def login(
    server: Optional[str] = Query(None, description="Registry base URL"),
    credential: Credential = Depends(get_credential),
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
):
    """Exchange ``email:password`` from the Authorization header for a user token."""
    _require(server=server)
    async with _client(server, settings, transport) as client:
        with _upstream("login"):
            token = await documents.login(client, credential)
    return PlainTextResponse(token)


@router.get(
    "/listMyCollections",
    response_model=list[ResultRecordResponse],
    summary="List the caller's collections",
)
async def get_my_collections(
    server: Optional[str] = Query(None, description="Registry base URL"),
    credential: Credential = Depends(get_credential),
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
):
    """Root collections owned by the caller; public collections are excluded."""
    _require(server=server)
    require_identity(credential)
    async with _client(server, settings, transport) as client:
        with _upstream("listMyCollections"):
            await _authenticate(client, credential)
            records = await list_my_collections(client)
    return [_record_to_response(r) for r in records]


@router.get(
    "/listRegistryParts",
    response_model=list[ResultRecordResponse],
    summary="Search registry parts",
)
async def get_registry_parts(
    server: Optional[str] = Query(None, description="Registry base URL"),
    mode: Optional[str] = Query(None, description="collections | components | modules"),
    collection: Optional[str] = Query(None, description="Collection URI"),
    type_: Optional[str] = Query(None, alias="type", description="Molecule type name"),
    role: Optional[str] = Query(None, description="Role name"),
    credential: Credential = Depends(get_credential),
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
):
    """List collections, components, or modules matching the given filters."""
    listing = build_listing_request(mode, collection=collection, type_=type_, role=role)
    check_request(listing)
    _require(server=server)
    async with _client(server, settings, transport) as client:
        with _upstream("listRegistryParts"):
            await _authenticate(client, credential)
            records = await dispatch(client, listing)
    return [_record_to_response(r) for r in records]


@router.get(
    "/getRegistryPart",
    summary="Fetch a part as a graph document",
    response_class=Response,
)
async def get_registry_part(
    server: Optional[str] = Query(None, description="Registry base URL"),
    uri: Optional[str] = Query(None, description="Part URI"),
    credential: Credential = Depends(get_credential),
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
    converter: DocumentConverter = Depends(get_converter),
):
    """Download a part and everything it references, converted for the canvas."""
    _require(uri=uri, server=server)
    async with _client(server, settings, transport) as client:
        with _upstream("getRegistryPart"):
            await _authenticate(client, credential)
            content = await documents.fetch_document(client, converter, uri)
    return Response(content=content, media_type=GRAPH_MEDIA_TYPE)


@router.post(
    "/addToCollection",
    status_code=201,
    summary="Add a design to a collection",
    response_class=Response,
)
async def add_to_collection(
    request: Request,
    server: Optional[str] = Query(None, description="Registry base URL"),
    uri: Optional[str] = Query(None, description="Target collection URI"),
    name: Optional[str] = Query(None, description="Design display name"),
    credential: Credential = Depends(get_credential),
    settings: Settings = Depends(get_gateway_settings),
    transport=Depends(get_transport),
    converter: DocumentConverter = Depends(get_converter),
):
    """Convert the posted graph document to SBOL and submit it, overwriting."""
    _require(server=server, uri=uri, name=name)
    require_identity(credential)
    body = await request.body()
    if not body:
        raise BadRequest("document body is required")
    async with _client(server, settings, transport) as client:
        with _upstream("addToCollection"):
            await _authenticate(client, credential)
            await documents.upload_document(client, converter, uri, name, body)
    return Response(status_code=201)
