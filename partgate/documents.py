"""Login and document flows that bypass the search dispatcher."""

from __future__ import annotations

import logging

from partgate.auth.credentials import Credential, PasswordCredential
from partgate.convert.converter import DocumentConverter
from partgate.errors import BadRequest, PermissionDenied, Unauthorized
from partgate.registry.client import RegistryClient

logger = logging.getLogger(__name__)


async def login(client: RegistryClient, credential: Credential) -> str:
    """Exchange an email/password credential for a registry user token."""
    if not isinstance(credential, PasswordCredential) or not credential.email or not credential.secret:
        raise BadRequest("email and password are required")
    try:
        token = await client.login(credential.email, credential.secret)
    except PermissionDenied as exc:
        raise Unauthorized("Invalid email or password") from exc
    logger.info("Login succeeded on %s", client.backend_url)
    return token


async def fetch_document(client: RegistryClient, converter: DocumentConverter, uri: str) -> bytes:
    """Download a design with everything it references, as a graph document."""
    sbol = await client.get_sbol(uri, recursive=True)
    return converter.to_graph(sbol)


async def upload_document(
    client: RegistryClient,
    converter: DocumentConverter,
    collection_uri: str,
    name: str,
    graph: bytes,
) -> None:
    """Convert a graph document and submit it into a collection, overwriting."""
    sbol = converter.to_sbol(graph, name)
    await client.add_to_collection(collection_uri, True, sbol)
    logger.info("Submitted '%s' to %s", name, collection_uri)
