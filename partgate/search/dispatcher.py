"""Search Dispatcher — runs a listing request with the strategy its mode names.

Each strategy takes an authenticated client and the request's filter and
returns registry metadata in the order the registry produced it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from partgate.errors import BadRequest
from partgate.registry.models import IdentifiedMetadata
from partgate.search.models import ListingRequest, Mode, SearchFilter, SearchQuery

if TYPE_CHECKING:
    from partgate.registry.client import RegistryClient

logger = logging.getLogger(__name__)

MODULE_OBJECT_TYPE = "ModuleDefinition"

Strategy = Callable[["RegistryClient", SearchFilter], Awaitable[list[IdentifiedMetadata]]]


def build_module_query(search_filter: SearchFilter) -> SearchQuery:
    """Build the criteria query for a module search.

    One ``objectType`` criterion, then one criterion per role, type and
    collection identifier, in that order.
    """
    query = SearchQuery()
    query.add_criteria("objectType", MODULE_OBJECT_TYPE)
    for uri in search_filter.sorted_roles():
        query.add_criteria("role", uri)
    for uri in search_filter.sorted_types():
        query.add_criteria("type", uri)
    for uri in search_filter.sorted_collections():
        query.add_criteria("collection", uri)
    return query


def _require_collection(search_filter: SearchFilter, mode: Mode) -> None:
    if not search_filter.collections:
        raise BadRequest(f"collection is required for mode '{mode.value}'")


async def _search_collections(
    client: RegistryClient, search_filter: SearchFilter
) -> list[IdentifiedMetadata]:
    # Only one collection is ever consulted, even if the filter holds more.
    collection = search_filter.first_collection()
    if collection is None:
        return await client.get_root_collection_metadata()
    return await client.get_sub_collection_metadata(collection)


async def _search_components(
    client: RegistryClient, search_filter: SearchFilter
) -> list[IdentifiedMetadata]:
    return await client.get_matching_component_metadata(
        roles=search_filter.sorted_roles(),
        types=search_filter.sorted_types(),
        collections=search_filter.sorted_collections(),
    )


async def _search_modules(
    client: RegistryClient, search_filter: SearchFilter
) -> list[IdentifiedMetadata]:
    return await client.search(build_module_query(search_filter))


STRATEGIES: dict[Mode, Strategy] = {
    Mode.collections: _search_collections,
    Mode.components: _search_components,
    Mode.modules: _search_modules,
}

_NEEDS_COLLECTION = frozenset({Mode.components, Mode.modules})


def check_request(request: ListingRequest) -> None:
    """Raise ``BadRequest`` for requests the registry cannot serve."""
    if request.mode in _NEEDS_COLLECTION:
        _require_collection(request.filter, request.mode)


async def dispatch(client: RegistryClient, request: ListingRequest) -> list[IdentifiedMetadata]:
    """Run *request* and return the registry's records unchanged in order."""
    check_request(request)
    logger.info(
        "Listing %s (roles=%d, types=%d, collections=%d)",
        request.mode.value,
        len(request.filter.roles),
        len(request.filter.types),
        len(request.filter.collections),
    )
    strategy = STRATEGIES[request.mode]
    return list(await strategy(client, request.filter))


def exclude_public(records: list[IdentifiedMetadata]) -> list[IdentifiedMetadata]:
    """Drop records in the public namespace."""
    return [r for r in records if not r.is_public]


async def list_my_collections(client: RegistryClient) -> list[IdentifiedMetadata]:
    """Root collections owned by the authenticated user, public ones removed."""
    return exclude_public(await client.get_root_collection_metadata())
