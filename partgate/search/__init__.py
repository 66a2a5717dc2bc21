"""Search — query building and strategy dispatch against the registry.

- Query Builder: raw HTTP parameters -> validated ``ListingRequest``
- Dispatcher: ``ListingRequest`` -> registry calls -> ``IdentifiedMetadata`` list
"""

from partgate.search.dispatcher import build_module_query, dispatch, list_my_collections
from partgate.search.models import ListingRequest, Mode, SearchCriteria, SearchFilter, SearchQuery
from partgate.search.query_builder import build_listing_request, parse_identifier

__all__ = [
    "ListingRequest",
    "Mode",
    "SearchCriteria",
    "SearchFilter",
    "SearchQuery",
    "build_listing_request",
    "build_module_query",
    "dispatch",
    "list_my_collections",
    "parse_identifier",
]
