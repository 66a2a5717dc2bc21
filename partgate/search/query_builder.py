"""Query Builder — turns raw ``/listRegistryParts`` parameters into a request."""

from __future__ import annotations

from urllib.parse import urlsplit

from partgate.errors import BadRequest, UnknownVocabularyTerm
from partgate.search.models import ListingRequest, Mode, SearchFilter
from partgate.vocabulary import Vocabulary, default_vocabulary


def parse_identifier(value: str) -> str:
    """Validate that *value* is an absolute URI and return it."""
    parts = urlsplit(value.strip())
    if not parts.scheme or not parts.netloc:
        raise BadRequest(f"'{value}' is not an absolute URI")
    return value.strip()


def parse_mode(value: str | None) -> Mode:
    if value is None or not value.strip():
        raise BadRequest("mode is required")
    try:
        return Mode(value.strip())
    except ValueError:
        allowed = ", ".join(m.value for m in Mode)
        raise BadRequest(f"Unknown mode '{value}' (expected one of: {allowed})") from None


def build_listing_request(
    mode: str | None,
    collection: str | None = None,
    type_: str | None = None,
    role: str | None = None,
    vocabulary: Vocabulary | None = None,
) -> ListingRequest:
    """Validate the mode and build the search filter.

    The mode is checked first so that a missing mode is reported no matter
    what else is wrong with the request. Role and type names are resolved
    through the vocabulary; the collection is taken as a URI as-is.
    """
    parsed_mode = parse_mode(mode)
    vocab = vocabulary or default_vocabulary()

    roles: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    collections: frozenset[str] = frozenset()

    try:
        if role is not None:
            roles = frozenset({vocab.resolve_role(role)})
        if type_ is not None:
            types = frozenset({vocab.resolve_type(type_)})
    except UnknownVocabularyTerm as exc:
        raise BadRequest(str(exc)) from exc

    if collection is not None:
        collections = frozenset({parse_identifier(collection)})

    return ListingRequest(
        mode=parsed_mode,
        filter=SearchFilter(roles=roles, types=types, collections=collections),
    )
