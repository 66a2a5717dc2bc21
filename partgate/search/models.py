"""Search data models — modes, filters, and generic criteria queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Mode(str, Enum):
    """Search strategy selected by the ``mode`` parameter."""

    collections = "collections"
    components = "components"
    modules = "modules"


@dataclass(frozen=True)
class SearchFilter:
    """Identifier sets per axis. An empty set leaves the axis unconstrained."""

    roles: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()
    collections: frozenset[str] = frozenset()

    def sorted_roles(self) -> list[str]:
        return sorted(self.roles)

    def sorted_types(self) -> list[str]:
        return sorted(self.types)

    def sorted_collections(self) -> list[str]:
        return sorted(self.collections)

    def first_collection(self) -> str | None:
        """The collection consulted by the collections strategy."""
        ordered = self.sorted_collections()
        return ordered[0] if ordered else None


@dataclass(frozen=True)
class ListingRequest:
    """A validated ``/listRegistryParts`` request."""

    mode: Mode
    filter: SearchFilter = field(default_factory=SearchFilter)


@dataclass
class SearchCriteria:
    """One key/value constraint of a criteria query."""

    key: str
    value: str


@dataclass
class SearchQuery:
    """Generic criteria query sent to the registry search endpoint."""

    criteria: list[SearchCriteria] = field(default_factory=list)
    offset: int | None = None
    limit: int | None = None

    def add_criteria(self, key: str, value: str) -> None:
        self.criteria.append(SearchCriteria(key=key, value=value))
