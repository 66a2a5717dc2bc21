"""Read-only vocabulary tables and the role/type resolvers.

Roles resolve through two tables: the primary ``roles`` table, then the
``refinements`` table of more specific terms. A name present in both
always resolves to its primary entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml

from partgate.errors import UnknownVocabularyTerm

TERMS_FILE = Path(__file__).with_name("terms.yaml")


class Vocabulary:
    """Immutable name -> identifier tables."""

    def __init__(
        self,
        roles: Mapping[str, str],
        refinements: Mapping[str, str],
        types: Mapping[str, str],
    ):
        self._roles = MappingProxyType(dict(roles))
        self._refinements = MappingProxyType(dict(refinements))
        self._types = MappingProxyType(dict(types))

    @property
    def roles(self) -> Mapping[str, str]:
        return self._roles

    @property
    def refinements(self) -> Mapping[str, str]:
        return self._refinements

    @property
    def types(self) -> Mapping[str, str]:
        return self._types

    def resolve_role(self, name: str) -> str:
        """Return the identifier for a role or role refinement."""
        if name in self._roles:
            return self._roles[name]
        if name in self._refinements:
            return self._refinements[name]
        raise UnknownVocabularyTerm("role", name)

    def resolve_type(self, name: str) -> str:
        """Return the identifier for a molecule type."""
        try:
            return self._types[name]
        except KeyError:
            raise UnknownVocabularyTerm("type", name) from None


def load_vocabulary(path: str | Path = TERMS_FILE) -> Vocabulary:
    """Load vocabulary tables from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return Vocabulary(
        roles=data.get("roles", {}),
        refinements=data.get("refinements", {}),
        types=data.get("types", {}),
    )


@lru_cache(maxsize=1)
def default_vocabulary() -> Vocabulary:
    """The packaged vocabulary, loaded once per process."""
    return load_vocabulary()
