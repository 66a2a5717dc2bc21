"""Registry data models — metadata records and registry instances."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class IdentifiedMetadata:
    """Uniform metadata record for a collection, component, or module."""

    uri: str
    name: str = ""
    display_id: str = ""
    version: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, data: dict) -> IdentifiedMetadata:
        return cls(
            uri=data.get("uri", ""),
            name=data.get("name") or "",
            display_id=data.get("displayId") or "",
            version=data.get("version") or "",
            description=data.get("description") or "",
        )

    @property
    def is_public(self) -> bool:
        """True for records in the registry's public namespace."""
        return "/public/" in self.uri


@dataclass
class RegistryInstance:
    """One SynBioHub instance listed by the Web of Registries."""

    instance_url: str
    uri_prefix: str = ""
    name: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, data: dict) -> RegistryInstance:
        return cls(
            instance_url=data.get("instanceUrl", ""),
            uri_prefix=data.get("uriPrefix", ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
        )
