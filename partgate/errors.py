"""Error kinds raised by the gateway and its collaborators."""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class BadRequest(GatewayError):
    """Missing or invalid input, detected before any network call."""

    status_code = 400


class AuthRequired(GatewayError):
    """The operation needs an identity but the request carried none."""

    status_code = 401


class Unauthorized(GatewayError):
    """The registry rejected the supplied credentials."""

    status_code = 401


class UpstreamFailure(GatewayError):
    """A registry or converter call failed."""

    status_code = 500


# ---------------------------------------------------------------------------
# Collaborator errors
# ---------------------------------------------------------------------------


class UnknownVocabularyTerm(LookupError):
    """A role or type name is not in the vocabulary tables."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Unknown {kind} '{name}'")
        self.kind = kind
        self.name = name


class RegistryError(Exception):
    """The registry returned an error or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PermissionDenied(RegistryError):
    """The registry refused the request (HTTP 401/403)."""


class NotFound(RegistryError):
    """The registry has no such resource (HTTP 404)."""


class ConversionError(Exception):
    """A document could not be converted between formats."""
