"""Credential variants and the header parser.

The canvas sends one of two shapes in the ``Authorization`` header:

1. ``email:password`` -- used once, to log in
2. ``<token>`` -- the registry user token returned by a previous login

A missing header means the request is anonymous.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from partgate.errors import AuthRequired

SEPARATOR = ":"


@dataclass(frozen=True)
class Anonymous:
    """No identity was supplied."""


@dataclass(frozen=True)
class TokenCredential:
    """An opaque registry user token."""

    token: str = field(repr=False)


@dataclass(frozen=True)
class PasswordCredential:
    """An email/password pair."""

    email: str
    secret: str = field(repr=False)


Credential = Union[Anonymous, TokenCredential, PasswordCredential]


def parse_credential(header: str | None) -> Credential:
    """Parse a raw ``Authorization`` header value.

    Values that split into two or more segments on ``:`` are read as
    ``email:secret``; anything after the second segment is discarded.
    Trailing empty segments do not count, so ``"abc:"`` is a token.
    """
    if header is None or not header.strip():
        return Anonymous()

    parts = header.split(SEPARATOR)
    while parts and parts[-1] == "":
        parts.pop()

    if len(parts) > 1:
        return PasswordCredential(email=parts[0], secret=parts[1])
    return TokenCredential(token=header)


def require_identity(credential: Credential) -> Credential:
    """Return *credential* unchanged, or raise ``AuthRequired`` if anonymous."""
    if isinstance(credential, Anonymous):
        raise AuthRequired("This operation requires a registry login")
    return credential
