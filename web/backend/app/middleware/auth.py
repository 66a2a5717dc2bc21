"""Auth middleware -- FastAPI dependency for the request credential.

The ``Authorization`` header carries either ``email:password`` (for
``/login``) or a registry user token. A missing header is anonymous;
endpoints that need an identity check for that themselves.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header

from partgate.auth import Credential, parse_credential


async def get_credential(
    authorization: Optional[str] = Header(None),
) -> Credential:
    """FastAPI dependency that parses the ``Authorization`` header."""
    return parse_credential(authorization)
