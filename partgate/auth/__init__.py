"""Identity resolution — turns an Authorization header into a Credential."""

from partgate.auth.credentials import (
    Anonymous,
    Credential,
    PasswordCredential,
    TokenCredential,
    parse_credential,
    require_identity,
)

__all__ = [
    "Anonymous",
    "Credential",
    "PasswordCredential",
    "TokenCredential",
    "parse_credential",
    "require_identity",
]
