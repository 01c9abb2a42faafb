"""
Credential resolution for Zoom OAuth grants.

Request-supplied values win over process-wide configuration field by field.
Nothing here performs I/O.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import MissingCredentialsError


@dataclass(frozen=True)
class CredentialSet:
    """
    Effective credentials for a single grant exchange.

    Attributes:
        client_id: Zoom app client ID
        client_secret: Zoom app client secret
        account_id: Zoom account ID (Server-to-Server apps only)
    """

    client_id: str
    client_secret: str
    account_id: Optional[str] = None


def first_present(*values: Optional[str]) -> str:
    """Return the first value that is neither None nor empty, else ''."""
    for value in values:
        if value:
            return str(value)
    return ""


def merge_fields(
    requested: Mapping[str, Optional[str]], fallback: Mapping[str, Optional[str]]
) -> dict[str, str]:
    """
    Merge two field mappings, preferring non-empty requested values.

    Args:
        requested: Values supplied with the request (may be missing or empty)
        fallback: Values from process configuration

    Returns:
        Dict with every key from either mapping; absent values become ''
    """
    keys = list(dict.fromkeys([*requested.keys(), *fallback.keys()]))
    return {key: first_present(requested.get(key), fallback.get(key)) for key in keys}


def resolve_s2s_credentials(
    requested: Mapping[str, Optional[str]], fallback: Mapping[str, Optional[str]]
) -> CredentialSet:
    """
    Resolve the Server-to-Server credential triple.

    Args:
        requested: Dict with optional client_id, client_secret, account_id
        fallback: Same keys taken from configuration

    Returns:
        CredentialSet with all three fields populated

    Raises:
        MissingCredentialsError: If any field is still empty after merging
    """
    merged = merge_fields(requested, fallback)
    client_id = merged.get("client_id", "")
    client_secret = merged.get("client_secret", "")
    account_id = merged.get("account_id", "")

    if not client_id or not client_secret or not account_id:
        raise MissingCredentialsError(
            "Missing Zoom S2S credentials (clientId, clientSecret, accountId). "
            "Provide in body or environment."
        )

    return CredentialSet(
        client_id=client_id, client_secret=client_secret, account_id=account_id
    )


def mask_identifier(value: Optional[str]) -> str:
    """Mask an identifier for logging, keeping the first four characters."""
    if not value:
        return "unknown"
    return f"{value[:4]}***"
