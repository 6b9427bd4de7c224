# azclients/core/domain/preconditions.py
from enum import Enum
from typing import Optional

from azclients.core.domain.exceptions import ArgumentError

# --- Enums ---

class IfMatchPrecondition(str, Enum):
    """Condition under which a single-entity write or delete is applied."""
    IF_MATCH = "ifMatch"                            # Only if the service ETag equals ours
    UNCONDITIONAL_IF_MATCH = "unconditionalIfMatch" # If-Match: *, regardless of the service version
    UNCONDITIONAL = "unconditional"                 # No If-Match header; required to create

class BulkIfMatchPrecondition(str, Enum):
    """Condition on which each operation in a bulk operation will execute."""
    UNCONDITIONAL = "unconditional"
    IF_MATCH = "ifMatch"

# --- Header composition ---

WILDCARD_ETAG = "*"


def quote_etag(etag: str) -> str:
    """Wrap an ETag in double quotes unless it already is."""
    if len(etag) > 1 and etag[0] == '"' and etag[-1] == '"':
        return etag
    return f'"{etag}"'


def get_if_match_header_value(precondition: IfMatchPrecondition, etag: Optional[str]) -> Optional[str]:
    """
    Compute the If-Match header for a single-entity write.

    ``UNCONDITIONAL`` sends no header (``None``), ``UNCONDITIONAL_IF_MATCH``
    sends the wildcard, and ``IF_MATCH`` needs the caller's last-known ETag.
    """
    precondition = IfMatchPrecondition(precondition)
    if precondition == IfMatchPrecondition.UNCONDITIONAL:
        return None
    if precondition == IfMatchPrecondition.UNCONDITIONAL_IF_MATCH:
        return WILDCARD_ETAG
    if etag is None or not str(etag).strip():
        raise ArgumentError("etag", "an ETag is required when the precondition is IF_MATCH")
    return quote_etag(str(etag))
