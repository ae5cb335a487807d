"""
Plisio callback signature.

The gateway signs a callback with HMAC-SHA1 (keyed by the account secret)
over every field except ``verify_hash``, sorted by key and joined as
``key=value&key=value``. Values are rendered the way the gateway's own
reference code interpolates them into a string.
"""
import hashlib
import hmac
from typing import Any, Mapping, Optional

SIGNATURE_FIELD = "verify_hash"


def _render(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def canonical_string(payload: Mapping[str, Any]) -> str:
    """Build the string that is signed."""
    return "&".join(
        f"{key}={_render(payload[key])}"
        for key in sorted(payload)
        if key != SIGNATURE_FIELD
    )


def compute_signature(payload: Mapping[str, Any], secret: str) -> str:
    """Hex HMAC-SHA1 of the canonical string."""
    return hmac.new(
        secret.encode("utf-8"),
        canonical_string(payload).encode("utf-8"),
        hashlib.sha1,
    ).hexdigest()


def verify_signature(payload: Mapping[str, Any], signature: Optional[str], secret: str) -> bool:
    """
    Constant-time check of a provided signature.

    Args:
        payload: Callback fields as received
        signature: Signature from the header or the payload's ``verify_hash``
        secret: Shared secret key

    Returns:
        False when the signature is missing or does not match
    """
    if not signature or not secret:
        return False
    expected = compute_signature(payload, secret)
    return hmac.compare_digest(expected, signature.strip().lower())
