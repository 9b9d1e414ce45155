"""Signature utilities for the PayHere checkout and notification hashes.

PayHere signs with a chained MD5: the payload fields are concatenated and
the uppercase MD5 of the merchant secret is appended before hashing again.
"""

import hashlib
import hmac


def md5_upper(value: str) -> str:
    """Return the uppercase hex MD5 digest of a UTF-8 string."""
    return hashlib.md5(value.encode("utf-8")).hexdigest().upper()


def chained_signature(*fields: str, secret: str) -> str:
    """Sign ``fields`` in order, followed by the hashed secret.

    Formatting of each field (e.g. two decimal places for amounts) must match
    the gateway byte-for-byte.
    """
    return md5_upper("".join(fields) + md5_upper(secret))


def signatures_match(expected: str, received: str | None) -> bool:
    """Compare two digests. An empty or missing signature never matches."""
    if not received:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8"))
