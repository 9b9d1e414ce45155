"""Core utilities and security modules."""

from app.core.exceptions import (
    AppException,
    InternalError,
    SignatureMismatch,
    ValidationError,
)
from app.core.security import (
    chained_signature,
    md5_upper,
    signatures_match,
)

__all__ = [
    "AppException",
    "InternalError",
    "SignatureMismatch",
    "ValidationError",
    "chained_signature",
    "md5_upper",
    "signatures_match",
]
