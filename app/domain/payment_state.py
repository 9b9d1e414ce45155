"""PayHere payment status codes."""

from enum import Enum


class PayHereStatus(str, Enum):
    """Status codes reported in PayHere notifications."""

    SUCCESS = "2"
    PENDING = "0"
    CANCELED = "-1"
    FAILED = "-2"
    CHARGEDBACK = "-3"


def is_success(status_code: str | None) -> bool:
    return status_code == PayHereStatus.SUCCESS.value


def describe_status(status_code: str | None) -> str:
    """Human-readable name for a status code, ``unknown`` if unrecognised."""
    try:
        return PayHereStatus(status_code).name.lower()
    except ValueError:
        return "unknown"
