"""Custom application exceptions."""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception.

    Rendered by the application as ``{"error": detail}``.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ValidationError(AppException):
    """Missing or malformed client input."""

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class SignatureMismatch(AppException):
    """Gateway notification failed signature verification."""

    def __init__(self, detail: str = "Invalid signature") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InternalError(AppException):
    """Unexpected failure. Details stay in the server log."""

    def __init__(self, detail: str = "An unexpected error occurred") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
