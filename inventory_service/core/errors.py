from __future__ import annotations


class ApiError(Exception):
    """Handler-level failure rendered as ``{"error": message}`` with ``status_code``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UploadRejected(Exception):
    """An uploaded file failed the image/size filter. Always a client error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
