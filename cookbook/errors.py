from typing import Any, Dict, Optional


class CookbookError(Exception):
    """Base for errors that are sent back to the caller as JSON.

    ``error`` is the short label, ``message`` the optional human readable
    detail and ``extra`` any additional fields for the response body.
    """

    status_code = 500

    def __init__(self, error: str, message: Optional[str] = None, **extra: Any):
        super().__init__(message or error)
        self.error = error
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        body.update(self.extra)
        return body


class ValidationError(CookbookError):
    status_code = 400


class NotFoundError(CookbookError):
    status_code = 404


class MethodNotAllowed(CookbookError):
    status_code = 405


class StoreError(CookbookError):
    status_code = 500
