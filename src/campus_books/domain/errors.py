"""Business failures raised by the domain and use cases.

None of these know about HTTP. The entrypoint layer maps ``error_code`` to a
status code, and the client maps status codes back to these classes, so a
failure looks the same on both sides of the wire.
"""

from typing import Any


class DomainError(Exception):
    """Root of the marketplace error hierarchy.

    ``message`` is safe to show to a user; ``context`` carries structured
    details (resource names, identifiers) for logs and error bodies.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Flatten message, code and context into one mapping."""
        return {"message": self.message, "code": self.error_code, **self.context}


class ValidationError(DomainError):
    """Input the caller has to fix before retrying.

    Raised for bad search paging, mistyped filter values and every rejected
    create-listing field. ``errors`` holds one entry per failed field:

        {"field": "price", "message": "Must be a number", "code": "INVALID_NUMBER"}

    REST: 400 Bad Request.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None = errors or None
        default = "Validation failed" if self.errors else "Validation error"
        super().__init__(message or default, **context)

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed, in reporting order."""
        return [error["field"] for error in self.errors or []]

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.errors:
            result["errors"] = self.errors
        return result


class NotFoundError(DomainError):
    """A listing (or other resource) that does not exist.

    REST: 404 Not Found.
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class UnauthorizedError(DomainError):
    """No session, a stale session, or bad login credentials.

    REST: 401 Unauthorized.
    """

    error_code: str = "UNAUTHORIZED"


class InternalError(DomainError):
    """Something failed on our side; logged with its traceback.

    REST: 500 Internal Server Error.
    """

    error_code: str = "INTERNAL_ERROR"


class PersistenceError(InternalError):
    """Underlying storage failure.

    The message is safe to show to callers; the original exception is
    chained (``raise ... from exc``) and logged, never serialized.
    """

    def __init__(self, message: str = "A storage error occurred", **context: Any) -> None:
        super().__init__(message, **context)
