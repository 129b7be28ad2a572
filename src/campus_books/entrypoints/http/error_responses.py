"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "price",
                "message": "Must be greater than or equal to 0",
                "code": "NEGATIVE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "error": "Listing with identifier '...' not found",
                "detail": "Listing with identifier '...' not found",
                "code": "NOT_FOUND"
            }

        Validation error with multiple fields:
            {
                "error": "Validation failed",
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "book_title", "message": "This field is required", "code": "REQUIRED"},
                    {"field": "images", "message": "At least one image is required", "code": "REQUIRED"}
                ]
            }
    """

    error: str
    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error": "Not logged in", "detail": "Not logged in", "code": "UNAUTHORIZED"},
                {
                    "error": "Validation failed",
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "book_title",
                            "message": "This field is required",
                            "code": "REQUIRED",
                        },
                        {
                            "field": "images",
                            "message": "At least one image is required",
                            "code": "REQUIRED",
                        },
                    ],
                },
            ]
        }
    )


ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    401: {"model": ErrorResponse, "description": "Not logged in"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Storage or unexpected error"},
}
