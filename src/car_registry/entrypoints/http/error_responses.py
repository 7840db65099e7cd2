"""REST API error response models.

Documents the envelope every error handler emits so it shows up in OpenAPI.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Field-level error inside a validation failure."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "price",
                "message": "Must be greater than 0",
                "code": "INVALID_VALUE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Not found:
            {"detail": "Car with identifier 'abc' not found", "code": "NOT_FOUND"}

        Non-owner delete:
            {"detail": "Caller 'user-a' does not have the right to delete car 'abc'",
             "code": "FORBIDDEN"}
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Car with identifier 'abc' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "min_price",
                            "message": "Must be a valid number",
                            "code": "INVALID_NUMBER",
                        },
                    ],
                },
            ]
        }
    )
