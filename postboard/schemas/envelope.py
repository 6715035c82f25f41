"""
PostBoard Backend — Response Envelope Schemas
===============================================

What:  The single response shape shared by every JSON endpoint.
How:   `Envelope[T]` documents success bodies in OpenAPI; `ErrorEnvelope`
       documents failures. Route handlers build the actual responses
       through `postboard.responses.envelope()`.

Shape:
    {
        "data": <payload or null>,
        "message": "Show post",
        "statusCode": 200
    }

`statusCode` always mirrors the HTTP status line. Validation failures add
an `errors` map of field name → list of messages.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Successful response wrapper."""

    data: Optional[T] = Field(default=None, description="Operation payload")
    message: str = Field(description="Human-readable outcome")
    statusCode: int = Field(description="Mirror of the HTTP status code")


class ErrorEnvelope(BaseModel):
    """
    Error response wrapper.

    Example:
        {
            "data": null,
            "message": "Validation failed",
            "statusCode": 422,
            "errors": {"title": ["Field required"]}
        }
    """

    data: None = None
    message: str = Field(description="Human-readable error description")
    statusCode: int = Field(description="Mirror of the HTTP status code")
    errors: Optional[Dict[str, List[str]]] = Field(
        default=None,
        description="Field-level messages, present on 422 responses only",
    )
