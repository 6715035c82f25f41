"""
PostBoard Backend — Envelope Response Builders
================================================

What:  Builds every JSON response the API sends.
How:   `envelope()` wraps a payload as {data, message, statusCode} and
       mirrors statusCode into the HTTP status line. `error_envelope()` does
       the same for failures, with `errors` added on validation responses.
Who:   Route handlers, global exception handlers, and the rate-limit
       middleware.
"""

from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(
    data: Any,
    message: str,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Successful response. `data` may be a pydantic model, list, dict or None."""
    return JSONResponse(
        status_code=status_code,
        content={
            "data": jsonable_encoder(data),
            "message": message,
            "statusCode": status_code,
        },
        headers=headers,
    )


def error_envelope(
    message: str,
    status_code: int,
    errors: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Error response; `data` is always null."""
    content: Dict[str, Any] = {
        "data": None,
        "message": message,
        "statusCode": status_code,
    }
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)
