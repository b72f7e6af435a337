"""
JSON response writing.

All bodies are compact JSON with HTML-unsafe characters escaped and a
trailing newline. If a value cannot be encoded the caller gets a fixed
500 body instead of a partial one.
"""

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from pydantic import BaseModel
from starlette.responses import JSONResponse, Response

from .errors import SerializationError, ServiceError
from .models import ErrorResponse


logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"

# Fixed last-resort body, never passed through the encoder
INTERNAL_ERROR_BODY = b'{"error":"internal error"}\n'

_HTML_ESCAPES = {
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    ord("&"): "\\u0026",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


def escape_html(text: str) -> str:
    """Escape characters that are unsafe to embed JSON inside HTML."""
    return text.translate(_HTML_ESCAPES)


class EscapedJSONResponse(JSONResponse):
    """JSONResponse that escapes HTML-unsafe characters in the encoded body."""
    media_type = JSON_MEDIA_TYPE

    def render(self, content: Any) -> bytes:
        try:
            text = json.dumps(
                content,
                ensure_ascii=False,
                allow_nan=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError) as e:
            raise SerializationError() from e
        return (escape_html(text) + "\n").encode("utf-8")


def write_json(
    status_code: int,
    content: Any,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """
    Serialize ``content`` and build a JSON response with ``status_code``.
    
    Pydantic models are dumped to plain dicts first. On encoding failure
    the headers and status are discarded and a fixed 500 body is returned.
    """
    if isinstance(content, BaseModel):
        content = content.model_dump()
    try:
        return EscapedJSONResponse(content, status_code=status_code, headers=headers)
    except SerializationError:
        logger.exception(f"Failed to encode response body (status={status_code})")
        return Response(
            content=INTERNAL_ERROR_BODY,
            status_code=SerializationError.status_code,
            media_type=JSON_MEDIA_TYPE,
        )


def error_response(
    status_code: int,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    return write_json(status_code, ErrorResponse(error=message), headers=headers)


async def service_error_handler(request: Request, exc: ServiceError) -> Response:
    return error_response(exc.status_code, exc.message, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every ServiceError as ``{"error": ...}`` with its status code."""
    app.add_exception_handler(ServiceError, service_error_handler)
