"""
Handlers for the /user resource.

Each handler enforces its own HTTP method so it stays correct even when
mounted outside the method-dispatching router.
"""

from fastapi import Request
from starlette.responses import Response

from .errors import MethodError
from .models import CreatedResponse, UserResponse
from .responses import write_json
from .validators import NameSource, first_value, parse_user_id, resolve_name


async def get_user(request: Request) -> Response:
    """Echo back the user id from ``?id=``. There is no backing store."""
    if request.method != "GET":
        raise MethodError(allow="GET")
    
    user_id = parse_user_id(first_value(request.query_params, "id"))
    return write_json(200, UserResponse(user_id=user_id))


async def create_user(request: Request) -> Response:
    """
    Create a user from a name in the JSON body, form body or query string.
    
    The body is read once; the extractors share it through ``NameSource``.
    Responds 201 with the trimmed name, or 400 if no source yields one.
    """
    if request.method != "POST":
        raise MethodError(allow="POST")
    
    source = NameSource(
        method=request.method,
        path=request.url.path,
        body=await request.body(),
        content_type=request.headers.get("Content-Type", ""),
        query_params=request.query_params,
    )
    name = resolve_name(source)
    return write_json(201, CreatedResponse(created=name))
