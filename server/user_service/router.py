"""Route table: the single /user path, dispatched on HTTP method."""

from typing import Awaitable, Callable, Dict

from fastapi import APIRouter, Request
from starlette.responses import Response

from .errors import MethodError
from .handlers import create_user, get_user


router = APIRouter(tags=["users"])

USER_HANDLERS: Dict[str, Callable[[Request], Awaitable[Response]]] = {
    "GET": get_user,
    "POST": create_user,
}


async def user_resource(request: Request) -> Response:
    handler = USER_HANDLERS.get(request.method)
    if handler is None:
        raise MethodError(allow=", ".join(USER_HANDLERS))
    return await handler(request)


# No method list: every method, extension methods included, reaches user_resource
router.add_route("/user", user_resource, include_in_schema=False)
