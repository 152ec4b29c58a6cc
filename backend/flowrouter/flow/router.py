"""
Flow routers: one catch-all controller, one routing function.

FastAPI normally wants one decorated path operation per route. A flow
router instead registers a single catch-all route for every supported verb
and hands each request to `routing()`, which returns the handler to run:

    @flow
    class ApplicationRouter(HttpRouter):
        def routing(self, request):
            if uri_matches(request, "/api/v10/hello") and method_is(request, GET):
                return get_hello
            return self.return_404

    app.include_router(ApplicationRouter().as_api_router())

Request lifecycle inside `handle()`:

    pre_routing(request) → routing(request) → pre_handling(handler)
        → handler(request) → post_routing(response)
"""

import inspect
import logging
from typing import Awaitable, Callable, Optional, Type, TypeVar, Union, overload

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import Response

from flowrouter.flow.request import not_implemented

logger = logging.getLogger(__name__)

# A handler may be a plain function or a coroutine function
HttpRequestHandler = Callable[[Request], Union[Response, Awaitable[Response]]]

# ── HTTP verbs ────────────────────────────────────────────────────────────
GET = "GET"
PUT = "PUT"
POST = "POST"
DELETE = "DELETE"
PATCH = "PATCH"

SUPPORTED_METHODS = (GET, PUT, POST, DELETE, PATCH)

# ── Media types ───────────────────────────────────────────────────────────
APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"
ALL = "*/*"

DEFAULT_FLOW_PATH = "/{path:path}"

FLOW_PATH_ATTRIBUTE = "__flow_path__"


class HttpRouter:
    """
    Kitchen-sink controller forwarding every request to `routing()`.

    Subclasses MUST override `routing()`. The hooks `pre_routing`,
    `pre_handling`, `post_routing` and `return_404` are optional overrides.
    `handle()` and `as_api_router()` are not meant to be overridden.
    """

    def routing(self, request: Request) -> HttpRequestHandler:
        """Return the handler for `request`. By default everything is 404."""
        return self.return_404

    def pre_routing(self, request: Request) -> Request:
        """Manipulate requests before they reach `routing()`."""
        return request

    def pre_handling(self, handler: HttpRequestHandler) -> HttpRequestHandler:
        """Wrap or replace the handler chosen by `routing()` before it runs."""
        return handler

    def post_routing(self, response: Response) -> Response:
        """Manipulate responses after the handler produced them."""
        return response

    def return_404(self, request: Request) -> Response:
        """Fallback for requests no rule accepted."""
        return not_implemented(request)

    async def handle(self, request: Request) -> Response:
        request = self.pre_routing(request)

        handler = self.pre_handling(self.routing(request))
        logger.debug(
            "%s %s routed to %s",
            request.method,
            request.url.path,
            getattr(handler, "__qualname__", repr(handler)),
        )

        response = handler(request)
        if inspect.isawaitable(response):
            response = await response

        return self.post_routing(response)

    def as_api_router(self) -> APIRouter:
        """Build the FastAPI router holding this flow's single catch-all route."""
        path = flow_path(type(self))
        if path is None:
            raise TypeError(
                f"{type(self).__name__} is not a flow router; decorate it with @flow"
            )

        router = APIRouter()
        router.add_api_route(
            path,
            self.handle,
            methods=list(SUPPORTED_METHODS),
            include_in_schema=False,
            name=type(self).__name__,
        )
        return router


RouterT = TypeVar("RouterT", bound=Type[HttpRouter])


def flow_path(router_cls: Type[HttpRouter]) -> Optional[str]:
    """Catch-all path of a class decorated with @flow (not inherited), else None."""
    return vars(router_cls).get(FLOW_PATH_ATTRIBUTE)


@overload
def flow(cls: RouterT) -> RouterT: ...


@overload
def flow(*, path: str = DEFAULT_FLOW_PATH) -> Callable[[RouterT], RouterT]: ...


def flow(cls=None, *, path=DEFAULT_FLOW_PATH):
    """
    Mark an HttpRouter subclass as a catch-all flow controller.

    Usable bare (`@flow`) or with a custom mount path
    (`@flow(path="/api/{rest:path}")`). The marker is not inherited:
    every concrete router has to be decorated itself.
    """

    def decorate(router_cls):
        if not (isinstance(router_cls, type) and issubclass(router_cls, HttpRouter)):
            raise TypeError(f"@flow can only decorate HttpRouter subclasses, got {router_cls!r}")
        setattr(router_cls, FLOW_PATH_ATTRIBUTE, path)
        return router_cls

    if cls is None:
        return decorate
    return decorate(cls)
