"""
Greeting handlers.

Each handler has the `HttpRequestHandler` shape (request in, response
out) and returns a small text/html page.
"""

from html import escape

from starlette.requests import Request
from starlette.responses import HTMLResponse, Response

from flowrouter.flow import path_variables, query_variables


def get_hello(request: Request) -> Response:
    return HTMLResponse("<h1>Hello World from FastAPI 101!</h1>")


def get_hello_name(request: Request) -> Response:
    """Greets `{name}` from the path and the `{?age}` query variable."""
    name = path_variables(request).get("name", "unknown user")
    age = query_variables(request).get("age")
    if age is None:
        age = "unknown"

    return HTMLResponse(f"<h1>Hello {escape(str(name))}, your age is {escape(age)}!</h1>")


def get_hello_from_sub_router(request: Request) -> Response:
    return HTMLResponse("<h1>Hello World from Mr. Subrouter!</h1>")
