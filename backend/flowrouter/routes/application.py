"""
FlowRouter Backend - Application Router
=======================================

What:  The example flow router: every /api request of the app is routed
       here by plain boolean expressions instead of decorated endpoints.
How:   Rules are checked top to bottom, the first one that holds picks the
       handler, and anything else falls through to the "not implemented"
       response.

Rule table:
    /api/v10/hello                      GET + application/json → get_hello
    /api/v10/hello/{name}{?age}         GET                    → get_hello_name
    /api/v10/book                       GET / PUT              → BookHandler
    /api/v10/book/{id:int}              GET / PATCH / DELETE   → BookHandler
    /api/v10/uri/with/complex/management                       → complex_sub_router
"""

from starlette.requests import Request

from flowrouter.flow import (
    APPLICATION_JSON,
    DELETE,
    GET,
    PATCH,
    PUT,
    HttpRequestHandler,
    HttpRouter,
    flow,
    media,
    method,
    method_is,
    uri,
    uri_matches,
    when,
)
from flowrouter.repositories.book import BookRepository, book_repository
from flowrouter.routes.books import BookHandler
from flowrouter.routes.hello import get_hello, get_hello_from_sub_router, get_hello_name

# Predicates are reusable values; `&` short-circuits left to right
JSON_HELLO = uri("/api/v10/hello") & method(GET) & media(APPLICATION_JSON)


def complex_sub_router(request: Request) -> HttpRequestHandler:
    """
    A sub-router has the same shape as `routing()`: request in, handler out.

    Nesting `when(...)` blocks gets unreadable quickly; moving a subtree
    into its own function keeps the main table flat.
    """
    return get_hello_from_sub_router


@flow
class ApplicationRouter(HttpRouter):
    def __init__(self, book_repo: BookRepository = book_repository):
        self.book_repo = book_repo

    def routing(self, request: Request) -> HttpRequestHandler:
        if JSON_HELLO(request):
            return get_hello

        # the helper functions read just as well with plain `and`
        if uri_matches(request, "/api/v10/hello/{name}{?age}") and method_is(request, GET):
            return get_hello_name

        if uri_matches(request, "/api/v10/book"):
            books = BookHandler(self.book_repo)
            return when(
                request,
                (method(GET), books.get_books),
                (method(PUT), books.save_book),
                otherwise=self.return_404,
            )

        if uri_matches(request, "/api/v10/book/{id:int}"):
            books = BookHandler(self.book_repo)
            return when(
                request,
                (method_is(request, GET), books.get_book),
                (method_is(request, PATCH), books.update_book_title),
                (method_is(request, DELETE), books.delete_book),
                otherwise=self.return_404,
            )

        if uri_matches(request, "/api/v10/uri/with/complex/management"):
            return complex_sub_router(request)

        return self.return_404
