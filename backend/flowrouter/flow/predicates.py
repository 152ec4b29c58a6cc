"""
Composable request predicates.

The helper functions in `flowrouter.flow.request` read well in `if` chains.
Predicates are the same checks as values, so whole routing tables can be
written as expressions:

    match_hello = uri("/api/v10/hello") & method(GET) & media(APPLICATION_JSON)

    return when(
        request,
        (match_hello, get_hello),
        (uri("/api/v10/hello/{name}") & method(GET), get_hello_name),
        otherwise=self.return_404,
    )

`&` and `|` short-circuit, so `uri(...)` is evaluated first and the more
expensive checks only run for matching paths.
"""

from typing import Callable, Tuple, TypeVar, Union

from starlette.requests import Request

from flowrouter.flow.request import media_is, method_is, uri_matches

T = TypeVar("T")


class RequestPredicate:
    """A named `request -> bool` check supporting `&`, `|` and `~`."""

    def __init__(self, check: Callable[[Request], bool], description: str = "predicate"):
        self._check = check
        self.description = description

    def __call__(self, request: Request) -> bool:
        return bool(self._check(request))

    def __and__(self, other: "RequestPredicate") -> "RequestPredicate":
        return RequestPredicate(
            lambda request: self(request) and other(request),
            f"({self.description} and {other.description})",
        )

    def __or__(self, other: "RequestPredicate") -> "RequestPredicate":
        return RequestPredicate(
            lambda request: self(request) or other(request),
            f"({self.description} or {other.description})",
        )

    def __invert__(self) -> "RequestPredicate":
        return RequestPredicate(lambda request: not self(request), f"not {self.description}")

    def __repr__(self) -> str:
        return f"<RequestPredicate {self.description}>"


def uri(template: str) -> RequestPredicate:
    return RequestPredicate(lambda request: uri_matches(request, template), f"uri {template}")


def method(verb: str) -> RequestPredicate:
    return RequestPredicate(lambda request: method_is(request, verb), f"method {verb.upper()}")


def media(media_type: str) -> RequestPredicate:
    return RequestPredicate(lambda request: media_is(request, media_type), f"media {media_type}")


Condition = Union[bool, RequestPredicate]


def when(request: Request, *branches: Tuple[Condition, T], otherwise: T) -> T:
    """
    Pick the value of the first branch whose condition holds, top to bottom.

    A condition is either an already evaluated bool or a predicate that is
    evaluated against `request` lazily, in order.
    """
    for condition, value in branches:
        if isinstance(condition, RequestPredicate):
            if condition(request):
                return value
        elif condition:
            return value
    return otherwise
