"""
Request helpers for expression-based routing.

Plain functions over Starlette's `Request`, meant to be used inside a
router's `routing()` method and inside handlers:

    if uri_matches(request, "/api/v10/hello/{name}") and method_is(request, GET):
        return get_hello_name

`uri_matches` has one side effect: on success it records the matched
template on `request.state`, which is how `path_variables` later knows
which template to parse the path against. The last successful match wins.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from flowrouter.exceptions import ValidationError
from flowrouter.flow.template import compile_template

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# request.state attribute holding the last matched template
ROUTE_TEMPLATE_ATTRIBUTE = "flow_route_template"


def uri_matches(request: Request, template: str) -> bool:
    """True if the request path matches `template`; remembers the template on success."""
    matched = compile_template(template).match(request.url.path) is not None
    if matched:
        setattr(request.state, ROUTE_TEMPLATE_ATTRIBUTE, template)
    return matched


def method_is(request: Request, verb: str) -> bool:
    return request.method.upper() == verb.upper()


def media_type(request: Request) -> str:
    """Bare content type of the request (no parameters), or "" when absent."""
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


def media_is(request: Request, expected: str) -> bool:
    return media_type(request) == expected.split(";", 1)[0].strip().lower()


def matched_template(request: Request) -> Optional[str]:
    return getattr(request.state, ROUTE_TEMPLATE_ATTRIBUTE, None)


def path_variables(request: Request) -> Dict[str, Any]:
    """Variables of the last matched template, parsed from the request path."""
    template = matched_template(request)
    if template is None:
        return {}
    match = compile_template(template).match(request.url.path)
    return dict(match.variables) if match else {}


def query_variables(request: Request) -> Dict[str, Optional[str]]:
    """
    Query variables declared by the last matched template (`{?age}`), each
    mapped to its first value or None when the client left it out.
    """
    template = matched_template(request)
    if template is None:
        return {}
    params = request.query_params
    return {name: params.get(name) for name in compile_template(template).query_variables}


def query_params(request: Request) -> Dict[str, List[str]]:
    """All query parameters, each with every value it was given."""
    params = request.query_params
    return {key: params.getlist(key) for key in params.keys()}


def request_uri(request: Request) -> str:
    """Path plus query string, as the client sent it (percent-encoding kept)."""
    raw_path = request.scope.get("raw_path")
    # older test transports put the query string into raw_path as well
    path = raw_path.decode("latin-1").partition("?")[0] if raw_path else request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


async def body_as(request: Request, model: Type[ModelT]) -> Optional[ModelT]:
    """
    Parse the JSON body into `model`.

    Returns None when the request has no body. Malformed JSON and bodies
    that fail model validation raise ValidationError (400).
    """
    raw = await request.body()
    if not raw.strip():
        return None

    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        errors = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise ValidationError(
            message=f"Request body is not a valid {model.__name__}",
            context={"errors": errors},
        )


def not_implemented(request: Request) -> Response:
    """Default response for requests no routing rule accepted."""
    content_type = media_type(request)
    media_string = f" with content type {content_type}" if content_type else ""
    message = f"{request.method} on {request_uri(request)}{media_string} not implemented yet!"

    logger.info(message)

    return PlainTextResponse(message, status_code=404)
