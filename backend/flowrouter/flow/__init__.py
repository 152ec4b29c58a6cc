"""
Expression-based routing on top of FastAPI.

One marker (`flow`), one base class (`HttpRouter`) and a handful of
request helpers. See `flowrouter.routes.application` for a complete router.
"""

from flowrouter.flow.predicates import RequestPredicate, media, method, uri, when
from flowrouter.flow.request import (
    body_as,
    matched_template,
    media_is,
    media_type,
    method_is,
    not_implemented,
    path_variables,
    query_params,
    query_variables,
    request_uri,
    uri_matches,
)
from flowrouter.flow.router import (
    ALL,
    APPLICATION_JSON,
    DELETE,
    GET,
    PATCH,
    POST,
    PUT,
    SUPPORTED_METHODS,
    TEXT_HTML,
    TEXT_PLAIN,
    HttpRequestHandler,
    HttpRouter,
    flow,
    flow_path,
)
from flowrouter.flow.template import UriMatchInfo, UriMatchTemplate, compile_template

__all__ = [
    "ALL",
    "APPLICATION_JSON",
    "DELETE",
    "GET",
    "PATCH",
    "POST",
    "PUT",
    "SUPPORTED_METHODS",
    "TEXT_HTML",
    "TEXT_PLAIN",
    "HttpRequestHandler",
    "HttpRouter",
    "RequestPredicate",
    "UriMatchInfo",
    "UriMatchTemplate",
    "body_as",
    "compile_template",
    "flow",
    "flow_path",
    "matched_template",
    "media",
    "media_is",
    "media_type",
    "method",
    "method_is",
    "not_implemented",
    "path_variables",
    "query_params",
    "query_variables",
    "request_uri",
    "uri",
    "uri_matches",
    "when",
]
