"""
URI match templates.

Templates follow the RFC 6570 flavour used by annotated controllers:

    /api/v10/hello              literal path
    /api/v10/hello/{name}       one path segment
    /files/{+path}              the remainder of the path, slashes included
    /book/{id:int}              Starlette convertor (int, float, path, uuid, str)
    /hello/{name}{?age,lang}    optional query parameters, ignored for matching

Matching is delegated to Starlette's own path compiler so that convertors
behave exactly like FastAPI path parameters.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional, Pattern, Tuple

from starlette.convertors import CONVERTOR_TYPES, Convertor
from starlette.routing import compile_path

_QUERY_EXPRESSION = re.compile(r"\{[?&]([^{}]*)\}")
_RESERVED_EXPRESSION = re.compile(r"\{\+([a-zA-Z_][a-zA-Z0-9_]*)\}")
_PARAM_EXPRESSION = re.compile(r"\{[a-zA-Z_][a-zA-Z0-9_]*(?::([a-zA-Z_][a-zA-Z0-9_]*))?\}")


def _strip_trailing_slash(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


@dataclass(frozen=True)
class UriMatchInfo:
    """Result of a successful template match."""

    template: str
    variables: Dict[str, Any] = field(default_factory=dict)


class UriMatchTemplate:
    """A compiled URI template that can be matched against request paths."""

    def __init__(self, template: str):
        if not template.startswith("/"):
            raise ValueError(f"URI template must start with '/': {template!r}")

        self.template = template
        self.query_variables: Tuple[str, ...] = tuple(
            name.strip()
            for expression in _QUERY_EXPRESSION.findall(template)
            for name in expression.split(",")
            if name.strip()
        )

        path_template = _QUERY_EXPRESSION.sub("", template)
        path_template = _RESERVED_EXPRESSION.sub(r"{\1:path}", path_template)
        path_template = _strip_trailing_slash(path_template)

        leftover = _PARAM_EXPRESSION.sub("", path_template)
        if "{" in leftover or "}" in leftover:
            raise ValueError(f"Malformed URI template: {template!r}")

        for convertor in _PARAM_EXPRESSION.findall(path_template):
            if convertor and convertor not in CONVERTOR_TYPES:
                raise ValueError(f"Unknown convertor {convertor!r} in URI template {template!r}")

        regex, _, convertors = compile_path(path_template)
        self._regex: Pattern[str] = regex
        self._convertors: Dict[str, Convertor] = convertors

    def match(self, path: str) -> Optional[UriMatchInfo]:
        """Match a request path; returns None when the template does not apply."""
        matched = self._regex.match(_strip_trailing_slash(path))
        if matched is None:
            return None

        variables = {
            name: self._convertors[name].convert(value)
            for name, value in matched.groupdict().items()
        }
        return UriMatchInfo(template=self.template, variables=variables)

    def __repr__(self) -> str:
        return f"UriMatchTemplate({self.template!r})"


@lru_cache(maxsize=256)
def compile_template(template: str) -> UriMatchTemplate:
    """Return the cached compiled form of `template`."""
    return UriMatchTemplate(template)
