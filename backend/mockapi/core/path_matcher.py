"""Path Pattern Matcher — compiles route templates into anchored, case-insensitive matchers.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Matching is loose: case-insensitive, trailing slash insignificant, anchored at both ends
    - An un-parseable template raises InvalidRoutePatternError (never swallowed, never "no match")
    - "*" is only valid as the last segment and matches any remaining depth (including none)

Design Decisions:
    - Template tokens parsed per segment, then joined into one regex
    - Capture groups named p0..pN, real names kept in param_names: user-chosen names never
      collide with regex group syntax
    - compile_route_pattern is lru_cached: templates are immutable strings, cache is safe
      across requests even though config documents are not
"""

import posixpath
import re
from dataclasses import dataclass
from functools import lru_cache

from mockapi.core.errors import InvalidRoutePatternError

DEFAULT_SEGMENT_PATTERN = "[^/]+?"
WILDCARD = "*"

_PARAM_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_MODIFIERS = "?*+"


@dataclass(frozen=True)
class LiteralToken:
    value: str


@dataclass(frozen=True)
class ParamToken:
    name: str
    pattern: str = DEFAULT_SEGMENT_PATTERN
    modifier: str | None = None


@dataclass(frozen=True)
class WildcardToken:
    name: str = "wildcard"


Token = LiteralToken | ParamToken | WildcardToken


@dataclass(frozen=True)
class RoutePattern:
    """A compiled route template."""

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def matches(self, path: str) -> bool:
        return self.regex.match(normalize_path(path)) is not None

    def match_params(self, path: str) -> dict[str, str] | None:
        """Captured parameters when the path matches, None otherwise."""
        match = self.regex.match(normalize_path(path))
        if match is None:
            return None
        params: dict[str, str] = {}
        for index, name in enumerate(self.param_names):
            value = match.group(f"p{index}")
            if value is not None:
                params[name] = value
        return params


def normalize_path(path: str) -> str:
    """Leading slash, no duplicate or trailing slashes, dot segments resolved."""
    collapsed = "/" + "/".join(seg for seg in path.split("/") if seg)
    return posixpath.normpath(collapsed)


def join_route_path(prefix: str, rule_path: str) -> str:
    """Prefix a rule path (the rule's own leading slash does not reset the prefix)."""
    return normalize_path(f"{prefix or ''}/{rule_path or ''}")


@lru_cache(maxsize=512)
def compile_route_pattern(template: str) -> RoutePattern:
    """Compile a normalized template into a RoutePattern.

    Examples::

        "/items"            matches "/items", "/ITEMS/"
        "/items/:id"        matches "/items/7"            -> {"id": "7"}
        "/items/:id(\\d+)"  matches "/items/7", not "/items/x"
        "/items/:id?"       matches "/items" and "/items/7"
        "/files/:path+"     matches "/files/a/b/c"        -> {"path": "a/b/c"}
        "/files/*"          matches "/files", "/files/a/b"
    """
    normalized = normalize_path(template)
    segments = [seg for seg in normalized.split("/") if seg]
    param_names: list[str] = []
    parts: list[str] = []

    for position, segment in enumerate(segments):
        tokens = parse_segment(segment, template)
        is_last = position == len(segments) - 1
        parts.append(_segment_regex(tokens, is_last, param_names, template))

    source = "^" + "".join(parts) + "/?$"
    try:
        regex = re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise InvalidRoutePatternError(template, f"invalid regular expression ({e})")
    return RoutePattern(
        template=normalized, regex=regex, param_names=tuple(param_names),
    )


def parse_segment(segment: str, template: str) -> list[Token]:
    """Split one path segment into literal, parameter and wildcard tokens."""
    if segment == WILDCARD:
        return [WildcardToken()]

    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == "\\" and i + 1 < len(segment):
            literal.append(segment[i + 1])
            i += 2
            continue
        if ch == ":":
            if literal:
                tokens.append(LiteralToken("".join(literal)))
                literal = []
            token, i = _read_param(segment, i + 1, template)
            tokens.append(token)
            continue
        if ch in "()":
            raise InvalidRoutePatternError(
                template, f"unexpected '{ch}' in segment '{segment}'",
            )
        if ch == WILDCARD:
            raise InvalidRoutePatternError(
                template, "'*' must be a whole segment",
            )
        literal.append(ch)
        i += 1

    if literal:
        tokens.append(LiteralToken("".join(literal)))
    return tokens


def _read_param(segment: str, start: int, template: str) -> tuple[ParamToken, int]:
    match = _PARAM_NAME.match(segment, start)
    if match is None:
        raise InvalidRoutePatternError(
            template, f"missing parameter name in segment '{segment}'",
        )
    name = match.group()
    i = match.end()

    pattern = DEFAULT_SEGMENT_PATTERN
    if i < len(segment) and segment[i] == "(":
        pattern, i = _read_group(segment, i, template)

    modifier = None
    if i < len(segment) and segment[i] in _MODIFIERS:
        modifier = segment[i]
        i += 1
    return ParamToken(name=name, pattern=pattern, modifier=modifier), i


def _read_group(segment: str, start: int, template: str) -> tuple[str, int]:
    """Read a balanced "( ... )" group starting at segment[start]."""
    depth = 0
    i = start
    while i < len(segment):
        ch = segment[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                body = segment[start + 1:i]
                if not body:
                    raise InvalidRoutePatternError(template, "empty parameter pattern")
                return body, i + 1
        i += 1
    raise InvalidRoutePatternError(template, f"unbalanced group in segment '{segment}'")


def _segment_regex(
    tokens: list[Token], is_last: bool, param_names: list[str], template: str,
) -> str:
    if len(tokens) == 1 and isinstance(tokens[0], WildcardToken):
        if not is_last:
            raise InvalidRoutePatternError(template, "'*' must be the last segment")
        group = _next_group(param_names, tokens[0].name)
        return f"(?:/(?P<{group}>.*))?"

    if len(tokens) == 1 and isinstance(tokens[0], ParamToken):
        return _standalone_param_regex(tokens[0], param_names)

    body: list[str] = []
    for token in tokens:
        if isinstance(token, LiteralToken):
            body.append(re.escape(token.value))
            continue
        if token.modifier not in (None, "?"):
            raise InvalidRoutePatternError(
                template, f"modifier '{token.modifier}' needs a standalone segment",
            )
        group = _next_group(param_names, token.name)
        optional = "?" if token.modifier == "?" else ""
        body.append(f"(?P<{group}>{token.pattern}){optional}")
    return "/" + "".join(body)


def _standalone_param_regex(token: ParamToken, param_names: list[str]) -> str:
    group = _next_group(param_names, token.name)
    pattern = token.pattern
    if token.modifier == "?":
        return f"(?:/(?P<{group}>{pattern}))?"
    if token.modifier == "+":
        return f"/(?P<{group}>(?:{pattern})(?:/(?:{pattern}))*)"
    if token.modifier == "*":
        return f"(?:/(?P<{group}>(?:{pattern})(?:/(?:{pattern}))*))?"
    return f"/(?P<{group}>{pattern})"


def _next_group(param_names: list[str], name: str) -> str:
    param_names.append(name)
    return f"p{len(param_names) - 1}"
