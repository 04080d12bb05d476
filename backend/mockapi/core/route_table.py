"""Route Table Resolution — finds the single rule an inbound request commits to.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Method keys compared case-insensitively; the first key in document order wins
    - Rules scanned in declared order; the FIRST path match wins (never the most specific)
    - A method value that is not a list raises InvalidRouteTableError, distinct from a miss
    - Every miss inside a found method is a single NoRuleMatched outcome

Design Decisions:
    - Outcomes as frozen dataclasses (not exceptions): the shell decides the HTTP mapping,
      the core only reports what happened
    - Linear scan: author-controlled ordering is part of the observable contract
"""

from dataclasses import dataclass, field
from typing import Any

from mockapi.core.errors import InvalidRouteTableError
from mockapi.core.path_matcher import (
    compile_route_pattern,
    join_route_path,
    normalize_path,
)
from mockapi.schemas.mock_config import GuardedRule, MockApiConfig, SimpleRule


@dataclass(frozen=True)
class RuleMatched:
    rule: SimpleRule | GuardedRule
    request_path: str
    template: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MethodNotMatched:
    method: str
    allowed: tuple[str, ...] = ()


@dataclass(frozen=True)
class NoRuleMatched:
    method: str
    request_path: str


RouteOutcome = RuleMatched | MethodNotMatched | NoRuleMatched


def find_rule_list(routes: dict[str, Any], method: str) -> tuple[bool, Any]:
    """Return (found, rules) for the first key equal to method, ignoring case."""
    wanted = method.upper()
    for declared, rules in routes.items():
        if declared.upper() == wanted:
            return True, rules
    return False, None


def declared_methods(routes: dict[str, Any]) -> tuple[str, ...]:
    """Upper-cased method keys in document order, duplicates dropped."""
    return tuple(dict.fromkeys(key.upper() for key in routes))


def resolve_route(
    config: MockApiConfig, method: str, request_path: str,
) -> RouteOutcome:
    """Resolve method + path against the route table. First declared match wins."""
    method = method.upper()
    found, rules = find_rule_list(config.routes, method)
    if not found:
        return MethodNotMatched(method=method, allowed=declared_methods(config.routes))
    if not isinstance(rules, list):
        raise InvalidRouteTableError(method, type(rules).__name__)

    path = normalize_path(request_path)
    for rule in rules:
        template = join_route_path(config.api_route_prefix, rule.path)
        params = compile_route_pattern(template).match_params(path)
        if params is None:
            continue
        return RuleMatched(
            rule=rule, request_path=path, template=template, params=params,
        )
    return NoRuleMatched(method=method, request_path=path)
