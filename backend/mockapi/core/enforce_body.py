"""Body Contract Enforcement — validates a request body against a guarded rule.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Return error dict on violation, None on success
    - Mandatory = declared with value True; declared False fields are optional
    - Restriction only applies when restrictedBody is True
    - validate_request_body chains checks — disallowed fields first, first error wins

Design Decisions:
    - Return dicts (not exceptions), same shape as every other core check: the shell turns
      the dict into RequestBodyError (ADR: uniform check result shape)
    - Field order preserved (declaration order for missing, request order for disallowed):
      error messages are deterministic for the same config and body
"""

import json
from collections.abc import Iterable, Mapping


def check_disallowed_fields(
    body_fields: Mapping[str, bool], body_keys: Iterable[str],
) -> dict | None:
    """Every request body key must be declared in bodyFields."""
    disallowed = [key for key in body_keys if key not in body_fields]
    if disallowed:
        return {
            "status": "error",
            "error_code": "DISALLOWED_BODY_FIELDS",
            "message": f"Not allowed fields {json.dumps(disallowed)} provided.",
            "fields": disallowed,
        }
    return None


def check_missing_fields(
    body_fields: Mapping[str, bool], body_keys: Iterable[str],
) -> dict | None:
    """Every field declared as mandatory must be present in the request body."""
    present = set(body_keys)
    missing = [
        name for name, mandatory in body_fields.items()
        if mandatory is True and name not in present
    ]
    if missing:
        return {
            "status": "error",
            "error_code": "MISSING_BODY_FIELDS",
            "message": f"Mandatory fields {json.dumps(missing)} should be provided.",
            "fields": missing,
        }
    return None


def validate_request_body(
    body_fields: Mapping[str, bool],
    restricted_body: bool,
    body_keys: Iterable[str],
) -> dict | None:
    """Chain body contract checks. Returns first error or None."""
    keys = list(body_keys)
    if restricted_body:
        error = check_disallowed_fields(body_fields, keys)
        if error:
            return error
    return check_missing_fields(body_fields, keys)
