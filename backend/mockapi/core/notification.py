"""Notification Arming — decides whether, when, and how a deferred callback fires.

Invariants:
    - plan_notification is PURE: returns a plan, never schedules anything itself
    - Armed only when a policy exists AND the body holds a truthy value at followProp
    - The value must be an absolute http(s) URL, else InvalidNotificationTargetError
    - The outbound call timeout is fixed per plan, separate from the scheduling delay

Design Decisions:
    - pydantic AnyHttpUrl for URL validation: same validator the schemas use at the
      boundary, no hand-rolled URL parsing
    - Plan is a frozen dataclass: the shell's scheduler consumes it unchanged
"""

from dataclasses import dataclass
from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from mockapi.core.domain_types import (
    DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
    NotificationMethod,
)
from mockapi.core.errors import InvalidNotificationTargetError
from mockapi.schemas.mock_config import NotificationPolicy

_HTTP_URL = TypeAdapter(AnyHttpUrl)


@dataclass(frozen=True)
class NotificationPlan:
    url: str
    method: NotificationMethod
    delay_seconds: float
    request_timeout_seconds: float = DEFAULT_NOTIFICATION_TIMEOUT_SECONDS


def plan_notification(
    policy: NotificationPolicy | None,
    body: dict[str, Any],
    request_timeout_seconds: float = DEFAULT_NOTIFICATION_TIMEOUT_SECONDS,
) -> NotificationPlan | None:
    """Build the notification plan for a matched guarded rule, or None if not armed."""
    if policy is None:
        return None
    target = body.get(policy.follow_prop)
    if not target:
        return None
    if not isinstance(target, str):
        raise InvalidNotificationTargetError(policy.follow_prop, target)
    try:
        url = _HTTP_URL.validate_python(target)
    except ValidationError:
        raise InvalidNotificationTargetError(policy.follow_prop, target)
    return NotificationPlan(
        url=str(url),
        method=policy.notification_method,
        delay_seconds=policy.timeout_in_second,
        request_timeout_seconds=request_timeout_seconds,
    )
