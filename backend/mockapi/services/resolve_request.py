"""Mock Request Resolver — fetch config, pick the rule, validate, locate, arm notification.

Invariants:
    - Config fetched and parsed fresh per request (no cross-request cache)
    - First path match commits: a body violation aborts, later rules are never tried
    - Order per matched rule: body contract → response data → notification arming
    - Notification armed only after data was located; the caller never waits on it
    - Every failure raised as a MockApiError subclass; the API handler maps the status

Design Decisions:
    - Impureim sandwich: IO (fetch) → pure core (resolve_route, validate_request_body,
      plan_notification) → IO (data fetch, scheduling)
    - ErrorContext built once per request so every error carries method + path
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from mockapi.config import Settings
from mockapi.core.enforce_body import validate_request_body
from mockapi.core.errors import (
    ConfigFetchError,
    ErrorContext,
    MethodNotAllowedError,
    RawFileFetchError,
    RequestBodyError,
    RouteNotFoundError,
)
from mockapi.core.notification import plan_notification
from mockapi.core.route_table import (
    MethodNotMatched,
    NoRuleMatched,
    RuleMatched,
    resolve_route,
)
from mockapi.infrastructure.raw_file_client import (
    RawFileFetcher,
    RepositoryLocation,
    build_candidates,
)
from mockapi.schemas.mock_config import GuardedRule
from mockapi.services.config_loader import LoadedConfig, parse_mock_config
from mockapi.services.locate_data import locate_response_data
from mockapi.services.notification_scheduler import NotificationScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MockRequest:
    """One inbound mock call, already split from the transport."""
    location: RepositoryLocation
    method: str
    path: str
    body: dict[str, Any] = field(default_factory=dict)


class MockRequestResolver:
    """Resolves a MockRequest into the response value (or raises)."""

    def __init__(
        self,
        settings: Settings,
        fetcher: RawFileFetcher,
        scheduler: NotificationScheduler,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.scheduler = scheduler

    async def resolve(self, request: MockRequest) -> Any:
        context = ErrorContext(
            method=request.method.upper(), request_path=request.path,
        )
        loaded = await self.load_config(request.location, context)

        outcome = resolve_route(loaded.config, request.method, request.path)
        if isinstance(outcome, MethodNotMatched):
            raise MethodNotAllowedError(outcome.method, context, outcome.allowed)
        if isinstance(outcome, NoRuleMatched):
            raise RouteNotFoundError(outcome.request_path, context)
        return await self._answer(outcome, loaded, request, context)

    async def load_config(
        self, location: RepositoryLocation, context: ErrorContext | None = None,
    ) -> LoadedConfig:
        file_name = self.settings.config_file_name
        try:
            raw_text = await self.fetcher.fetch(
                file_name, build_candidates(location, file_name, self.settings),
            )
        except RawFileFetchError as e:
            logger.error(
                f"Failed to retrieve {file_name} for "
                f"{location.owner_id}/{location.repo_name}@{location.branch}",
                extra={"error_code": e.code},
            )
            raise ConfigFetchError(e.errors, context)
        return parse_mock_config(raw_text)

    async def _answer(
        self,
        outcome: RuleMatched,
        loaded: LoadedConfig,
        request: MockRequest,
        context: ErrorContext,
    ) -> Any:
        rule = outcome.rule
        logger.debug(
            f"Rule matched: {outcome.template} {outcome.params}",
            extra={"method": context.method, "path": outcome.request_path},
        )
        if isinstance(rule, GuardedRule):
            error = validate_request_body(
                rule.body_fields, rule.restricted_body, request.body.keys(),
            )
            if error:
                raise RequestBodyError(
                    error["message"], error["error_code"], error["fields"], context,
                )

        data = await locate_response_data(
            loaded, request.location, self.fetcher, self.settings, context,
        )

        if isinstance(rule, GuardedRule):
            plan = plan_notification(
                rule.schedule_notification,
                request.body,
                self.settings.notification_request_timeout_seconds,
            )
            if plan is not None:
                self.scheduler.schedule(plan)
        return data
