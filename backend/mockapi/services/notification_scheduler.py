"""Notification Scheduler — fires one deferred outbound call per armed plan.

Invariants:
    - schedule() never blocks: it registers a task on the running loop and returns
    - Each plan fires exactly once, after plan.delay_seconds, bounded by
      plan.request_timeout_seconds
    - Tasks are detached from the inbound request: finishing or disconnecting the request
      does not cancel them, and no handle is returned to the caller
    - Outbound failures are logged and dropped (fire-and-forget)

Design Decisions:
    - asyncio task over BackgroundTasks: BackgroundTasks run after the response inside
      the request scope; a sleeping notification must not pin the request
    - Strong references kept in _pending until done: the event loop only holds weak
      references to tasks
"""

import asyncio
import logging

import httpx

from mockapi.core.notification import NotificationPlan

logger = logging.getLogger(__name__)


class NotificationScheduler:
    """Detached timer queue for notification plans."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> frozenset[asyncio.Task]:
        return frozenset(self._pending)

    def schedule(self, plan: NotificationPlan) -> None:
        task = asyncio.get_running_loop().create_task(self._fire_later(plan))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.info(
            f"Notification armed: {plan.method.value} {plan.url}",
            extra={"url": plan.url, "delay_seconds": plan.delay_seconds},
        )

    async def _fire_later(self, plan: NotificationPlan) -> None:
        await asyncio.sleep(plan.delay_seconds)
        try:
            response = await asyncio.wait_for(
                self.client.request(
                    plan.method.value, plan.url,
                    timeout=plan.request_timeout_seconds,
                ),
                timeout=plan.request_timeout_seconds,
            )
        # RuntimeError: shared client already closed on shutdown
        except (
            httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError, RuntimeError,
        ) as e:
            logger.warning(
                f"Notification to {plan.url} failed: {type(e).__name__}: {e}",
                extra={"url": plan.url},
            )
            return
        logger.info(
            f"Notification sent: {plan.method.value} {plan.url}",
            extra={"url": plan.url, "status_code": response.status_code},
        )
