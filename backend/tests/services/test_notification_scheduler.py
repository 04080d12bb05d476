"""Notification Scheduler — deferred, detached, fire-and-forget outbound calls.

Tests cover:
    - schedule() returns immediately; nothing is sent before the delay elapses
    - exactly one call per plan, with the plan's method, URL, and 5 s timeout
    - the configured delay is what the task sleeps
    - outbound failures are swallowed (task finishes without exception)
    - a closed client does not leak an exception out of the task
    - a URL the client refuses to send is logged, not raised from the task
    - finished tasks are released from the pending set

Design Decisions:
    - asyncio.sleep monkeypatched where only the requested delay matters; a real short
      delay used where ordering (nothing sent before firing) matters
"""

import asyncio

import httpx

from mockapi.core.domain_types import NotificationMethod
from mockapi.core.notification import NotificationPlan


def _plan(delay: float = 0.0, method=NotificationMethod.GET) -> NotificationPlan:
    return NotificationPlan(
        url="https://example.com/hook", method=method,
        delay_seconds=delay, request_timeout_seconds=5.0,
    )


async def _drain(scheduler) -> None:
    await asyncio.gather(*scheduler.pending)


async def test_nothing_sent_before_delay(scheduler, remote):
    scheduler.schedule(_plan(delay=0.05))

    assert remote.requests_to("example.com") == []
    assert len(scheduler.pending) == 1

    await _drain(scheduler)
    assert len(remote.requests_to("example.com")) == 1


async def test_exactly_one_call_with_plan_parameters(scheduler, remote):
    scheduler.schedule(_plan())
    await _drain(scheduler)

    calls = remote.requests_to("example.com")
    assert len(calls) == 1
    assert calls[0].method == "GET"
    assert str(calls[0].url) == "https://example.com/hook"
    assert calls[0].extensions["timeout"]["read"] == 5.0


async def test_policy_method_used(scheduler, remote):
    scheduler.schedule(_plan(method=NotificationMethod.POST))
    await _drain(scheduler)

    assert remote.requests_to("example.com")[0].method == "POST"


async def test_sleeps_for_configured_delay(scheduler, remote, monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(
        "mockapi.services.notification_scheduler.asyncio.sleep", fake_sleep,
    )
    scheduler.schedule(_plan(delay=2))
    await _drain(scheduler)

    assert delays == [2]
    assert len(remote.requests_to("example.com")) == 1


async def test_outbound_failure_is_swallowed(scheduler, remote):
    remote.failing_hosts.add("example.com")
    scheduler.schedule(_plan())
    tasks = list(scheduler.pending)

    await _drain(scheduler)

    assert tasks[0].exception() is None


async def test_closed_client_is_swallowed(scheduler, http_client):
    await http_client.aclose()
    scheduler.schedule(_plan())
    tasks = list(scheduler.pending)

    await _drain(scheduler)

    assert tasks[0].exception() is None


async def test_rejected_url_is_swallowed(scheduler, monkeypatch):
    async def refuse(method, url, **kwargs):
        raise httpx.InvalidURL("URL component 'host' too long")

    monkeypatch.setattr(scheduler.client, "request", refuse)
    scheduler.schedule(_plan())
    tasks = list(scheduler.pending)

    await _drain(scheduler)

    assert tasks[0].exception() is None


async def test_finished_tasks_leave_pending_set(scheduler):
    scheduler.schedule(_plan())
    scheduler.schedule(_plan())
    await _drain(scheduler)
    await asyncio.sleep(0)

    assert scheduler.pending == frozenset()
