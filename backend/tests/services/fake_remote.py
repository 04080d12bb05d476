"""Fake remote repository — in-memory httpx.MockTransport handler for service tests.

Invariants:
    - No test touches the network: every outbound call goes through FakeRemote.handler
    - FakeRemote records every request (URL, method, headers, timeout extension)
    - Files are keyed by scheme://host/path; query strings are ignored when serving
    - Host example.com answers any request with 204 (notification callback target)
"""

import httpx
import yaml

RAW_ROOT = "https://raw.test/octo/mocks/main"
API_ROOT = "https://api.test/repos/octo/mocks/contents"


class FakeRemote:
    """In-memory stand-in for the raw mirror, the content API, and callback targets."""

    def __init__(self):
        self.files: dict[str, str] = {}
        self.requests: list[httpx.Request] = []
        self.failing_hosts: set[str] = set()

    def serve(self, url: str, text: str) -> None:
        self.files[url] = text

    def serve_yaml(self, url: str, document: dict) -> None:
        self.files[url] = yaml.safe_dump(document)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host in self.failing_hosts:
            raise httpx.ConnectError("connection refused", request=request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        if key in self.files:
            return httpx.Response(200, text=self.files[key])
        if request.url.host == "example.com":
            return httpx.Response(204)
        return httpx.Response(404, text="Not Found")

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


class FakeScheduler:
    """Records notification plans instead of starting timers."""

    def __init__(self):
        self.plans = []

    def schedule(self, plan) -> None:
        self.plans.append(plan)
