"""Mock API Route — catch-all entry point resolving calls against a repository's .mockapi.yml.

Invariants:
    - Path shape: /{owner_id}/{repo_name}/{branch}/{remainder}; remainder is matched
      against the route table, the first three segments locate the repository
    - Empty or non-object JSON bodies count as "no fields"; malformed JSON is a 400
    - The route never awaits a notification; it returns as soon as data is located

Design Decisions:
    - One api_route for every verb: method dispatch belongs to the route table, not FastAPI
    - Resolver injected via Depends(get_resolver): tests override it like any dependency
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from mockapi.core.domain_types import HttpMethod
from mockapi.core.errors import ErrorContext, InvalidRequestBodyError
from mockapi.infrastructure.raw_file_client import RepositoryLocation
from mockapi.services.resolve_request import MockRequest, MockRequestResolver

logger = logging.getLogger(__name__)
router = APIRouter(tags=["mock"])


def get_resolver(request: Request) -> MockRequestResolver:
    """Resolver created by the application lifespan."""
    return request.app.state.resolver


async def read_json_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestBodyError(
            str(e),
            ErrorContext(method=request.method, request_path=request.url.path),
        )
    return payload if isinstance(payload, dict) else {}


@router.api_route(
    "/{owner_id}/{repo_name}/{branch}/{remainder:path}",
    methods=[m.value for m in HttpMethod],
)
async def serve_mock(
    owner_id: str,
    repo_name: str,
    branch: str,
    remainder: str,
    request: Request,
    resolver: MockRequestResolver = Depends(get_resolver),
):
    """Answer with the data of the first rule matching method + remainder."""
    mock_request = MockRequest(
        location=RepositoryLocation(
            owner_id=owner_id, repo_name=repo_name, branch=branch,
        ),
        method=request.method,
        path=remainder,
        body=await read_json_body(request),
    )
    logger.info(
        f"Mock request {owner_id}/{repo_name}@{branch}",
        extra={"method": request.method, "path": remainder},
    )
    return await resolver.resolve(mock_request)
