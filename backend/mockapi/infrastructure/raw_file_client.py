"""Raw File Client — fetch-with-fallback over the raw-content mirror and the content API.

Invariants:
    - Candidates tried strictly in order; the first 2xx payload wins
    - Transport errors and non-2xx responses both count as a candidate failure
    - All candidates failing raises RawFileFetchError carrying one message per candidate
    - No retries beyond the candidate chain; the chain is atomic to callers

Design Decisions:
    - Wrapper over a shared httpx.AsyncClient: connection pooling across requests,
      client lifecycle owned by the FastAPI lifespan (ADR: single responsibility)
    - Content API candidate pins the branch with ?ref=: without it the API serves the
      repository's default branch
"""

import logging
from dataclasses import dataclass, field
from urllib.parse import quote

import httpx

from mockapi.config import Settings
from mockapi.core.errors import RawFileFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryLocation:
    """Repository coordinates taken from the inbound request path."""
    owner_id: str
    repo_name: str
    branch: str


@dataclass(frozen=True)
class RawFileCandidate:
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


def build_candidates(
    location: RepositoryLocation, file_name: str, settings: Settings,
) -> list[RawFileCandidate]:
    """Raw mirror first, content API (raw media type) second."""
    owner = quote(location.owner_id, safe="")
    repo = quote(location.repo_name, safe="")
    branch = quote(location.branch, safe="")
    file_path = quote(file_name.lstrip("/"), safe="/")
    return [
        RawFileCandidate(
            url=f"{settings.raw_content_host}/{owner}/{repo}/{branch}/{file_path}",
        ),
        RawFileCandidate(
            url=f"{settings.content_api_host}/repos/{owner}/{repo}/contents/{file_path}",
            headers={"Accept": settings.content_api_accept},
            params={"ref": location.branch},
        ),
    ]


class RawFileFetcher:
    """Returns the text of the first candidate that answers with a 2xx status."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch(
        self, file_name: str, candidates: list[RawFileCandidate],
    ) -> str:
        errors: list[str] = []
        for candidate in candidates:
            try:
                response = await self.client.get(
                    candidate.url,
                    headers=candidate.headers or None,
                    params=candidate.params or None,
                )
            except httpx.HTTPError as e:
                errors.append(f"{candidate.url}: {type(e).__name__}: {e}")
                logger.warning(
                    f"Fetch of {file_name} failed: {e}",
                    extra={"candidate": candidate.url},
                )
                continue

            if response.is_success:
                logger.debug(
                    f"Fetched {file_name}",
                    extra={"candidate": candidate.url, "status_code": response.status_code},
                )
                return response.text

            errors.append(f"{candidate.url}: HTTP {response.status_code}")
            logger.warning(
                f"Fetch of {file_name} returned HTTP {response.status_code}",
                extra={"candidate": candidate.url, "status_code": response.status_code},
            )

        raise RawFileFetchError(file_name, errors)
