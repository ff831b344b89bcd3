import asyncio
import logging
from typing import Any, List, Mapping, Optional, Tuple

import requests

from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dataatwork.org/v1"
USER_AGENT = "ai-job-accessibility/1.0 (+https://localhost)"


def query_pairs(params: Optional[Mapping[str, Any]]) -> List[Tuple[str, Any]]:
    """Flatten query parameters to (key, value) pairs, keeping repeated keys."""
    if params is None:
        return []
    if hasattr(params, "multi_items"):
        # starlette QueryParams
        return list(params.multi_items())
    return list(params.items())


class TaxonomyProxy:
    """Pass-through to the public skills/jobs taxonomy API."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout_seconds: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, url: str, params: Optional[Mapping[str, Any]]) -> Any:
        r = self.session.get(url, params=query_pairs(params), timeout=self.timeout_seconds)
        r.raise_for_status()
        return r.json()

    async def forward(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = self.url_for(path)
        try:
            return await asyncio.to_thread(self._get, url, params)
        except (requests.RequestException, ValueError) as e:
            # ValueError covers an undecodable JSON body
            logger.warning(f"Taxonomy request to {url} failed: {e}")
            raise UpstreamError("Skills API request failed", detail=str(e), status_code=502) from e

    def close(self) -> None:
        self.session.close()
