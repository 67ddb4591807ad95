from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from ..config import SETTINGS, RelaySettings
from ..errors import UpstreamFetchError


SessionFactory = Callable[[], requests.Session]

MAX_SEARCH_RESULTS = 500
IMAGE_EXPRESSION = "resource_type:image"

logger = logging.getLogger(__name__)


def build_expression(category: Optional[str]) -> str:
    """Return the search expression for ``category``.

    ``None``, the empty string and the ``"all"`` sentinel select every image.
    """

    if category and category != "all":
        return f"{IMAGE_EXPRESSION} AND tags:{category}"
    return IMAGE_EXPRESSION


@dataclass(frozen=True)
class SearchResult:
    resources: List[Dict[str, Any]]
    total_count: int


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"{response.status_code} {response.reason or 'error'} from search provider"


class SearchClient:
    def __init__(
        self,
        settings: RelaySettings | None = None,
        session_factory: SessionFactory | None = None,
    ) -> None:
        self._settings = settings or SETTINGS
        self._session_factory = session_factory or requests.Session
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "gallery-relay/1.0"})
        session.auth = (
            self._settings.cloudinary_api_key,
            self._settings.cloudinary_api_secret,
        )
        return session

    @property
    def search_url(self) -> str:
        base = self._settings.cloudinary_api_base.rstrip("/")
        return f"{base}/{self._settings.cloudinary_cloud_name}/resources/search"

    def search(
        self,
        expression: str,
        max_results: int,
        *,
        sort_by: str = "uploaded_at",
        direction: str = "desc",
        with_fields: Sequence[str] = ("tags", "context"),
    ) -> SearchResult:
        body = {
            "expression": expression,
            "sort_by": [{sort_by: direction}],
            "max_results": min(max_results, MAX_SEARCH_RESULTS),
            "with_field": list(with_fields),
        }
        try:
            response = self._session.post(
                self.search_url, json=body, timeout=self._settings.search_timeout
            )
        except requests.RequestException as exc:
            raise UpstreamFetchError(str(exc)) from exc

        if not response.ok:
            raise UpstreamFetchError(_error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamFetchError("Search provider returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise UpstreamFetchError("Search provider returned an unexpected body")

        resources = payload.get("resources") or []
        if not isinstance(resources, list) or not all(
            isinstance(resource, dict) for resource in resources
        ):
            raise UpstreamFetchError("Search provider returned malformed resources")
        try:
            total_count = int(payload.get("total_count") or 0)
        except (TypeError, ValueError) as exc:
            raise UpstreamFetchError(
                f"Search provider returned an invalid total_count: {payload.get('total_count')!r}"
            ) from exc
        logger.debug(
            "search %r returned %d of %d resources", expression, len(resources), total_count
        )
        return SearchResult(resources=list(resources), total_count=total_count)


FETCHER = SearchClient()
