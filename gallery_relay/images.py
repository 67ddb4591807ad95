"""Paginated, cached image listing backed by the search provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import InvalidQueryError, UpstreamFetchError
from .infrastructure.cache import CACHE, ResponseCache, cache_key
from .infrastructure.network import (
    FETCHER,
    MAX_SEARCH_RESULTS,
    SearchClient,
    build_expression,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 8

TALL_RATIO = 1.4
MEDIUM_RATIO = 1.15
SHORT_RATIO = 0.7

logger = logging.getLogger(__name__)


def height_class(width: Optional[float], height: Optional[float]) -> str:
    """Classify an image by its ``height / width`` ratio.

    Missing, zero or non-numeric dimensions classify as ``"square"``.
    """

    width, height = _dimension(width), _dimension(height)
    if not width or not height:
        return "square"

    ratio = height / width
    if ratio > TALL_RATIO:
        return "tall"
    if ratio > MEDIUM_RATIO:
        return "medium"
    if ratio < SHORT_RATIO:
        return "short"
    return "square"


def _dimension(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _has_tags(resource: Any) -> bool:
    if not isinstance(resource, Mapping):
        return False
    tags = resource.get("tags")
    return isinstance(tags, (list, tuple)) and len(tags) > 0


def _caption(resource: Mapping[str, Any]) -> Optional[str]:
    context = resource.get("context") or {}
    if not isinstance(context, Mapping):
        return None
    caption = context.get("caption")
    if caption:
        return str(caption)
    custom = context.get("custom") or {}
    if isinstance(custom, Mapping) and custom.get("caption"):
        return str(custom["caption"])
    return None


@dataclass(frozen=True)
class ImageView:
    id: str
    title: str
    category: str
    url: str
    height_class: str
    width: Optional[int]
    height: Optional[int]

    @classmethod
    def from_resource(cls, resource: Mapping[str, Any]) -> "ImageView":
        public_id = str(resource.get("public_id", ""))
        width = _dimension(resource.get("width"))
        height = _dimension(resource.get("height"))
        return cls(
            id=public_id,
            title=_caption(resource) or public_id,
            category=str(resource["tags"][0]),
            url=str(resource.get("secure_url", "")),
            height_class=height_class(width, height),
            width=width,
            height=height,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "blobUrl": self.url,
            "height": self.height_class,
            "dimensions": {"width": self.width, "height": self.height},
        }


@dataclass(frozen=True)
class ImagePage:
    images: Tuple[ImageView, ...] = field(default_factory=tuple)
    has_more: bool = False
    total_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [image.to_dict() for image in self.images],
            "hasMore": self.has_more,
            "totalCount": self.total_count,
        }


class ImageQueryService:
    def __init__(
        self,
        client: SearchClient | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self._client = client or FETCHER
        self._cache = CACHE if cache is None else cache

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    def list_images(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        category: Optional[str] = None,
    ) -> ImagePage:
        if page < 1 or limit < 1:
            raise InvalidQueryError(
                f"page and limit must be positive integers (got page={page}, limit={limit})"
            )

        key = cache_key(category, page)
        expired = None
        entry = self._cache.get(key)
        if entry is not None:
            if self._cache.is_valid(entry):
                logger.info("Cache hit for %s", key)
                return entry.payload
            self._cache.delete(key)
            expired = entry

        try:
            result = self._fetch(page, limit, category)
        except UpstreamFetchError:
            logger.exception("Search provider error for %s", key)
            # Freshness is not checked here: a stale page beats an error.
            stale = self._cache.get(key) or expired
            if stale is not None:
                logger.warning("Using stale cache for %s due to upstream error", key)
                return stale.payload
            raise

        self._cache.put(key, result)
        return result

    def _fetch(self, page: int, limit: int, category: Optional[str]) -> ImagePage:
        offset = (page - 1) * limit
        max_results = min(offset + limit, MAX_SEARCH_RESULTS)

        result = self._client.search(build_expression(category), max_results)

        # The provider only returned the first ``max_results`` matches, so the
        # page is cut from that truncated set.
        window = result.resources[offset : offset + limit]
        images = tuple(
            ImageView.from_resource(resource)
            for resource in window
            if _has_tags(resource)
        )
        return ImagePage(
            images=images,
            has_more=offset + len(images) < result.total_count,
            total_count=result.total_count,
        )


IMAGE_SERVICE = ImageQueryService()
