"""Infrastructure helpers for upstream search, mail delivery and caching."""

from .cache import CACHE, CacheEntry, ResponseCache, cache_key
from .mailer import MAILER, SmtpMailer
from .network import FETCHER, SearchClient, SearchResult, build_expression

__all__ = [
    "CACHE",
    "CacheEntry",
    "ResponseCache",
    "cache_key",
    "MAILER",
    "SmtpMailer",
    "FETCHER",
    "SearchClient",
    "SearchResult",
    "build_expression",
]
