"""Cached image search and booking email relay for the portfolio site."""

from .app import APP_VERSION, app, create_app
from .booking import BookingRequest
from .errors import DeliveryError, RelayError, UpstreamFetchError, ValidationError
from .images import ImagePage, ImageQueryService, ImageView
from . import infrastructure

__version__ = APP_VERSION

__all__ = [
    "APP_VERSION",
    "__version__",
    "app",
    "create_app",
    "BookingRequest",
    "DeliveryError",
    "RelayError",
    "UpstreamFetchError",
    "ValidationError",
    "ImagePage",
    "ImageQueryService",
    "ImageView",
    "infrastructure",
]
