"""Error taxonomy shared by the relay routes and services."""

from __future__ import annotations

from typing import Sequence


class RelayError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamFetchError(RelayError):
    """The image search provider could not be reached or returned an error."""


class ValidationError(RelayError):
    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        required: Sequence[str] = (),
        missing: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.required = list(required)
        self.missing = list(missing)


class InvalidQueryError(ValidationError):
    """A pagination parameter was not a positive integer."""


class DeliveryError(RelayError):
    """The mail provider refused or failed to deliver a message."""
