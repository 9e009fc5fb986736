"""Exception types raised inside the advisory core."""

from __future__ import annotations


class FinAdvisorError(Exception):
    """Base class for all fin_advisor errors."""


class RetrievalBackendUnavailable(FinAdvisorError):
    """The remote retrieval backend failed or answered with garbage.

    Never crosses the RetrievalService boundary: the service logs it and
    falls back to local scoring.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        full_message = message
        if url:
            full_message += f" | URL: {url}"
        if status_code is not None:
            full_message += f" | Status Code: {status_code}"
        super().__init__(full_message)
