"""Exception types shared by the provider clients and generators."""

from __future__ import annotations

from typing import Literal

import httpx

ErrorKind = Literal[
    "unauthorized",
    "rate_limited",
    "model_unavailable",
    "not_configured",
    "transport",
    "bad_response",
]


class ProviderError(RuntimeError):
    """Raised when an external provider cannot be reached or answers with an error.

    `kind` is for logging and diagnosis only; callers decide between a
    fallback value and propagation regardless of it.
    """

    def __init__(self, provider: str, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.provider = provider
        self.kind = kind


class GenerationError(RuntimeError):
    """The provider answered, but the content is empty or unusable."""


class QuizError(GenerationError):
    """The quiz payload was not valid JSON or held no valid questions."""


def status_error(provider: str, e: httpx.HTTPStatusError) -> ProviderError:
    """Map an HTTP error status to a ProviderError with the matching kind."""
    status = e.response.status_code
    if status in (401, 403):
        return ProviderError(provider, "unauthorized", f"{provider} rejected the API key (HTTP {status})")
    if status == 429:
        return ProviderError(provider, "rate_limited", f"{provider} rate limit exceeded")
    return ProviderError(provider, "bad_response", f"{provider} returned HTTP {status}")


def transport_error(provider: str, e: httpx.HTTPError, timeout: float) -> ProviderError:
    if isinstance(e, httpx.TimeoutException):
        return ProviderError(provider, "transport", f"{provider} timed out after {timeout}s")
    return ProviderError(provider, "transport", f"Cannot connect to {provider}")


def json_object(provider: str, resp: httpx.Response) -> dict:
    """Decode a response body that must be a JSON object."""
    try:
        data = resp.json()
    except ValueError as e:
        raise ProviderError(provider, "bad_response", f"{provider} returned a body that is not JSON") from e
    if not isinstance(data, dict):
        raise ProviderError(provider, "bad_response", f"Unexpected response format from {provider}")
    return data
