"""LLM client: HTTP connection to an OpenAI-compatible chat-completion API.

The generators take an LLM callable matching the protocol:

    async def __call__(self, stage: str, messages: list[dict], *,
                       max_tokens: int, temperature: float) -> str: ...

`stage` names the calling operation (e.g. "narrative", "quiz") and is used
for logging only.

GroqLLM is the production implementation. Tests inject plain async stubs.

Model selection is negotiated, not configured: the provider retires model
identifiers without notice, so before the first completion the client lists
the live models and picks the first one from a preference list.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from storymap.errors import ProviderError, json_object, status_error, transport_error

logger = logging.getLogger(__name__)

PROVIDER = "Groq"


# ---------------------------------------------------------------------------
# Protocol: every LLM implementation must match this signature
# ---------------------------------------------------------------------------

class LLM(Protocol):
    async def __call__(
        self,
        stage: str,
        messages: list[dict[str, str]],
        *,
        max_tokens: int = 600,
        temperature: float = 0.8,
    ) -> str: ...


def chat(system: str, user: str) -> list[dict[str, str]]:
    """Build the two-message conversation every generator sends."""
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


# ---------------------------------------------------------------------------
# Model negotiation
# ---------------------------------------------------------------------------

def select_model(preferred: list[str], available: list[str]) -> str:
    """Pick the first preferred model that is live, else the first live model.

    Raises ProviderError when the provider reports no models at all.
    """
    for model in preferred:
        if model in available:
            return model
    if available:
        logger.warning("no preferred model available, falling back to %s", available[0])
        return available[0]
    raise ProviderError(PROVIDER, "model_unavailable", "No available models reported by provider")


# ---------------------------------------------------------------------------
# GroqLLM: connects to the real backend
# ---------------------------------------------------------------------------

class GroqLLM:
    """Async client for Groq's OpenAI-compatible chat API.

      GET  {base_url}/models            → {"data": [{"id": "..."}]}
      POST {base_url}/chat/completions  {"model", "messages", "max_tokens", "temperature", "top_p"}
           → {"choices": [{"message": {"content": "..."}}]}

    Args:
        api_key:   Bearer token. An empty key fails every call with kind "not_configured".
        base_url:  API root, e.g. "https://api.groq.com/openai/v1".
        preferred: Model identifiers in order of preference.
        timeout:   HTTP timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.groq.com/openai/v1",
        preferred: list[str] | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._preferred = list(preferred or [])
        self._timeout = timeout
        self._model: str | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    def _require_key(self) -> None:
        if not self._api_key:
            raise ProviderError(PROVIDER, "not_configured", "Groq API key is not configured")

    async def list_models(self) -> list[str]:
        self._require_key()
        url = f"{self._base_url}/models"
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(url, headers=self._headers())
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise status_error(PROVIDER, e) from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e

        data = json_object(PROVIDER, resp).get("data") or []
        models = [m["id"] for m in data if isinstance(m, dict) and m.get("id")]
        logger.debug("available models: %s", models)
        return models

    async def model(self) -> str:
        """The negotiated model, resolved on first use."""
        if self._model is None:
            self._model = select_model(self._preferred, await self.list_models())
            logger.info("using model %s", self._model)
        return self._model

    def _completion_error(self, e: httpx.HTTPStatusError, model: str) -> ProviderError:
        resp = e.response
        try:
            error = json_object(PROVIDER, resp).get("error")
        except ProviderError:
            error = None
        code = error.get("code", "") if isinstance(error, dict) else ""
        if (resp.status_code == 400 and code == "model_decommissioned") or resp.status_code == 404:
            # Renegotiate on the next call
            self._model = None
            return ProviderError(PROVIDER, "model_unavailable", f"Model {model} is no longer available")
        return status_error(PROVIDER, e)

    async def __call__(
        self,
        stage: str,
        messages: list[dict[str, str]],
        *,
        max_tokens: int = 600,
        temperature: float = 0.8,
    ) -> str:
        model = await self.model()
        url = f"{self._base_url}/chat/completions"
        body = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": 0.9,
        }
        logger.debug("llm call stage=%s model=%s temperature=%s", stage, model, temperature)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            err = self._completion_error(e, model)
            logger.warning("llm stage=%s failed kind=%s: %s", stage, err.kind, err)
            raise err from e
        except httpx.HTTPError as e:
            raise transport_error(PROVIDER, e, self._timeout) from e

        text = _parse_response(json_object(PROVIDER, resp))
        logger.debug("llm response stage=%s len=%d", stage, len(text))
        return text


def _parse_response(data: dict) -> str:
    """Extract the completion text from the response body."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise ProviderError(PROVIDER, "bad_response", "Unexpected response format from Groq")
    message = choices[0].get("message")
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise ProviderError(PROVIDER, "bad_response", "Unexpected response format from Groq")
    return content
