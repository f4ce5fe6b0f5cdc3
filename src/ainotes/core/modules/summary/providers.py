"""Adapters performing the primary summarization call.

Each provider turns chat messages into a raw response dictionary; reading the
summary out of that dictionary is left to `extract_summary`. Every failure
surfaces as `UpstreamError`.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx
import litellm
import structlog

from ainotes.config import Config
from ainotes.errors import UpstreamError

logger = structlog.get_logger(__name__)


class SummaryProvider(ABC):
    """Chat-completion style backend used for AI summaries."""

    def __init__(self, model: str, max_tokens: int, temperature: float, timeout: float) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    async def complete(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Send messages and return the decoded response.

        Raises:
            UpstreamError: On network failure, timeout or rejected request
        """
        try:
            async with asyncio.timeout(self.timeout):
                return await self._complete(messages)
        except UpstreamError:
            raise
        except TimeoutError as e:
            raise UpstreamError(f"Summary request timed out after {self.timeout}s") from e
        except Exception as e:
            raise UpstreamError(f"Summary request failed: {e}") from e

    @abstractmethod
    async def _complete(self, messages: list[dict[str, str]]) -> dict[str, Any]: ...


class LiteLLMProvider(SummaryProvider):
    """Any provider litellm knows, addressed by model name."""

    def __init__(
        self, model: str, api_key: str, max_tokens: int, temperature: float, timeout: float, api_base: str | None = None
    ) -> None:
        super().__init__(model, max_tokens, temperature, timeout)
        self._api_key = api_key
        self._api_base = api_base

    async def _complete(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        response = await litellm.acompletion(
            model=self.model,
            messages=messages,
            api_key=self._api_key,
            api_base=self._api_base,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.timeout,
        )
        usage = getattr(response, "usage", None)
        if usage:
            logger.debug(
                "summary_usage",
                model=self.model,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
            )
        return dict(response.model_dump())


class HttpChatProvider(SummaryProvider):
    """Raw POST to an OpenAI-compatible chat completions URL with bearer auth.

    Used for endpoints whose answers do not follow the chat completion schema
    closely enough for litellm (flat `summary` or `content` fields).
    """

    def __init__(
        self,
        url: str,
        model: str,
        api_key: str,
        max_tokens: int,
        temperature: float,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(model, max_tokens, temperature, timeout)
        self.url = url
        self._api_key = api_key
        self._transport = transport

    async def _complete(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        payload = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, json=payload, headers=headers)

        if response.is_error:
            logger.warning("summary_upstream_rejected", url=self.url, status_code=response.status_code)
            raise UpstreamError(f"Summary API error: {response.status_code} {response.text[:200]}")

        data = response.json()
        if isinstance(data, dict) and data.get("error"):
            raise UpstreamError(f"Summary API error: {data['error']}")
        return data if isinstance(data, dict) else {"content": data}


def create_summary_provider(config: Config) -> SummaryProvider | None:
    """Build the provider selected in config, or None when no API key is set."""
    if not config.llm_api_key:
        return None

    if config.llm_provider == "http":
        if not config.llm_api_base:
            raise ValueError("llm_api_base is required for the http summary provider")
        return HttpChatProvider(
            url=config.llm_api_base,
            model=config.llm_model,
            api_key=config.llm_api_key,
            max_tokens=config.summary_max_tokens,
            temperature=config.summary_temperature,
            timeout=config.summary_timeout_seconds,
        )

    return LiteLLMProvider(
        model=config.llm_model,
        api_key=config.llm_api_key,
        api_base=config.llm_api_base,
        max_tokens=config.summary_max_tokens,
        temperature=config.summary_temperature,
        timeout=config.summary_timeout_seconds,
    )
