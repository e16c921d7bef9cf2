"""
Completion Relay — single-shot client for OpenAI-compatible chat APIs.
Wraps one user message with the medical system prompt and recent history.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import LLMConfig
from ..prompts.templates import MEDICAL_SYSTEM_PROMPT
from .result import RelayErrorKind, RelayResult

logger = logging.getLogger(__name__)


class CompletionRelay:
    """
    Async chat-completion client using httpx.
    Each call is a single attempt; rate limiting is left to the remote API.
    """

    def __init__(self, config: LLMConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        """Create the HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(self.config.timeout, connect=10.0),
            transport=self._transport,
        )
        logger.info("Completion relay initialized (model=%s)", self.config.model)

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_messages(
        self, user_text: str, context_window: List[Dict[str, str]]
    ) -> List[Dict[str, str]]:
        messages = [{"role": "system", "content": MEDICAL_SYSTEM_PROMPT}]
        messages.extend(
            {"role": m["role"], "content": m["content"]} for m in context_window
        )
        messages.append({"role": "user", "content": user_text})
        return messages

    def build_payload(
        self, user_text: str, context_window: List[Dict[str, str]]
    ) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": self.build_messages(user_text, context_window),
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "presence_penalty": self.config.presence_penalty,
            "frequency_penalty": self.config.frequency_penalty,
            "stream": False,
        }

    async def complete(
        self, user_text: str, context_window: List[Dict[str, str]]
    ) -> RelayResult:
        """
        Send one message with its history and return the top reply.
        Never raises for remote or transport failures; those come back as
        a classified RelayResult.
        """
        if not self._client:
            raise RuntimeError("Completion relay not initialized")

        payload = self.build_payload(user_text, context_window)
        headers = {"Authorization": f"Bearer {self.config.api_key}"}

        try:
            response = await self._client.post(
                "/chat/completions", json=payload, headers=headers
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            result = self._classify_status(e.response)
            logger.error(
                "Completion API error: HTTP %d (%s)",
                e.response.status_code, result.error.value,
            )
            return result
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Completion request failed: %s: %s", type(e).__name__, e)
            return RelayResult.failure(RelayErrorKind.UNKNOWN, f"{type(e).__name__}: {e}")

        try:
            content = data["choices"][0]["message"].get("content")
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error("Malformed completion response: %s", e)
            return RelayResult.failure(RelayErrorKind.UNKNOWN, "Malformed completion response")

        if not content:
            logger.error("Completion API returned no text")
            return RelayResult.failure(RelayErrorKind.EMPTY_RESPONSE, "No response from model")

        logger.info("Completion received (%d chars)", len(content))
        return RelayResult.success(content, data.get("usage"))

    @staticmethod
    def _classify_status(response: httpx.Response) -> RelayResult:
        """Map an HTTP error response onto a relay error kind."""
        status = response.status_code
        message = ""
        code = ""
        try:
            error = response.json().get("error") or {}
            message = str(error.get("message") or "")
            code = str(error.get("code") or error.get("type") or "")
        except (ValueError, AttributeError):
            pass

        detail = f"HTTP {status}: {message or response.reason_phrase}"
        marker = f"{code} {message}".lower()

        if status in (401, 403) or "api key" in marker or "invalid_api_key" in marker:
            return RelayResult.failure(RelayErrorKind.UNAUTHORIZED, detail)
        if status == 429 or "quota" in marker:
            return RelayResult.failure(RelayErrorKind.RATE_LIMITED, detail)
        return RelayResult.failure(RelayErrorKind.UNKNOWN, detail)
