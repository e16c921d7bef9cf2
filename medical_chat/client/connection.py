import asyncio
import logging
from typing import Optional, Sequence

import httpx

from ..config import ChatConfig, ClientConfig
from ..conversation import Conversation, Turn
from ..intelligence.result import RelayErrorKind, RelayResult
from ..prompts.templates import QUICK_ACTIONS

logger = logging.getLogger(__name__)

_STATUS_KINDS = {
    401: RelayErrorKind.UNAUTHORIZED,
    429: RelayErrorKind.RATE_LIMITED,
}


class ChatClient:
    """
    UI-side driver: owns a Conversation and posts each message, with its
    bounded history, to the relay host.
    """

    def __init__(
        self,
        config: ClientConfig,
        chat: Optional[ChatConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        chat = chat or ChatConfig()
        self.conversation = Conversation(context_window=chat.context_window)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self):
        """Open the HTTP client."""
        headers = {}
        if self.config.session_token:
            headers["Authorization"] = f"Bearer {self.config.session_token}"
        self._client = httpx.AsyncClient(
            base_url=self.config.server_url,
            headers=headers,
            transport=self._transport,
        )
        logger.info("Chat client ready (server=%s)", self.config.server_url)

    async def stop(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def quick_actions(self) -> Sequence[str]:
        """Preset prompts, offered only while the conversation is fresh."""
        return QUICK_ACTIONS if len(self.conversation) <= 1 else ()

    def reset(self):
        self.conversation.reset()

    async def send(self, text: str) -> Optional[Turn]:
        """
        Send a message and return the assistant turn it produced.

        Returns None when the conversation refused the message (blank text
        or a request already in flight).
        """
        if not self._client:
            raise RuntimeError("Chat client not started")

        window = self.conversation.append_user_turn(text)
        if window is None:
            return None

        try:
            result = await self._post(text, window)
        except asyncio.CancelledError:
            self.conversation.resolve(
                RelayResult.failure(RelayErrorKind.UNKNOWN, "Request cancelled")
            )
            raise
        except Exception as e:
            logger.exception("Chat request failed unexpectedly")
            result = RelayResult.failure(RelayErrorKind.UNKNOWN, f"{type(e).__name__}: {e}")
        return self.conversation.resolve(result)

    async def _post(self, text: str, window) -> RelayResult:
        try:
            response = await self._client.post(
                self.config.endpoint,
                json={"message": text, "conversationHistory": window},
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            return RelayResult.failure(RelayErrorKind.UNKNOWN, f"{type(e).__name__}: {e}")

        message = data.get("message") if isinstance(data, dict) else None
        if response.status_code != 200:
            kind = _STATUS_KINDS.get(response.status_code, RelayErrorKind.UNKNOWN)
            return RelayResult.failure(kind, f"HTTP {response.status_code}: {message}")
        if not message:
            return RelayResult.failure(RelayErrorKind.EMPTY_RESPONSE, "Empty reply from server")
        return RelayResult.success(message, data.get("usage"))
