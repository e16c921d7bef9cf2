"""
FastAPI relay host: serves the browser chat page and forwards chat
messages to the completion relay on behalf of signed-in users.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pydantic
from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from ..auth import Session, SessionVerifier
from ..config import AppConfig
from ..conversation.schema import Role
from ..errors import ChatError, ConfigError, ValidationError
from ..intelligence.relay import CompletionRelay
from ..prompts.templates import (
    APOLOGY_MESSAGE,
    QUICK_ACTIONS,
    WELCOME_BACK_MESSAGE,
    WELCOME_MESSAGE,
)

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
PAGE_SETTINGS_MARKER = "__CHAT_SETTINGS__"


class HistoryItem(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    message: Optional[str] = None
    conversationHistory: List[HistoryItem] = Field(default_factory=list)


class ChatResponse(BaseModel):
    message: str
    usage: Optional[Dict[str, Any]] = None


async def parse_chat_request(request: Request) -> ChatRequest:
    """Decode and validate the body, reporting failures as ValidationError."""
    try:
        raw = await request.json()
    except ValueError as e:
        raise ValidationError("Invalid request body", str(e))
    try:
        return ChatRequest.model_validate(raw)
    except pydantic.ValidationError as e:
        if any(err["loc"][:1] == ("message",) for err in e.errors()):
            raise ValidationError(detail=str(e))
        raise ValidationError("Invalid request body", str(e))


class ChatServer:
    """
    FastAPI application exposing the chat endpoint. Holds no conversation
    state; the caller sends its own bounded history with every message.
    """

    def __init__(self, config: AppConfig, relay: CompletionRelay, sessions: SessionVerifier):
        self.config = config
        self.relay = relay
        self.sessions = sessions
        self.app = FastAPI(title="Medical Chat Assistant", docs_url=None)

        self._setup_routes()

    def page_settings(self) -> Dict[str, Any]:
        """Texts and limits the browser page shares with the Python client."""
        return {
            "contextWindow": self.config.chat.context_window,
            "welcome": WELCOME_MESSAGE,
            "welcomeBack": WELCOME_BACK_MESSAGE,
            "apology": APOLOGY_MESSAGE,
            "quickActions": list(QUICK_ACTIONS),
        }

    def render_index(self) -> str:
        html_path = STATIC_DIR / "index.html"
        if not html_path.exists():
            return "<h1>Medical Chat Assistant</h1><p>Static files not found.</p>"
        settings = json.dumps(self.page_settings(), ensure_ascii=False).replace("</", "<\\/")
        return html_path.read_text(encoding="utf-8").replace(PAGE_SETTINGS_MARKER, settings)

    def _setup_routes(self):
        """Configure FastAPI routes."""
        require_session = self.sessions.dependency()

        @self.app.exception_handler(ChatError)
        async def chat_error_handler(request: Request, exc: ChatError):
            if exc.status_code >= 500:
                logger.error("%s: %s %s", type(exc).__name__, exc.message, exc.detail)
            else:
                logger.warning("%s: %s %s", type(exc).__name__, exc.message, exc.detail)
            return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

        @self.app.get("/")
        async def index():
            return HTMLResponse(self.render_index())

        @self.app.get("/health")
        async def health():
            return {"status": "ok"}

        # The body is read inside the handler so the session check runs first
        # and malformed bodies still answer with {message}.
        @self.app.post("/api/chat/medical", response_model=ChatResponse, response_model_exclude_none=True)
        async def chat(request: Request, session: Session = Depends(require_session)):
            body = await parse_chat_request(request)
            if not body.message or not body.message.strip():
                raise ValidationError()
            if not self.relay.config.api_key:
                raise ConfigError()

            limit = self.config.chat.context_window
            history = [
                {"role": item.role.value, "content": item.content}
                for item in body.conversationHistory
            ]
            history = history[-limit:] if limit > 0 else []

            logger.info(
                "Chat request: message_len=%d history_turns=%d",
                len(body.message), len(history),
            )
            result = await self.relay.complete(body.message, history)
            if not result.ok:
                raise result.to_error()

            return ChatResponse(message=result.text, usage=result.usage)

    async def start(self):
        """Start the uvicorn server."""
        import uvicorn
        config = uvicorn.Config(
            self.app,
            host=self.config.server.host,
            port=self.config.server.port,
            log_level="warning",
            access_log=False,
        )
        server = uvicorn.Server(config)
        logger.info(
            "Chat server starting on %s:%d",
            self.config.server.host, self.config.server.port
        )
        await server.serve()
