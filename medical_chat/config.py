"""
Centralized configuration for the Medical Chat Assistant.
All settings loaded from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


@dataclass
class LLMConfig:
    """Remote completion API configuration.

    Model and decoding parameters are fixed for every request; only the
    credential, endpoint and transport timeout come from the environment.
    """
    api_key: str = ""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o"
    max_tokens: int = 1000
    temperature: float = 0.7
    presence_penalty: float = 0.1
    frequency_penalty: float = 0.1
    timeout: float = 60.0


@dataclass
class ServerConfig:
    """HTTP relay host configuration."""
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class AuthConfig:
    """Tokens of externally established sessions accepted by the relay host."""
    session_tokens: List[str] = field(default_factory=list)
    cookie_name: str = "session_token"


@dataclass
class ChatConfig:
    """Conversation behaviour shared by the client and the relay host."""
    context_window: int = 10  # turns of history sent with each message


@dataclass
class ClientConfig:
    """Chat client configuration (terminal front end)."""
    server_url: str = "http://127.0.0.1:3000"
    session_token: str = ""
    endpoint: str = "/api/chat/medical"


@dataclass
class AppConfig:
    """Top-level application configuration."""
    llm: LLMConfig = field(default_factory=LLMConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    client: ClientConfig = field(default_factory=ClientConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables (including .env file)."""
        load_dotenv()
        config = cls()

        # LLM config. A missing key is reported per request, not here.
        config.llm.api_key = os.getenv("OPENAI_API_KEY", config.llm.api_key)
        config.llm.base_url = os.getenv("LLM_BASE_URL", config.llm.base_url)
        timeout = os.getenv("LLM_TIMEOUT")
        if timeout:
            config.llm.timeout = float(timeout)

        # Server config
        config.server.host = os.getenv("SERVER_HOST", config.server.host)
        port = os.getenv("SERVER_PORT")
        if port:
            config.server.port = int(port)

        # Auth config
        tokens = os.getenv("CHAT_SESSION_TOKENS", "")
        config.auth.session_tokens = [t.strip() for t in tokens.split(",") if t.strip()]

        # Client config
        config.client.server_url = os.getenv("CHAT_SERVER_URL", config.client.server_url)
        config.client.session_token = os.getenv(
            "CHAT_SESSION_TOKEN", config.client.session_token
        )

        return config
