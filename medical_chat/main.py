"""
Main orchestrator — wires the relay, session check and HTTP server together.
Entry point: python -m medical_chat
"""

import asyncio
import logging

from .auth import SessionVerifier
from .config import AppConfig
from .intelligence.relay import CompletionRelay
from .presentation.server import ChatServer

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("medical_chat")


async def main():
    """Bootstrap and run the relay host."""
    config = AppConfig.from_env()

    if not config.llm.api_key:
        # Requests will get a 500 until the key is set; the server still starts.
        logger.warning("OPENAI_API_KEY is not set")

    relay = CompletionRelay(config.llm)
    await relay.initialize()

    sessions = SessionVerifier.from_config(config.auth)
    server = ChatServer(config, relay, sessions)

    logger.info("🩺 Open http://%s:%d to chat", config.server.host, config.server.port)
    try:
        await server.start()
    except asyncio.CancelledError:
        logger.info("Server shutting down...")
    finally:
        await relay.close()


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
