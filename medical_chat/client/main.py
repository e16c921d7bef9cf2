"""
Terminal front end for the chat relay.
Entry point: python -m medical_chat.client.main
"""

import asyncio
import logging

from ..config import AppConfig
from .connection import ChatClient

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("chat_client")

HELP = "Commands: /clear to start over, /quit to exit."


def _print_turn(turn):
    stamp = turn.timestamp.strftime("%H:%M:%S")
    print(f"\n[{stamp}] Assistant:\n{turn.content}\n")


async def main():
    """Read messages from stdin and print the assistant's replies."""
    config = AppConfig.from_env()
    client = ChatClient(config.client, config.chat)
    await client.start()

    _print_turn(client.conversation.turns[0])
    print(HELP)

    loop = asyncio.get_running_loop()
    try:
        while True:
            if client.quick_actions:
                print("Try: " + " | ".join(client.quick_actions))
            text = await loop.run_in_executor(None, input, "You> ")
            command = text.strip().lower()
            if command in ("/quit", "/exit"):
                break
            if command == "/clear":
                client.reset()
                _print_turn(client.conversation.turns[0])
                continue

            turn = await client.send(text)
            if turn is not None:
                _print_turn(turn)
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        await client.stop()


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
