"""Browser chat assistant relaying messages to a hosted chat-completion API."""

__version__ = "0.1.0"
