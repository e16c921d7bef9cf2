from .connection import ChatClient

__all__ = ["ChatClient"]
