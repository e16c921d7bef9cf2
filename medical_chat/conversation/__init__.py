from .manager import Conversation, ContextWindow
from .schema import Role, Turn

__all__ = ["Conversation", "ContextWindow", "Role", "Turn"]
