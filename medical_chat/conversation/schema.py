import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def _new_turn_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Turn:
    """A single message in the conversation."""
    role: Role
    content: str
    id: str = field(default_factory=_new_turn_id)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_message(self) -> Dict[str, str]:
        """Project to the {role, content} pair sent to the model."""
        return {"role": self.role.value, "content": self.content}
