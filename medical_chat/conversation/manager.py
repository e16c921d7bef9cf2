import logging
from typing import Dict, List, Optional, Tuple

from .schema import Role, Turn
from ..errors import ConversationStateError
from ..intelligence.result import RelayResult
from ..prompts.templates import APOLOGY_MESSAGE, WELCOME_BACK_MESSAGE, WELCOME_MESSAGE

logger = logging.getLogger(__name__)

ContextWindow = List[Dict[str, str]]


class Conversation:
    """
    Ordered, append-only list of turns with a single in-flight request guard.

    State goes idle -> sending on append_user_turn and back to idle on
    resolve. Sends while a request is outstanding are rejected, not queued.
    """

    def __init__(self, context_window: int = 10, welcome: str = WELCOME_MESSAGE):
        self.max_context = context_window
        self._turns: List[Turn] = [Turn(role=Role.ASSISTANT, content=welcome)]
        self._pending = False

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def state(self) -> str:
        return "sending" if self._pending else "idle"

    def context_window(self) -> ContextWindow:
        """The last max_context turns as {role, content} pairs, oldest first."""
        if self.max_context <= 0:
            return []
        return [turn.to_message() for turn in self._turns[-self.max_context:]]

    def append_user_turn(self, text: str) -> Optional[ContextWindow]:
        """
        Record a user message and mark a request as outstanding.

        Returns the context window captured before the new turn was added,
        or None when the text is blank or a request is already pending.
        """
        if not text or not text.strip():
            logger.debug("Ignoring blank message")
            return None
        if self._pending:
            logger.debug("Request already pending, ignoring message")
            return None

        window = self.context_window()
        self._turns.append(Turn(role=Role.USER, content=text))
        self._pending = True
        return window

    def resolve(self, result: RelayResult) -> Turn:
        """Append the assistant reply (or the apology) and clear the pending flag."""
        if not self._pending:
            raise ConversationStateError("resolve() called with no pending request")

        if result.ok:
            turn = Turn(role=Role.ASSISTANT, content=result.text)
        else:
            logger.warning("Relay failed (%s): %s", result.error.value, result.detail)
            turn = Turn(role=Role.ASSISTANT, content=APOLOGY_MESSAGE)

        self._turns.append(turn)
        self._pending = False
        return turn

    def reset(self) -> None:
        """
        Replace the conversation with a single welcome-back turn.

        An outstanding request is neither cancelled nor forgotten: the
        pending flag stays set and its eventual resolve() appends to the
        fresh conversation.
        """
        if self._pending:
            logger.info("Conversation reset while a request is pending")
        self._turns = [Turn(role=Role.ASSISTANT, content=WELCOME_BACK_MESSAGE)]
