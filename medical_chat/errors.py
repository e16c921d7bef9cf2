"""
Error taxonomy for the chat relay.

Every error carries the HTTP status it maps to at the transport boundary and
the message returned to the browser. None of them is retried.
"""


class ChatError(Exception):
    """Base class for all relay-side errors."""
    status_code: int = 500
    default_message: str = "Failed to get AI response. Please try again later."

    def __init__(self, message: str = "", detail: str = ""):
        self.message = message or self.default_message
        self.detail = detail  # server-side diagnostics only
        super().__init__(self.message)


class ValidationError(ChatError):
    """The request carried no message."""
    status_code = 400
    default_message = "Message is required"


class AuthError(ChatError):
    """No session, or the remote API rejected the credential."""
    status_code = 401
    default_message = "Unauthorized"


class ConfigError(ChatError):
    """The API credential is not configured."""
    status_code = 500
    default_message = "OpenAI API key not configured"


class RateLimitError(ChatError):
    status_code = 429
    default_message = "API quota exceeded"


class EmptyResponseError(ChatError):
    """The remote call succeeded but returned no text."""
    status_code = 500


class UnknownRelayError(ChatError):
    status_code = 500


class ConversationStateError(RuntimeError):
    """A conversation operation was called out of turn."""
