"""Prompt composer.

Builds the request payload for one completion call: the fixed persona
system prompts, a bounded window of recent history, then the new user
utterance.
"""

from collections.abc import Iterable

from ..errors import ValidationError
from ..prompts import get_system_prompts
from .models import Message

# Number of trailing transcript entries sent with each request
HISTORY_WINDOW = 5


def system_messages() -> list[Message]:
    """The identity, persona and task-instruction messages, in order."""
    return [Message(role="system", content=text) for text in get_system_prompts()]


def compose(history: Iterable[Message], new_user_text: str) -> list[Message]:
    """Compose the ordered message list for a completion request.

    Args:
        history: Transcript entries as they stood *before* the new user
            message was appended
        new_user_text: The utterance being submitted

    Returns:
        ``3 + min(HISTORY_WINDOW, len(history)) + 1`` messages: the
        system prompts, the trailing history window in chronological
        order, and the new user message last

    Raises:
        ValidationError: If ``new_user_text`` is empty
    """
    if not new_user_text:
        raise ValidationError("Cannot compose a request for empty input")

    recent = list(history)[-HISTORY_WINDOW:]
    return [
        *system_messages(),
        *recent,
        Message(role="user", content=new_user_text),
    ]
