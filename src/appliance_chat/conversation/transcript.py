"""Transcript store.

The single source of truth for what is displayed and what is sent
upstream. Entries are only ever appended or wholly reset.
"""

from collections.abc import Callable, Iterator

from .models import Message

GREETING = (
    "Hello, I am Max the Appliance Pro, your personal A.I. Assistant. "
    "How can I help you with your appliance repair today?"
)

TranscriptListener = Callable[[tuple[Message, ...]], None]


class Transcript:
    """Ordered, append-only conversation history.

    Starts with the assistant greeting. Listeners registered through
    :meth:`subscribe` are called with a snapshot after every mutation.
    """

    def __init__(self, greeting: str = GREETING) -> None:
        self._greeting = greeting
        self._messages: list[Message] = []
        self._listeners: list[TranscriptListener] = []
        self._messages.append(Message(role="assistant", content=self._greeting))

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the current entries, oldest first."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def subscribe(self, listener: TranscriptListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def reset(self) -> None:
        """Replace the whole transcript with the greeting."""
        self._messages = [Message(role="assistant", content=self._greeting)]
        self._notify()

    def append_user(self, text: str) -> Message | None:
        """Append a user entry. Empty text is ignored."""
        if not text:
            return None
        message = Message(role="user", content=text)
        self._messages.append(message)
        self._notify()
        return message

    def append_assistant(self, text: str) -> Message:
        """Append an assistant reply."""
        message = Message(role="assistant", content=text)
        self._messages.append(message)
        self._notify()
        return message

    def last_response(self) -> str | None:
        """Content of the most recent assistant entry."""
        for message in reversed(self._messages):
            if message.role == "assistant":
                return message.content
        return None

    def _notify(self) -> None:
        snapshot = self.messages
        for listener in list(self._listeners):
            listener(snapshot)
