"""Data models for the conversation.

Hides the internal representation of a chat message.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """A single conversation message. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'system', 'user', or 'assistant'")
    content: str = Field(description="Content of the message")

    def to_payload(self) -> dict[str, str]:
        """Wire representation used in the completion request body."""
        return {"role": self.role, "content": self.content}
