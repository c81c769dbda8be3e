from pydantic import BaseModel, ConfigDict, Field


class LLMResponse(BaseModel):
    """Response from a completion provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Reply text, read from choices[0].message.content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
