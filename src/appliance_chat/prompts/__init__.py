"""Persona prompt management.

The three system prompts sent ahead of every request live in text files
next to this module. A ``prompts/`` directory in the working directory
overrides them, which is how a deployment swaps the persona.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

# Order is significant: identity, persona, task instructions
SYSTEM_PROMPT_NAMES = ("identity", "persona", "diagnosis")


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: appliance_chat/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content, stripped of surrounding whitespace

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").strip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_system_prompts() -> tuple[str, str, str]:
    """Get the identity, persona and task prompts, in that order."""
    identity, persona, diagnosis = (load_prompt(name) for name in SYSTEM_PROMPT_NAMES)
    return identity, persona, diagnosis


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "SYSTEM_PROMPT_NAMES",
    "clear_cache",
    "get_system_prompts",
    "load_prompt",
]
