"""Collaborator factory functions for CLI.

Centralizes creation of the completion provider, the speech services and
the session from :class:`~appliance_chat.config.ChatSettings`. Hides
configuration details from command implementations.
"""

import typer
from rich.console import Console

from ..config import API_KEY_ENV, ChatSettings
from ..errors import SpeechServiceError
from ..llm import LLMProvider, create_llm_provider
from ..session import ChatSession
from ..speech import SpeechRecognizer, SpeechSynthesizer, create_speech_recognizer, create_speech_synthesizer

# Default console for output
_console = Console()


def require_llm(settings: ChatSettings, console: Console | None = None) -> LLMProvider:
    """Create the completion provider, exiting if it is not configured.

    Args:
        settings: Session settings
        console: Optional Rich console for output

    Raises:
        typer.Exit: If the credential is missing or the provider is unknown
    """
    con = console or _console
    if not settings.api_key:
        env_var = API_KEY_ENV.get(settings.provider, "OPENAI_API_KEY")
        con.print(f"[red]Error: {env_var} not set in environment[/red]")
        raise typer.Exit(code=1)

    try:
        return create_llm_provider(settings.provider, **settings.provider_config())
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e


def get_speech(
    settings: ChatSettings, console: Console | None = None
) -> tuple[SpeechRecognizer | None, SpeechSynthesizer | None]:
    """Create the speech collaborators, or ``(None, None)`` if unavailable.

    Speech needs an OpenAI key and a working audio device; without either
    the chat still runs with the voice buttons disabled.
    """
    con = console or _console
    if not settings.speech_api_key:
        con.print("[yellow]Warning: OPENAI_API_KEY not set, voice features disabled[/yellow]")
        return None, None

    try:
        recognizer = create_speech_recognizer(
            "openai",
            api_key=settings.speech_api_key,
            model=settings.stt_model,
            max_seconds=settings.max_dictation_seconds,
        )
        synthesizer = create_speech_synthesizer(
            "openai",
            api_key=settings.speech_api_key,
            model=settings.tts_model,
            voice=settings.tts_voice,
        )
    except SpeechServiceError as e:
        con.print(f"[yellow]Warning: audio unavailable ({e}), voice features disabled[/yellow]")
        return None, None
    return recognizer, synthesizer


def build_session(
    settings: ChatSettings, console: Console | None = None, voice: bool = True
) -> ChatSession:
    """Create a session with every collaborator the settings allow."""
    llm = require_llm(settings, console)
    recognizer, synthesizer = get_speech(settings, console) if voice else (None, None)
    return ChatSession(llm, recognizer=recognizer, synthesizer=synthesizer, settings=settings)
