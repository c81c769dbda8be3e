"""Main CLI application using Typer."""
import asyncio

import typer
from pydantic import ValidationError as SettingsError
from rich.console import Console

from .. import __version__
from ..config import ChatSettings
from .providers import build_session

# Create Typer app
app = typer.Typer(
    name="appliance-chat",
    help="Chat with Max the Appliance Pro, an appliance repair assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def run(
    provider: str | None = typer.Option(
        None,
        "--provider",
        "-p",
        help="Completion provider: openai or deepseek (default: APPLIANCE_CHAT_PROVIDER or openai)"
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (default: APPLIANCE_CHAT_MODEL or the provider's default)"
    ),
    locale: str | None = typer.Option(
        None,
        "--locale",
        help="Dictation locale, e.g. en-US (default: APPLIANCE_CHAT_SPEECH_LOCALE or en-US)"
    ),
    no_voice: bool = typer.Option(
        False,
        "--no-voice",
        help="Disable dictation and playback"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the chat TUI."""
    try:
        settings = ChatSettings.from_env(provider=provider, model=model, speech_locale=locale)
    except SettingsError as e:
        console.print(f"[red]Error: invalid configuration[/red]\n{e}")
        raise typer.Exit(code=1) from e

    session = build_session(settings, console, voice=not no_voice)

    async def _tui():
        from ..ui import run_chat_tui

        await run_chat_tui(session, log_level=log_level)

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass
    console.print("\n[dim]Goodbye![/dim]")


@app.command()
def version():
    """Show the installed version."""
    console.print(f"appliance-chat {__version__}")


if __name__ == "__main__":
    app()
