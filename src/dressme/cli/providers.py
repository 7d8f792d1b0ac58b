"""Provider factory functions for CLI.

Centralizes creation of the assistant client and media backends from
settings. Hides configuration details from command implementations.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from ..assistant import AssistantClient, create_assistant_client
from ..config import Settings, load_settings
from ..media import (
    AudioPlayer,
    FrameSource,
    SpeechFallback,
    create_audio_player,
    create_frame_source,
    create_speech_fallback,
)

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> Settings:
    """Load settings from the environment.

    Raises:
        typer.Exit: If a variable holds an invalid value
    """
    con = console or _console
    try:
        return load_settings()
    except ValidationError as e:
        con.print("[red]Error: invalid configuration[/red]")
        con.print(str(e), markup=False)
        raise typer.Exit(code=1)


def get_assistant(settings: Settings, console: Console | None = None) -> AssistantClient | None:
    """Create the assistant client, or None if no API key is configured.

    Environment variables:
        OPENAI_API_KEY: OpenAI API key (required for remote features)
        OPENAI_BASE_URL: API base URL (default: https://api.openai.com/v1)
    """
    con = console or _console
    if not settings.has_api_key:
        con.print("[yellow]Warning: OPENAI_API_KEY not set, remote features disabled[/yellow]")
        return None

    return create_assistant_client(
        "openai",
        api_key=settings.api_key,
        base_url=settings.base_url,
        vision_model=settings.vision_model,
        chat_model=settings.chat_model,
        speech_model=settings.speech_model,
        temperature=settings.temperature,
        request_timeout=settings.request_timeout,
        resource_timeout=settings.resource_timeout,
    )


def get_frame_source(image: Path | None, camera_index: int) -> FrameSource:
    """Frame source for a still image if given, otherwise the camera."""
    if image is not None:
        return create_frame_source("image", path=image)
    return create_frame_source("camera", camera_index=camera_index)


def get_outputs(mute: bool, console: Console | None = None) -> tuple[AudioPlayer, SpeechFallback]:
    """Audio player and local speech fallback, silent when muted.

    Raises:
        typer.Exit: If the audio stack (PortAudio) cannot be loaded
    """
    con = console or _console
    if mute:
        return create_audio_player("none"), create_speech_fallback("none")

    try:
        player = create_audio_player("sounddevice")
    except OSError as e:
        con.print(f"[red]Error: audio output unavailable ({e}). Use --mute to run silently.[/red]")
        raise typer.Exit(code=1)
    return player, create_speech_fallback("pyttsx3")
