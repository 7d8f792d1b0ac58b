"""Main CLI application using Typer."""
import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..assistant import AssistantClient, SpeechOptions
from ..config import ENV_VARS, Settings
from ..logging_config import setup_logging
from ..media import AudioPlayer, FrameSource, SpeechFallback
from ..orchestration import ChatOrchestrator, ScanOrchestrator, ScanSnapshot, ScanState
from .providers import get_assistant, get_frame_source, get_outputs, get_settings

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="dressme",
    help="Point a camera at a garment and hear a styling tip",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q")


def _prepare(log_level: str | None) -> Settings:
    settings = get_settings(console)
    setup_logging(log_level or settings.log_level)
    return settings


def _speech_options(settings: Settings) -> SpeechOptions:
    return SpeechOptions(voice=settings.voice, audio_format=settings.audio_format)


def _print_scan_update(snapshot: ScanSnapshot) -> None:
    """Render scan progress as it happens."""
    if snapshot.state is ScanState.ANALYZING:
        console.print("[dim]Analyzing...[/dim]")
    elif snapshot.state is ScanState.SPEAKING_REMOTE:
        console.print(Panel(escape(snapshot.advice), title="Advice", border_style="cyan"))
    elif snapshot.state is ScanState.SPEAKING_LOCAL:
        console.print("[dim]Remote voice unavailable, speaking locally[/dim]")
    elif snapshot.state is ScanState.FAILED:
        console.print(f"[red]{escape(snapshot.advice)}[/red]")


def _print_rejected(scanner: ScanOrchestrator) -> None:
    """Explain why request_scan() did not start a cycle."""
    if scanner.is_busy:
        console.print("[dim]Scan already in progress[/dim]")
    else:
        console.print(f"[yellow]{escape(scanner.advice)}[/yellow]")


async def _close_all(
    client: AssistantClient | None,
    frames: FrameSource,
    speech: SpeechFallback,
) -> None:
    frames.stop()
    if hasattr(speech, "close"):
        speech.close()
    if client is not None:
        await client.close()


async def _wait_for_output(player: AudioPlayer, speech: SpeechFallback) -> None:
    await asyncio.to_thread(player.wait)
    await asyncio.to_thread(speech.wait)


async def _chat_loop(chat: ChatOrchestrator, read: Callable[[str], Awaitable[str]]) -> None:
    """Interactive chat until the user leaves."""
    console.print("[bold cyan]DressMe Chat[/bold cyan]")
    console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

    while True:
        try:
            user_input = await read("[bold yellow]You:[/bold yellow] ")
        except (KeyboardInterrupt, EOFError):
            console.print()
            break

        if user_input.strip().lower() in EXIT_WORDS:
            break

        with console.status("[dim]Thinking...[/dim]"):
            reply = await chat.send(user_input)

        if reply is None:
            if chat.notice:
                console.print(f"[yellow]{escape(chat.notice)}[/yellow]")
            continue

        console.print(f"[bold green]Assistant:[/bold green] {escape(reply.content)}\n")


async def _read_line(prompt: str) -> str:
    return await asyncio.to_thread(console.input, prompt)


@app.command()
def scan(
    image: Path | None = typer.Option(
        None,
        "--image",
        "-i",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Analyze an image file instead of the camera"
    ),
    camera: int | None = typer.Option(
        None,
        "--camera",
        "-c",
        help="Camera index (default: DRESSME_CAMERA_INDEX or 0)"
    ),
    warmup: float = typer.Option(
        2.0,
        "--warmup",
        "-w",
        help="Seconds to wait for the first camera frame"
    ),
    mute: bool = typer.Option(
        False,
        "--mute",
        "-m",
        help="Do not play any audio"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Scan one garment and speak a styling tip."""
    async def _scan() -> ScanSnapshot:
        settings = _prepare(log_level)
        frames = get_frame_source(image, camera if camera is not None else settings.camera_index)
        player, speech = get_outputs(mute, console)
        client = get_assistant(settings, console)

        try:
            frames.start()
            if hasattr(frames, "wait_for_frame"):
                await asyncio.to_thread(frames.wait_for_frame, warmup)

            scanner = ScanOrchestrator(
                client,
                frames,
                player,
                speech,
                speech_options=_speech_options(settings),
                on_update=_print_scan_update,
            )

            task = scanner.request_scan()
            if task is None:
                _print_rejected(scanner)
                return scanner.snapshot()

            await task
            if scanner.state is ScanState.DONE:
                await _wait_for_output(player, speech)
            return scanner.snapshot()
        finally:
            await _close_all(client, frames, speech)

    result = asyncio.run(_scan())
    if result.state is not ScanState.DONE:
        raise typer.Exit(code=1)


@app.command()
def live(
    camera: int | None = typer.Option(
        None,
        "--camera",
        "-c",
        help="Camera index (default: DRESSME_CAMERA_INDEX or 0)"
    ),
    mute: bool = typer.Option(
        False,
        "--mute",
        "-m",
        help="Do not play any audio"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Keep the camera running and scan on demand."""
    async def _live():
        settings = _prepare(log_level)
        frames = get_frame_source(None, camera if camera is not None else settings.camera_index)
        player, speech = get_outputs(mute, console)
        client = get_assistant(settings, console)
        scanner = ScanOrchestrator(
            client,
            frames,
            player,
            speech,
            speech_options=_speech_options(settings),
            on_update=_print_scan_update,
        )
        chat = ChatOrchestrator(
            client,
            model=settings.chat_model,
            temperature=settings.temperature,
        )
        running: set[asyncio.Task] = set()

        console.print("[bold cyan]DressMe Live[/bold cyan]")
        console.print("[dim]Enter: scan | s: stop speaking | c: chat | q: quit[/dim]\n")

        try:
            frames.start()
            while True:
                try:
                    command = (await _read_line("[bold yellow]>[/bold yellow] ")).strip().lower()
                except (KeyboardInterrupt, EOFError):
                    console.print()
                    break

                if command in EXIT_WORDS:
                    break
                elif command in ("", "scan"):
                    task = scanner.request_scan()
                    if task is None:
                        _print_rejected(scanner)
                    else:
                        running.add(task)
                        task.add_done_callback(running.discard)
                elif command in ("s", "stop"):
                    scanner.stop_speaking()
                elif command in ("c", "chat"):
                    await _chat_loop(chat, _read_line)
                else:
                    console.print("[dim]Enter: scan | s: stop speaking | c: chat | q: quit[/dim]")
        finally:
            scanner.stop_speaking()
            for task in list(running):
                task.cancel()
            await _close_all(client, frames, speech)
            console.print("[dim]Goodbye![/dim]")

    try:
        asyncio.run(_live())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, or error"
    ),
):
    """Interactive text chat with the fashion assistant."""
    async def _chat():
        settings = _prepare(log_level)
        client = get_assistant(settings, console)
        session = ChatOrchestrator(
            client,
            model=settings.chat_model,
            temperature=settings.temperature,
        )
        try:
            await _chat_loop(session, _read_line)
        finally:
            if client is not None:
                await client.close()
            console.print("[dim]Goodbye![/dim]")

    asyncio.run(_chat())


@app.command(name="config")
def show_config():
    """Show the effective configuration."""
    settings = get_settings(console)

    table = Table(title="DressMe Configuration", show_header=True)
    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="green")

    for var, field_name in ENV_VARS.items():
        if field_name == "api_key":
            value = settings.masked_api_key()
        else:
            value = str(getattr(settings, field_name))
        table.add_row(var, value)

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
