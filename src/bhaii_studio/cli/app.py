"""Main CLI application using Typer."""
import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..context import AppContext
from ..features import SLIDE_DURATION_SECONDS, ImageEditorView, SlideshowPlayer
from ..models import AspectRatio, ImageResult, Sender, decode_data_uri
from ..preferences import PreferenceStore

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="bhaii-studio",
    help="Bhaii AI Studio: persona chat, image editing, slideshows and HD images",
    no_args_is_help=True,
    add_completion=True,
)
prefs_app = typer.Typer(help="Inspect or clear remembered preferences")
app.add_typer(prefs_app, name="prefs")

# Console for rich output
console = Console()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (debug, info, warning, error); defaults to BHAII_LOG_LEVEL"
    )
):
    """Configure logging for every command."""
    from ..config import load_settings

    level = (log_level or load_settings().log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _write_image(result: ImageResult, output: Path) -> None:
    if not result.image_url:
        console.print(f"[red]Error: {result.error or 'No image returned.'}[/red]")
        raise typer.Exit(code=1)
    mime_type, data = decode_data_uri(result.image_url)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]Saved {mime_type} image to {output}[/green]")


@app.command()
def tui():
    """Launch the interactive terminal UI."""
    from ..ui import run_textual_tui

    asyncio.run(run_textual_tui())


@app.command()
def chat(
    message: str = typer.Argument(..., help="Message for Bhaii"),
    name: str | None = typer.Option(
        None,
        "--name",
        "-n",
        help="Your name (stored only when remember-me is on)"
    ),
    remember: bool | None = typer.Option(
        None,
        "--remember/--no-remember",
        help="Turn remember-me on or off before sending (default: keep the stored setting)"
    ),
):
    """Send one message to Bhaii, continuing the remembered conversation."""
    async def _chat():
        context = AppContext.build()
        try:
            await context.open()
            if remember is not None:
                await context.session.set_remember_me(remember)
            if name is not None:
                await context.session.set_user_name(name)
            reply = await context.session.submit(message)
            if reply is None:
                console.print("[yellow]Nothing to send.[/yellow]")
                raise typer.Exit(code=1)
            console.print(Panel(reply.text, title="Bhaii", border_style="blue"))
        finally:
            await context.close()

    asyncio.run(_chat())


@app.command()
def edit(
    image: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Image to edit"
    ),
    prompt: str = typer.Argument(..., help="How to edit the image"),
    output: Path = typer.Option(
        Path("edited.png"),
        "--output",
        "-o",
        help="Where to write the edited image"
    ),
):
    """Edit an image with a text prompt."""
    async def _edit():
        context = AppContext.build()
        try:
            editor = ImageEditorView(context.gateway)
            if not editor.select_file(image):
                console.print(f"[red]Error: {editor.error}[/red]")
                raise typer.Exit(code=1)
            editor.prompt = prompt
            with console.status("Editing image..."):
                result = await editor.edit()
            if result is None:
                console.print(f"[red]Error: {editor.error}[/red]")
                raise typer.Exit(code=1)
            _write_image(result, output)
        finally:
            await context.close()

    asyncio.run(_edit())


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Description of the image"),
    aspect_ratio: AspectRatio = typer.Option(
        AspectRatio.SQUARE,
        "--aspect-ratio",
        "-a",
        help="Output aspect ratio"
    ),
    output: Path = typer.Option(
        Path("generated.jpg"),
        "--output",
        "-o",
        help="Where to write the generated image"
    ),
):
    """Generate an HD image from a text prompt."""
    async def _generate():
        context = AppContext.build()
        try:
            with console.status("Generating HD image... This may take a moment."):
                result = await context.gateway.generate_image(prompt, aspect_ratio)
            _write_image(result, output)
        finally:
            await context.close()

    asyncio.run(_generate())


@app.command()
def slideshow(
    source: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Text file, one slide per line"
    ),
    duration: float = typer.Option(
        SLIDE_DURATION_SECONDS,
        "--duration",
        "-d",
        min=0.1,
        help="Seconds per slide"
    ),
):
    """Play a text slideshow in the console."""
    async def _play():
        finished = asyncio.Event()

        def _render(player: SlideshowPlayer) -> None:
            if player.playing:
                console.print(Panel(
                    player.current_text,
                    title=f"Slide {player.index + 1}/{len(player.slides)}",
                    border_style="magenta",
                ))
            else:
                finished.set()

        player = SlideshowPlayer(slide_duration=duration, on_change=_render)
        if not player.generate(source.read_text(encoding="utf-8")):
            console.print(f"[red]Error: {player.error}[/red]")
            raise typer.Exit(code=1)
        try:
            await finished.wait()
        finally:
            player.stop()
        console.print(f"[dim]{player.status}[/dim]")

    asyncio.run(_play())


@prefs_app.command("show")
def prefs_show():
    """Show remembered name and transcript."""
    async def _show():
        context = AppContext.build()
        try:
            await context.storage.connect()
            prefs = await PreferenceStore(context.storage).load()
            if prefs is None:
                console.print("[dim]No remembered preferences.[/dim]")
                return

            console.print(f"[bold]Name:[/bold] {prefs.name or '-'}")
            console.print(f"[bold]Remember me:[/bold] {prefs.remember_me}")
            table = Table(title=f"Last chat ({len(prefs.last_chat)} messages)")
            table.add_column("Time", style="dim")
            table.add_column("Sender")
            table.add_column("Text")
            for msg in prefs.last_chat:
                sender = "You" if msg.sender == Sender.USER else "Bhaii"
                table.add_row(msg.timestamp.astimezone().strftime("%Y-%m-%d %H:%M"), sender, msg.text)
            console.print(table)
        finally:
            await context.close()

    asyncio.run(_show())


@prefs_app.command("clear")
def prefs_clear():
    """Forget the remembered name and transcript."""
    async def _clear():
        context = AppContext.build()
        try:
            await context.storage.connect()
            await PreferenceStore(context.storage).clear()
            console.print("[green]Preferences cleared.[/green]")
        finally:
            await context.close()

    asyncio.run(_clear())


if __name__ == "__main__":
    app()
