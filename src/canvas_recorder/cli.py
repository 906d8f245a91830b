"""CLI interface for canvas-recorder."""

import importlib
import importlib.util
import logging
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .constants import DEFAULT_COLOR, DEFAULT_FPS, DEFAULT_IMAGE_FORMAT, DEFAULT_SIZE
from .errors import RecorderError
from .output import media_type_for_image_format, supported_image_formats
from .scheduler import DrawCallback
from .session import RecorderSession

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_IMAGE_FORMATS_TEXT = ", ".join(supported_image_formats()).upper()

app = typer.Typer(help="Record draw functions into ZIP archives of still frames.")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


@app.command()
def record(
    sketch: str = typer.Argument(
        ..., help="Draw function as module:function or path/to/file.py:function"
    ),
    output: str = typer.Option("frames.zip", "--output", "-o", help="Archive file to write"),
    width: int = typer.Option(DEFAULT_SIZE[0], "--width", "-W", help="Surface width in pixels"),
    height: int = typer.Option(DEFAULT_SIZE[1], "--height", "-H", help="Surface height in pixels"),
    fps: int = typer.Option(
        DEFAULT_FPS,
        "--fps",
        envvar="CANVAS_RECORDER_FPS",
        help="Frames per second of the recorded timeline",
    ),
    frames: int = typer.Option(60, "--frames", "-n", help="Number of frames to record"),
    color: str = typer.Option(
        DEFAULT_COLOR,
        "--color",
        envvar="CANVAS_RECORDER_COLOR",
        help="Background color, or 'none' for transparent",
    ),
    clear: bool = typer.Option(True, "--clear/--no-clear", help="Clear the surface before each frame"),
    image_format: str = typer.Option(
        DEFAULT_IMAGE_FORMAT,
        "--format",
        "-f",
        envvar="CANVAS_RECORDER_FORMAT",
        help=f"Frame image format ({SUPPORTED_IMAGE_FORMATS_TEXT})",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every tick"),
) -> None:
    """
    Record a draw function frame by frame and save the frames as a ZIP archive.

    Examples:
      # Record 120 frames of sketches/orbit.py:draw at 30 fps
      canvas-recorder record sketches/orbit.py:draw -n 120 --fps 30 -o orbit.zip
    """
    try:
        if frames <= 0:
            raise CLIError("--frames must be a positive number")
        if verbose:
            _configure_logging()

        draw = _load_sketch(sketch)
        session = RecorderSession()
        session.configure(
            size=(width, height),
            color=None if color.lower() == "none" else color,
            clear=clear,
            record=True,
            fps=fps,
            frames=frames,
            image_format=image_format,
        )
        session.register_draw_callback(draw)

        console.print(f"[bold blue]Recording {frames} frames of {sketch}...[/bold blue]")
        archive = session.run_sync()
        if archive is None:
            raise CLIError("No frames were captured")

        console.print(f"[bold blue]Saving to {output}...[/bold blue]")
        try:
            archive.write(output)
        except IOError as e:
            raise CLIError(f"Failed to save file '{output}': {e}")
        console.print(f"[green]✓[/green] {len(archive)} frames saved to {output}")

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except RecorderError as e:
        err_console.print(f"[bold red]Recorder error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


@app.command()
def formats() -> None:
    """List the supported frame image formats."""
    table = Table(title="Frame formats")
    table.add_column("Format")
    table.add_column("Media type")
    for name in supported_image_formats():
        table.add_row(name, media_type_for_image_format(name))
    console.print(table)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console)],
    )


def _load_sketch(target: str) -> DrawCallback:
    """Import the draw function named by ``module:function`` or ``file.py:function``."""
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise CLIError(f"Sketch must look like module:function, got '{target}'")

    if module_ref.endswith(".py"):
        path = Path(module_ref)
        if not path.is_file():
            raise CLIError(f"File '{module_ref}' not found")
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise CLIError(f"Cannot load '{module_ref}'")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        try:
            module = importlib.import_module(module_ref)
        except ImportError as e:
            raise CLIError(f"Cannot import '{module_ref}': {e}")

    draw = getattr(module, attr, None)
    if not callable(draw):
        raise CLIError(f"'{attr}' in '{module_ref}' is not a function")
    return draw


if __name__ == "__main__":
    app()
