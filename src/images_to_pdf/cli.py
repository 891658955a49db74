"""Command-line interface for images-to-pdf."""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
import webbrowser
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
)

from . import convert_images
from .images import ConversionError


def _format_size(num_bytes: int) -> str:
    """Format a byte count as a human-readable string."""
    value = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(value) < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="images-to-pdf",
        description=(
            "Combine JPEG and PNG images into a single A4 PDF, one image per"
            " page, scaled to fit and centered."
        ),
    )
    parser.add_argument(
        "images",
        nargs="+",
        type=Path,
        help="Image files in page order (JPEG or PNG)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help=(
            "Output path: a .pdf file path, a directory, or omit for"
            " ImagesToPDF.pdf in CWD."
        ),
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        default=False,
        help="Open the finished PDF in the system viewer",
    )
    return parser


async def _async_main(args: argparse.Namespace) -> None:
    console = Console()
    start_time = time.monotonic()

    progress = Progress(
        SpinnerColumn(),
        "[progress.description]{task.description}",
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    )
    with progress:
        task_id = progress.add_task(
            description="Laying out pages",
            total=len(args.images),
        )
        result = await convert_images(
            args.images,
            args.output,
            on_page=lambda index, placement: progress.advance(task_id=task_id),
        )

    elapsed = time.monotonic() - start_time

    summary_lines = [
        f"[bold]Pages:[/bold] {result.page_count}",
        f"[bold]PDF size:[/bold] {_format_size(result.total_bytes)}",
        f"[bold]Output:[/bold] {result.output_path}",
    ]
    console.print(Panel(
        "\n".join(summary_lines),
        title=f"[bold green]Done in {elapsed:.1f}s[/bold green]",
        border_style="green",
    ))

    if args.preview:
        webbrowser.open(result.output_path.as_uri())


def main() -> None:
    """Entry point for the ``images-to-pdf`` CLI command."""
    console = Console(stderr=True)
    parser = _build_parser()
    args = parser.parse_args()

    try:
        asyncio.run(_async_main(args=args))
    except (ConversionError, OSError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")
        sys.exit(130)
