"""images-to-pdf: Combine JPEG and PNG images into a single A4 PDF."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .assembler import assemble, assemble_async
from .geometry import A4, PageGeometry, PlacedImage, place_image
from .images import (
    ConversionError,
    DecodeError,
    EmptyInputError,
    InputImage,
    UnsupportedFormatError,
    load_image,
)
from .reader import PageLayout, read_placements
from .session import DOWNLOAD_FILENAME, ConverterSession

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "A4",
    "ConversionError",
    "ConversionResult",
    "ConverterSession",
    "DOWNLOAD_FILENAME",
    "DecodeError",
    "EmptyInputError",
    "InputImage",
    "PageGeometry",
    "PageLayout",
    "PlacedImage",
    "UnsupportedFormatError",
    "assemble",
    "assemble_async",
    "convert_images",
    "load_image",
    "place_image",
    "read_placements",
]


@dataclass
class ConversionResult:
    """Outcome of converting a set of image files into a PDF on disk."""

    page_count: int
    total_bytes: int
    output_path: Path


def _resolve_pdf_path(output: Path | str | None) -> Path:
    """Resolve the output PDF file path.

    Rules:
        - ``None`` → ``{cwd}/ImagesToPDF.pdf``
        - Ends in ``.pdf`` → treated as literal file path
        - Otherwise → treated as directory: ``{path}/ImagesToPDF.pdf``
    """
    if output is None:
        return Path(DOWNLOAD_FILENAME).resolve()

    output = Path(output)
    if output.suffix.lower() == ".pdf":
        return output.resolve()

    return (output / DOWNLOAD_FILENAME).resolve()


async def convert_images(
    paths: Sequence[Path | str],
    output: Path | str | None = None,
    *,
    geometry: PageGeometry = A4,
    on_page: Callable[[int, PlacedImage], None] | None = None,
) -> ConversionResult:
    """Convert image files into a single PDF written to disk.

    Files are read one at a time in the order given, and that order becomes
    the page order. Nothing is written unless every image converts.

    Args:
        paths: Ordered image file paths (JPEG or PNG).
        output: Output path.  Omit for ``ImagesToPDF.pdf`` in the CWD, pass
            a ``.pdf`` path to use it literally, or pass a directory to save
            ``ImagesToPDF.pdf`` inside it.
        geometry: Page size and margin.
        on_page: Optional progress callback, see :func:`assemble`.

    Returns:
        A :class:`ConversionResult` summarizing the outcome.

    Raises:
        EmptyInputError: If *paths* is empty.
        UnsupportedFormatError: If any file is not a JPEG or PNG.
        DecodeError: If any file cannot be decoded.
        FileNotFoundError: If any path does not exist.

    Example::

        import asyncio
        from images_to_pdf import convert_images

        result = asyncio.run(convert_images(["scan1.jpg", "scan2.png"]))
        print(f"Saved PDF to {result.output_path}")
    """
    images = []
    for path in paths:
        images.append(await asyncio.to_thread(load_image, path))

    pdf_bytes = await assemble_async(images, geometry=geometry, on_page=on_page)

    pdf_path = _resolve_pdf_path(output)
    pdf_path.parent.mkdir(parents=True, exist_ok=True)
    pdf_path.write_bytes(pdf_bytes)

    return ConversionResult(
        page_count=len(images),
        total_bytes=len(pdf_bytes),
        output_path=pdf_path,
    )
