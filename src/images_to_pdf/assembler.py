"""Assemble input images into a single paginated PDF, one image per page."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

import img2pdf

from .geometry import A4, PageGeometry, PlacedImage, place_image
from .images import DecodeError, EmptyInputError, InputImage, decode_image


def assemble(
    images: Sequence[InputImage],
    *,
    geometry: PageGeometry = A4,
    on_page: Callable[[int, PlacedImage], None] | None = None,
) -> bytes:
    """Build a PDF with one fixed-size page per image, in input order.

    Each image is scaled uniformly to fit inside the page margins and
    centered on its page. The batch is all-or-nothing: the first bad image
    aborts the whole assembly and no document is returned.

    Args:
        images: Ordered images to place, one per page.
        geometry: Page size and margin shared by every page.
        on_page: Optional callback invoked as ``on_page(index, placement)``
            when each page is laid out.

    Returns:
        The serialized PDF.

    Raises:
        EmptyInputError: If *images* is empty.
        UnsupportedFormatError: If any image is not declared JPEG or PNG.
        DecodeError: If any image's bytes cannot be read.
    """
    if not images:
        raise EmptyInputError()

    decoded = [decode_image(image) for image in images]
    placements = [place_image(d.width, d.height, geometry) for d in decoded]

    if on_page is not None:
        for index, placement in enumerate(placements):
            on_page(index, placement)

    pending = iter(placements)

    def _layout(imgwidthpx, imgheightpx, ndpi):
        placement = next(pending)
        return (
            geometry.page_width,
            geometry.page_height,
            placement.width,
            placement.height,
        )

    try:
        return img2pdf.convert(
            [image.data for image in decoded],
            layout_fun=_layout,
            rotation=img2pdf.Rotation.none,
            first_frame_only=True,
        )
    except (
        img2pdf.ImageOpenError,
        img2pdf.JpegColorspaceError,
        img2pdf.PdfTooLargeError,
        OSError,
        ValueError,
    ) as exc:
        raise DecodeError(str(exc) or "Failed to create the PDF.") from exc


async def assemble_async(
    images: Sequence[InputImage],
    *,
    geometry: PageGeometry = A4,
    on_page: Callable[[int, PlacedImage], None] | None = None,
) -> bytes:
    """Awaitable form of :func:`assemble`, run in a worker thread.

    Each call builds its own document, so concurrent calls share no state.
    """
    return await asyncio.to_thread(
        assemble,
        list(images),
        geometry=geometry,
        on_page=on_page,
    )
