"""Read page sizes and image placements back out of an assembled PDF."""

from __future__ import annotations

import io
from dataclasses import dataclass

import pikepdf

from .geometry import PlacedImage


@dataclass(frozen=True)
class PageLayout:
    """Size of one page and where its image was drawn."""

    page_width: float
    page_height: float
    image: PlacedImage | None


def _placement(page: pikepdf.Page) -> PlacedImage | None:
    # The last transformation before the image is drawn: [w 0 0 h x y]
    instructions = pikepdf.parse_content_stream(page, "cm")
    if not instructions:
        return None

    a, _b, _c, d, e, f = (float(v) for v in instructions[-1].operands)
    return PlacedImage(x=e, y=f, width=a, height=d)


def read_placements(pdf_bytes: bytes) -> list[PageLayout]:
    """Return the layout of every page in *pdf_bytes*, in page order."""
    layouts = []
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            x0, y0, x1, y1 = (float(v) for v in page.mediabox)
            layouts.append(
                PageLayout(
                    page_width=x1 - x0,
                    page_height=y1 - y0,
                    image=_placement(page),
                )
            )
    return layouts
