"""Page geometry and the fit-and-center layout for a single image."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page size and margin, in PDF points."""

    page_width: float = 595.28
    page_height: float = 841.89
    margin: float = 20

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ValueError("margin must not be negative")
        if self.margin >= self.page_width / 2 or self.margin >= self.page_height / 2:
            raise ValueError("margin must be less than half the page size")

    @property
    def available_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def available_height(self) -> float:
        return self.page_height - 2 * self.margin


A4 = PageGeometry()


@dataclass(frozen=True)
class PlacedImage:
    """Position and size of an image on its page (origin bottom-left)."""

    x: float
    y: float
    width: float
    height: float


def place_image(
    img_width: float,
    img_height: float,
    geometry: PageGeometry = A4,
) -> PlacedImage:
    """Scale an image uniformly to fit inside the margins and center it.

    The scale factor is not capped at 1.0, so small images are enlarged
    until they touch the margins in one dimension.

    Raises:
        ValueError: If either dimension is not positive.
    """
    if img_width <= 0 or img_height <= 0:
        raise ValueError(
            f"Image dimensions must be positive, got {img_width}x{img_height}"
        )

    scale = min(
        geometry.available_width / img_width,
        geometry.available_height / img_height,
    )
    width = img_width * scale
    height = img_height * scale

    return PlacedImage(
        x=(geometry.page_width - width) / 2,
        y=(geometry.page_height - height) / 2,
        width=width,
        height=height,
    )
