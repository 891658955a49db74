"""Shared image factories for the test suite."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from images_to_pdf.images import InputImage


def make_image_bytes(
    *,
    width: int,
    height: int,
    fmt: str = "PNG",
    mode: str = "RGB",
    color: tuple[int, ...] = (200, 40, 40),
) -> bytes:
    """Encode a solid-colour image of the given size."""
    img = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_1000x500() -> InputImage:
    return InputImage(
        data=make_image_bytes(width=1000, height=500, fmt="JPEG"),
        mime_type="image/jpeg",
        name="landscape.jpg",
    )


@pytest.fixture
def png_300x900() -> InputImage:
    return InputImage(
        data=make_image_bytes(width=300, height=900, fmt="PNG"),
        mime_type="image/png",
        name="portrait.png",
    )


@pytest.fixture
def gif_image() -> InputImage:
    return InputImage(
        data=make_image_bytes(width=50, height=50, fmt="GIF", mode="P", color=1),
        mime_type="image/gif",
        name="anim.gif",
    )


def make_mpo_bytes(*, width: int, height: int) -> bytes:
    """Encode a two-picture MPO, the format some cameras write for JPEGs."""
    first = Image.new("RGB", (width, height), (200, 40, 40))
    second = Image.new("RGB", (width, height), (40, 40, 200))
    buffer = io.BytesIO()
    first.save(buffer, format="MPO", save_all=True, append_images=[second])
    return buffer.getvalue()
