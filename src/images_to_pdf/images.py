"""Input images, format checks, and the conversion error hierarchy."""

from __future__ import annotations

import io
import mimetypes
import struct
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file type. Please upload JPG or PNG images."

# Declared MIME type -> format name reported by Pillow.
_SUPPORTED_MIME_TYPES = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
}

_FALLBACK_MIME_TYPE = "application/octet-stream"


class ConversionError(Exception):
    """Base exception for images-to-pdf errors."""


class EmptyInputError(ConversionError):
    """Raised when no images are supplied."""

    def __init__(self, message: str = "No images were supplied.") -> None:
        super().__init__(message)


class UnsupportedFormatError(ConversionError):
    """Raised when an image's declared type is not JPEG or PNG."""

    def __init__(self, mime_type: str = "") -> None:
        super().__init__(UNSUPPORTED_FORMAT_MESSAGE)
        self.mime_type = mime_type


class DecodeError(ConversionError):
    """Raised when image bytes cannot be read as their declared format."""


@dataclass(frozen=True)
class InputImage:
    """Raw image bytes plus the MIME type the caller declared for them."""

    data: bytes
    mime_type: str
    name: str = ""


@dataclass(frozen=True)
class DecodedImage:
    """Pixel size of an input image and the bytes to embed for it."""

    width: int
    height: int
    format: str
    data: bytes


def is_supported(mime_type: str) -> bool:
    return mime_type.lower() in _SUPPORTED_MIME_TYPES


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info


def _flatten_alpha(data: bytes) -> bytes:
    """Composite a transparent PNG onto white and re-encode it."""
    with Image.open(io.BytesIO(data)) as img:
        rgba = img.convert("RGBA")

    background = Image.new("RGB", rgba.size, (255, 255, 255))
    background.paste(rgba, mask=rgba.getchannel("A"))

    buffer = io.BytesIO()
    background.save(buffer, format="PNG")
    return buffer.getvalue()


def _strip_mpf_segment(data: bytes) -> bytes:
    """Drop the APP2 multi-picture index so the data reads as a plain JPEG."""
    out = bytearray(data[:2])
    pos = 2
    while pos + 4 <= len(data) and data[pos] == 0xFF:
        marker = data[pos + 1]
        if marker == 0xDA:  # start of scan
            break
        (length,) = struct.unpack(">H", data[pos + 2:pos + 4])
        segment = data[pos:pos + 2 + length]
        if not (marker == 0xE2 and segment[4:8] == b"MPF\x00"):
            out += segment
        pos += 2 + length
    out += data[pos:]
    return bytes(out)


def _first_mpo_frame(data: bytes, img: Image.Image) -> bytes:
    """Cut the first picture out of a multi-picture JPEG."""
    offsets = [
        entry["DataOffset"] + img.info["mpoffset"] for entry in img.mpinfo[0xB002]
    ]
    end = offsets[1] if len(offsets) > 1 else len(data)
    return _strip_mpf_segment(data[:end])


def decode_image(image: InputImage) -> DecodedImage:
    """Check the declared type of *image* and read its pixel size.

    Raises:
        UnsupportedFormatError: If the MIME type is not JPEG or PNG.
        DecodeError: If the bytes are unreadable or hold a different format.
    """
    expected = _SUPPORTED_MIME_TYPES.get(image.mime_type.lower())
    if expected is None:
        raise UnsupportedFormatError(image.mime_type)

    data = image.data
    try:
        with Image.open(io.BytesIO(data)) as img:
            actual = img.format
            width, height = img.size
            alpha = _has_alpha(img)
            # Multi-picture JPEGs: only the first picture becomes a page.
            if actual == "MPO":
                data = _first_mpo_frame(data, img)
                actual = "JPEG"
            img.verify()
    except (
        OSError,
        SyntaxError,
        ValueError,
        KeyError,
        struct.error,
        Image.DecompressionBombError,
    ) as exc:
        raise DecodeError(str(exc) or f"Cannot read {expected} image data") from exc

    if actual != expected:
        raise DecodeError(
            f"The input is not a {expected} file (found {actual or 'unknown'} data)"
        )
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has invalid dimensions {width}x{height}")

    if expected == "PNG" and alpha:
        data = _flatten_alpha(data)

    return DecodedImage(width=width, height=height, format=expected, data=data)


def guess_mime_type(path: Path | str) -> str:
    """Guess a MIME type from the file extension, the way a file picker does."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or _FALLBACK_MIME_TYPE


def load_image(path: Path | str) -> InputImage:
    """Read an image file from disk into an :class:`InputImage`.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    return InputImage(
        data=path.read_bytes(),
        mime_type=guess_mime_type(path),
        name=path.name,
    )
