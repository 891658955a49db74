"""View-model holding the ephemeral state of one converter screen."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .assembler import assemble_async
from .images import ConversionError, InputImage

DOWNLOAD_FILENAME = "ImagesToPDF.pdf"

NO_FILES_MESSAGE = "Please upload at least one image file."
SUCCESS_MESSAGE = "PDF created successfully! You can preview and download it below."
FAILURE_MESSAGE = "Failed to create the PDF."

_NAME_DISPLAY_LIMIT = 15


def truncate_name(name: str, limit: int = _NAME_DISPLAY_LIMIT) -> str:
    return name[:limit] + "..." if len(name) > limit else name


@dataclass
class ConverterSession:
    """Selected files, progress flag, messages and the last generated PDF.

    The assembler itself stays stateless; everything a screen needs to
    remember between user actions lives here.
    """

    files: list[InputImage] = field(default_factory=list)
    loading: bool = False
    error: str = ""
    success: str = ""
    pdf: bytes | None = None

    def _reset_result(self) -> None:
        self.error = ""
        self.success = ""
        self.pdf = None

    def select(self, files: Iterable[InputImage]) -> None:
        """Replace the selection and discard any previous result."""
        self.files = list(files)
        self._reset_result()

    def clear(self) -> None:
        self.files = []
        self._reset_result()

    @property
    def summary(self) -> str:
        """Short label for the selection, e.g. ``"holiday-photo-0... and 2 more"``."""
        if not self.files:
            return ""
        first = truncate_name(self.files[0].name)
        if len(self.files) > 1:
            return f"{first} and {len(self.files) - 1} more"
        return first

    async def convert(self) -> bytes | None:
        """Convert the selection, recording the outcome on the session.

        Returns:
            The PDF bytes on success, otherwise ``None`` with :attr:`error`
            set to the message to show.
        """
        if not self.files:
            self.error = NO_FILES_MESSAGE
            return None

        self.loading = True
        try:
            pdf = await assemble_async(self.files)
        except ConversionError as exc:
            self.error = str(exc) or FAILURE_MESSAGE
            self.success = ""
            self.pdf = None
            return None
        finally:
            self.loading = False

        self.pdf = pdf
        self.error = ""
        self.success = SUCCESS_MESSAGE
        return pdf

    def save(self, directory: Path | str) -> Path:
        """Write the generated PDF as ``ImagesToPDF.pdf`` inside *directory*.

        Raises:
            RuntimeError: If nothing has been converted yet.
        """
        if self.pdf is None:
            raise RuntimeError("No PDF has been generated")

        path = Path(directory) / DOWNLOAD_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.pdf)
        return path
