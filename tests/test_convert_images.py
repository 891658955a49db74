"""Tests for converting image files on disk and for the CLI."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from conftest import make_image_bytes
from images_to_pdf import UnsupportedFormatError, convert_images
from images_to_pdf.cli import main
from images_to_pdf.reader import read_placements


def _write_images(tmp_path: Path) -> list[Path]:
    jpeg = tmp_path / "landscape.jpg"
    jpeg.write_bytes(make_image_bytes(width=1000, height=500, fmt="JPEG"))
    png = tmp_path / "portrait.png"
    png.write_bytes(make_image_bytes(width=300, height=900, fmt="PNG"))
    return [jpeg, png]


class TestConvertImages:
    @pytest.mark.asyncio
    async def test_writes_pdf(self, tmp_path: Path):
        paths = _write_images(tmp_path)

        result = await convert_images(paths, tmp_path / "out")

        assert result.output_path == (tmp_path / "out" / "ImagesToPDF.pdf").resolve()
        assert result.page_count == 2
        assert result.total_bytes == result.output_path.stat().st_size
        pages = read_placements(result.output_path.read_bytes())
        assert pages[0].image.width == pytest.approx(555.28, abs=1e-2)

    @pytest.mark.asyncio
    async def test_nothing_written_on_failure(self, tmp_path: Path):
        paths = _write_images(tmp_path)
        gif = tmp_path / "anim.gif"
        gif.write_bytes(make_image_bytes(width=5, height=5, fmt="GIF", mode="P", color=1))
        output = tmp_path / "result.pdf"

        with pytest.raises(UnsupportedFormatError):
            await convert_images([*paths, gif], output)

        assert not output.exists()


class TestCli:
    def test_writes_pdf(self, tmp_path: Path, monkeypatch):
        paths = _write_images(tmp_path)
        output = tmp_path / "album.pdf"
        monkeypatch.setattr(
            sys, "argv", ["images-to-pdf", *map(str, paths), "--output", str(output)]
        )

        main()

        assert output.read_bytes()[:5] == b"%PDF-"

    def test_unsupported_file_exits_with_error(self, tmp_path: Path, monkeypatch, capsys):
        gif = tmp_path / "anim.gif"
        gif.write_bytes(make_image_bytes(width=5, height=5, fmt="GIF", mode="P", color=1))
        monkeypatch.setattr(
            sys, "argv", ["images-to-pdf", str(gif), "-o", str(tmp_path)]
        )

        with pytest.raises(SystemExit) as excinfo:
            main()

        assert excinfo.value.code == 1
        assert "Unsupported file type" in capsys.readouterr().err
        assert not (tmp_path / "ImagesToPDF.pdf").exists()

    def test_missing_file_exits_with_error(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(
            sys, "argv", ["images-to-pdf", str(tmp_path / "missing.png")]
        )

        with pytest.raises(SystemExit) as excinfo:
            main()

        assert excinfo.value.code == 1
