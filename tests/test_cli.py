from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner
from pypdf import PdfReader

from ultipdf.cli.main import cli


def test_tools_lists_registry() -> None:
    result = CliRunner().invoke(cli, ["tools"])
    assert result.exit_code == 0
    assert "delete-pages" in result.output
    assert "watermark" in result.output


def test_merge_writes_output(tmp_path: Path, pdf_factory) -> None:
    first, second = tmp_path / "a.pdf", tmp_path / "b.pdf"
    first.write_bytes(pdf_factory(2))
    second.write_bytes(pdf_factory(1))
    output = tmp_path / "out" / "merged.pdf"

    result = CliRunner().invoke(cli, ["merge", str(first), str(second), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert len(PdfReader(str(output)).pages) == 3
    assert "Successfully merged 2 PDFs" in result.output


def test_split_writes_one_file_per_range(tmp_path: Path, sample_pdf_path: Path) -> None:
    parts = tmp_path / "parts"
    result = CliRunner().invoke(cli, ["split", str(sample_pdf_path), "-r", "1-2,3-5", "-d", str(parts)])

    assert result.exit_code == 0, result.output
    created = sorted(parts.glob("split_*.pdf"))
    assert len(created) == 2
    assert sorted(len(PdfReader(str(path)).pages) for path in created) == [2, 3]


def test_rotate_and_extract(tmp_path: Path, sample_pdf_path: Path) -> None:
    rotated = tmp_path / "rotated.pdf"
    runner = CliRunner()
    assert runner.invoke(cli, ["rotate", str(sample_pdf_path), "-r", "180", "-p", "1,2", "-o", str(rotated)]).exit_code == 0
    assert [page.rotation for page in PdfReader(str(rotated)).pages] == [180, 180, 0, 0, 0]

    extracted = tmp_path / "extracted.pdf"
    result = runner.invoke(cli, ["extract", str(rotated), "-p", "5,1", "-o", str(extracted)])
    assert result.exit_code == 0, result.output
    assert [page.rotation for page in PdfReader(str(extracted)).pages] == [180, 0]


def test_images_command(tmp_path: Path, jpeg_bytes: bytes) -> None:
    image = tmp_path / "photo.jpg"
    image.write_bytes(jpeg_bytes)
    output = tmp_path / "photos.pdf"

    result = CliRunner().invoke(cli, ["images", str(image), "--orientation", "landscape", "-o", str(output)])

    assert result.exit_code == 0, result.output
    page = PdfReader(str(output)).pages[0]
    assert float(page.mediabox.width) > float(page.mediabox.height)


def test_errors_exit_with_status_one(tmp_path: Path, pdf_factory) -> None:
    source = tmp_path / "three.pdf"
    source.write_bytes(pdf_factory(3))

    result = CliRunner().invoke(cli, ["delete", str(source), "-p", "1,2,3", "-o", str(tmp_path / "x.pdf")])

    assert result.exit_code == 1
    assert "Cannot delete all pages" in result.output
    assert not (tmp_path / "x.pdf").exists()
