"""
Command-line interface for ultipdf.

Every command reads its inputs from disk, runs one registered tool and writes
the resulting PDF file(s) next to the requested output.
"""

import os
import sys

import click
from rich.console import Console
from rich.table import Table

from ultipdf import __version__
from ultipdf.config import Settings
from ultipdf.core.utils import configure_logging
from ultipdf.exceptions import UltiPDFError
from ultipdf.tools import registry, run_tool

console = Console()


def _read(path):
    with open(path, "rb") as handle:
        return handle.read()


def _format_value(value):
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item.to_payload() if hasattr(item, "to_payload") else item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{key}={item}" for key, item in value.items())
    return str(value)


def _execute(tool, payload, output=None, output_dir="."):
    """Run ``tool`` and write every produced document, exiting on failure."""

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    try:
        result = run_tool(tool, payload, settings=settings)
    except UltiPDFError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e.message}")
        sys.exit(1)

    written = []
    if result.data is not None:
        target = output or os.path.join(output_dir, result.filename)
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(target, "wb") as handle:
            handle.write(result.data)
        written.append(target)
    if result.documents:
        os.makedirs(output_dir, exist_ok=True)
        for part in result.documents:
            target = os.path.join(output_dir, part.filename)
            with open(target, "wb") as handle:
                handle.write(part.data)
            written.append(target)

    console.print(f"\n[bold green]✓ {result.message}[/bold green]")
    table = Table(title=f"Result: {result.tool}", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    for key, value in result.details.items():
        table.add_row(key, _format_value(value))
    if result.size_bytes is not None:
        table.add_row("fileSizeKB", str(result.size_kb))
    console.print(table)

    console.print("\n[bold]Created files:[/bold]")
    for path in written:
        console.print(f"  • {path}")
    console.print()
    return result


pages_option = click.option(
    '--pages', '-p',
    default=None,
    help='Comma separated page numbers (1-indexed), or "all"',
    type=str
)
output_option = click.option(
    '--output', '-o',
    default=None,
    help='Output PDF path (defaults to a generated name in the current directory)',
    type=click.Path()
)
output_dir_option = click.option(
    '--output-dir', '-d',
    default='.',
    help='Output directory for generated documents',
    type=click.Path()
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    ultipdf - merge, split, rotate, stamp and convert PDF files.
    """
    pass


@cli.command(name="tools")
def list_tools():
    """
    List every available tool and its synonyms.
    """
    table = Table(title="Available tools")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Synonyms", style="magenta")
    table.add_column("Description", style="green")
    for name in registry.names():
        table.add_row(name, ", ".join(registry.aliases(name)), registry.resolve(name).description)
    console.print(table)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@output_option
def merge(input_pdfs, output):
    """
    Merge two or more PDFs in the given order.

    Example:

        ultipdf merge a.pdf b.pdf -o merged.pdf
    """
    _execute("merge", {"pdfs": [_read(path) for path in input_pdfs]}, output)


@cli.command(name="compress")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--quality', '-q',
    default='medium',
    help='Quality label reported with the result',
    type=click.Choice(['low', 'medium', 'high'], case_sensitive=False)
)
@output_option
def compress(input_pdf, quality, output):
    """
    Re-save a PDF using the most compact encoding.
    """
    _execute("compress", {"pdf": _read(input_pdf), "quality": quality}, output)


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--ranges', '-r',
    default=None,
    help='Comma separated ranges such as "1-3,4-6"; defaults to one file per page',
    type=str
)
@output_dir_option
def split(input_pdf, ranges, output_dir):
    """
    Split a PDF into one document per range.

    Examples:

        ultipdf split input.pdf

        ultipdf split input.pdf -r 1-2,3-5 -d parts
    """
    _execute("split", {"pdf": _read(input_pdf), "ranges": ranges}, output_dir=output_dir)


@cli.command(name="images")
@click.argument('images', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--page-size', default='A4', help='A4, A3, A5, Letter, Legal or Tabloid', type=str)
@click.option(
    '--orientation',
    default='portrait',
    type=click.Choice(['portrait', 'landscape'], case_sensitive=False)
)
@click.option('--margin', default=40.0, help='Margin around each image in points', type=float)
@click.option('--fit/--no-fit', default=True, help='Scale images to fit the page')
@output_option
def images(images, page_size, orientation, margin, fit, output):
    """
    Combine JPEG and PNG images into a PDF, one page per image.
    """
    _execute(
        "jpg-to-pdf",
        {
            "images": [_read(path) for path in images],
            "pageSize": page_size,
            "orientation": orientation,
            "margin": margin,
            "fitToPage": fit,
        },
        output,
    )


@cli.command(name="export-pages")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@pages_option
@output_dir_option
def export_pages(input_pdf, pages, output_dir):
    """
    Write each selected page as its own single-page PDF.
    """
    _execute("pdf-to-jpg", {"pdf": _read(input_pdf), "pages": pages}, output_dir=output_dir)


@cli.command(name="rotate")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--rotation', '-r',
    default=90,
    help='Degrees to add: 90, 180, 270, -90, -180 or -270',
    type=int
)
@pages_option
@output_option
def rotate(input_pdf, rotation, pages, output):
    """
    Rotate selected pages (all by default).
    """
    _execute("rotate", {"pdf": _read(input_pdf), "rotation": rotation, "pages": pages}, output)


@cli.command(name="delete")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--pages', '-p', required=True, help='Comma separated page numbers to delete', type=str)
@output_option
def delete(input_pdf, pages, output):
    """
    Delete pages from a PDF. At least one page must remain.
    """
    _execute("delete-pages", {"pdf": _read(input_pdf), "pages": pages}, output)


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--pages', '-p', required=True, help='Comma separated page numbers to extract', type=str)
@output_option
def extract(input_pdf, pages, output):
    """
    Gather selected pages into a new PDF, in ascending order.
    """
    _execute("extract-pages", {"pdf": _read(input_pdf), "pages": pages}, output)


@cli.command(name="protect")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--user-password', default=None, type=str)
@click.option('--owner-password', default=None, type=str)
@click.option('--no-printing', is_flag=True, help='Record printing as not permitted')
@click.option('--no-copying', is_flag=True, help='Record copying as not permitted')
@click.option('--no-modifying', is_flag=True, help='Record modifying as not permitted')
@output_option
def protect(input_pdf, user_password, owner_password, no_printing, no_copying, no_modifying, output):
    """
    Stamp protection metadata. The output is not encrypted.
    """
    _execute(
        "protect",
        {
            "pdf": _read(input_pdf),
            "userPassword": user_password,
            "ownerPassword": owner_password,
            "permissions": {
                "printing": not no_printing,
                "copying": not no_copying,
                "modifying": not no_modifying,
            },
        },
        output,
    )


@cli.command(name="unlock")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--password', default='', help='Password used to open the PDF', type=str)
@output_option
def unlock(input_pdf, password, output):
    """
    Copy the pages of a PDF into a fresh, unprotected file.
    """
    _execute("unlock", {"pdf": _read(input_pdf), "password": password}, output)


@cli.command(name="add-text")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('text')
@pages_option
@click.option('--position', default='center', help='center, top-left, top-right, top-center, bottom-left, bottom-right or bottom-center', type=str)
@click.option('--font-size', default=40.0, type=float)
@click.option('--color', default='#888888', help='Hex colour such as #ff0000', type=str)
@click.option('--opacity', default=0.3, type=float)
@click.option('--rotation', default=-45.0, help='Text angle in degrees', type=float)
@click.option('--font', default='Helvetica-Bold', help='Standard PDF font name', type=str)
@output_option
def add_text(input_pdf, text, pages, position, font_size, color, opacity, rotation, font, output):
    """
    Stamp text, such as a watermark, onto PDF pages.

    Example:

        ultipdf add-text input.pdf CONFIDENTIAL --position bottom-right --rotation 0
    """
    _execute(
        "add-text",
        {
            "pdf": _read(input_pdf),
            "text": text,
            "pages": pages,
            "position": position,
            "fontSize": font_size,
            "color": color,
            "opacity": opacity,
            "rotation": rotation,
            "font": font,
        },
        output,
    )


if __name__ == '__main__':
    cli()
