"""
esodoc CLI - ESO API documentation converter

Converts the game's API documentation page into:
1. A UI XML layout schema (esoui<version>.xsd)
2. A Lua documentation stub archive (esolua<version>.zip)
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from esodoc import __version__
from esodoc.errors import EsoDocError
from esodoc.parser import parse_documentation
from esodoc.schemas import Documentation
from esodoc.settings import Settings, get_settings
from esodoc.stubs import StubPackager
from esodoc.xsd import XsdGenerator, load_config

app = typer.Typer(
    name="esodoc",
    help="ESO API documentation converter",
    add_completion=False,
)

console = Console()


def _configure_logging(settings: Settings, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _parse(doc_file: Path) -> Documentation:
    documentation = parse_documentation(doc_file)
    console.print(f"📖 Parsed API version [cyan]{documentation.api_version}[/cyan] from [yellow]{doc_file}[/yellow]")
    return documentation


def _write_xsd(documentation: Documentation, output_dir: Path, config_file: Optional[Path]) -> Path:
    config = load_config(config_file)
    xsd_file = XsdGenerator(documentation, config).generate(output_dir)
    console.print(f"✅ Wrote schema: [cyan]{xsd_file}[/cyan]")
    return xsd_file


def _write_stubs(documentation: Documentation, output_dir: Path, template_dir: Optional[Path]) -> Path:
    archive = StubPackager(documentation, template_dir).package(output_dir)
    console.print(f"✅ Wrote Lua stubs: [cyan]{archive}[/cyan]")
    return archive


@app.command()
def convert(
    doc_file: Path = typer.Argument(..., help="Path to the API documentation page (ESOUIDocumentation.txt)"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory (default: ESODOC_OUTPUT_DIR or ./target)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Schema configuration JSON (default: bundled xsd_config.json)",
    ),
    template_dir: Optional[Path] = typer.Option(
        None,
        "--template-dir",
        help="Lua stub template directory (default: bundled template)",
    ),
    skip_stubs: bool = typer.Option(False, "--skip-stubs", help="Do not build the Lua stub archive"),
    skip_xsd: bool = typer.Option(False, "--skip-xsd", help="Do not build the XML schema"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Convert the API documentation into the XML schema and Lua stubs.

    This command will:
    1. Parse the documentation page
    2. Plan and render the UI XML layout schema
    3. Stage and archive the Lua documentation stubs
    """
    settings = get_settings()
    _configure_logging(settings, verbose)

    output_dir = (output or settings.output_dir).resolve()

    console.print(Panel.fit(
        "[bold cyan]ESO API Documentation Converter[/bold cyan]\n\n"
        f"Documentation: [yellow]{doc_file}[/yellow]\n"
        f"Output: [yellow]{output_dir}[/yellow]",
        border_style="cyan"
    ))

    try:
        documentation = _parse(doc_file)

        if not skip_xsd:
            _write_xsd(documentation, output_dir, config or settings.xsd_config)
        if not skip_stubs:
            _write_stubs(documentation, output_dir, template_dir or settings.lua_template_dir)
    except EsoDocError as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]📁 Results saved to:[/bold] [cyan]{output_dir}[/cyan]")
    console.print(Panel.fit("[bold green]✨ Conversion Complete![/bold green]", border_style="green"))


@app.command()
def xsd(
    doc_file: Path = typer.Argument(..., help="Path to the API documentation page"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Schema configuration JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Generate only the UI XML layout schema."""
    settings = get_settings()
    _configure_logging(settings, verbose)

    try:
        documentation = _parse(doc_file)
        _write_xsd(documentation, (output or settings.output_dir).resolve(), config or settings.xsd_config)
    except EsoDocError as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def stubs(
    doc_file: Path = typer.Argument(..., help="Path to the API documentation page"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    template_dir: Optional[Path] = typer.Option(None, "--template-dir", help="Lua stub template directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Generate only the Lua documentation stub archive."""
    settings = get_settings()
    _configure_logging(settings, verbose)

    try:
        documentation = _parse(doc_file)
        _write_stubs(
            documentation,
            (output or settings.output_dir).resolve(),
            template_dir or settings.lua_template_dir,
        )
    except EsoDocError as e:
        console.print(f"\n[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def inspect(
    doc_file: Path = typer.Argument(..., help="Path to the API documentation page"),
    as_json: bool = typer.Option(False, "--json", help="Dump the parsed model as JSON"),
):
    """Parse the documentation and show what it contains."""
    settings = get_settings()
    _configure_logging(settings)

    try:
        documentation = parse_documentation(doc_file)
    except EsoDocError as e:
        console.print(f"[red]❌ Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(documentation.model_dump_json(indent=2))
        return

    summary_table = Table(show_header=True, header_style="bold cyan", title=f"API {documentation.api_version}")
    summary_table.add_column("Section")
    summary_table.add_column("Count", justify="right")

    summary_table.add_row("Global Variables", str(len(documentation.globals)))
    summary_table.add_row("Functions", str(len(documentation.functions)))
    summary_table.add_row("Objects", str(len(documentation.objects)))
    summary_table.add_row("Events", str(len(documentation.events)))
    summary_table.add_row("XML Attributes", str(len(documentation.xml_attributes)))
    summary_table.add_row("XML Elements", str(len(documentation.xml_layout)))

    console.print(summary_table)


@app.command()
def version():
    """Show the version of esodoc."""
    console.print(f"[bold cyan]esodoc[/bold cyan] v{__version__}")
    console.print("ESO API documentation converter")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
