"""Typer-based command line interface for c5tl."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import CatalogSummary, TranslationCatalog  # type: ignore  # noqa: E402
from extraction import ExtractionError, ExtractionSession  # type: ignore  # noqa: E402
from extraction.parsers import get_all_parsers  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


@app.command()
def extract(
    root: Path = typer.Argument(..., help="Root directory to extract strings from."),
    out: Path = typer.Option(Path("messages.pot"), "--out", help="Template file to write."),
    rel_path: str = typer.Option("", "--rel-path", help="Prefix prepended to every reference."),
    merge_into: Optional[Path] = typer.Option(None, "--merge-into", help="Existing template to extend."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML configuration file."),
    parser_names: List[str] = typer.Option([], "--parser", help="Only run the named parser (repeatable)."),
    vendor: bool = typer.Option(False, "--include-vendor/--exclude-vendor", help="Also scan vendor directories."),
    builtin: bool = typer.Option(False, "--builtin", help="Never use xgettext."),
) -> None:
    config = load_config(config_path)
    if builtin:
        config.use_external_tool = False
    if vendor:
        config.excluded_dirs = []
    session = ExtractionSession(config)
    if parser_names:
        unknown = set(parser_names) - {parser.name for parser in session.parsers}
        if unknown:
            raise typer.BadParameter(f"Unknown parser(s): {', '.join(sorted(unknown))}")
        session.parsers = [parser for parser in session.parsers if parser.name in parser_names]
    if merge_into is not None:
        if not merge_into.exists():
            raise typer.BadParameter(f"Catalog {merge_into} not found")
        catalog = TranslationCatalog.load(merge_into)
    else:
        catalog = TranslationCatalog()
    try:
        session.extract_directory(root, rel_path, catalog)
    except ExtractionError as exc:
        console.print(f"[red]Extraction failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    catalog.pot_header()
    catalog.save(out)
    typer.echo(f"Wrote {len(catalog)} entries to {out}")


@app.command()
def parsers() -> None:
    table = Table("Parser", "Directories", "Running instance")
    for parser in get_all_parsers():
        table.add_row(
            parser.name,
            "yes" if parser.can_parse_directory else "no",
            "yes" if parser.can_parse_live_instance else "no",
        )
    console.print(table)


@app.command()
def summarize(catalog_path: Path = typer.Argument(..., help="Template (.pot/.po) path.")) -> None:
    if not catalog_path.exists():
        raise typer.BadParameter(f"Catalog {catalog_path} not found")
    summary = CatalogSummary.from_catalog(TranslationCatalog.load(catalog_path))
    typer.echo(summary.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
