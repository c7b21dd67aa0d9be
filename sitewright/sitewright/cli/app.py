"""Main CLI application."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import SitewrightError
from ..core.settings import Settings, load_settings
from ..rendering import assets, builder
from ..templating.parser import TemplateParser
from .parsers import parse_copy, parse_stylesheet

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sitewright",
    help="Static site generator for MarkDown pages extending HTML base templates.",
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration file (default: ./sitewright.yaml if present).",
        metavar="FILE",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _load(config: Path | None, **overrides: object) -> Settings:
    try:
        settings = load_settings(config, **overrides)
    except SitewrightError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    if settings.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return settings


@app.command()
def build(
    config: ConfigOption = None,
    input_root: Annotated[
        Optional[Path],
        typer.Option(
            "--input",
            help="Directory holding base templates and pages (default: public).",
            metavar="DIR",
        ),
    ] = None,
    output_root: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            help="Directory receiving the rendered site (default: dist).",
            metavar="DIR",
        ),
    ] = None,
    copies: Annotated[
        list[str],
        typer.Option(
            "--copy",
            help="Copy a file or directory into the output (format: SOURCE=DEST). Repeatable.",
            metavar="SOURCE=DEST",
        ),
    ] = [],
    stylesheets: Annotated[
        list[str],
        typer.Option(
            "--scss",
            help="Compile SCSS into the output (format: SOURCE=DEST). Repeatable.",
            metavar="SOURCE=DEST",
        ),
    ] = [],
    clean: Annotated[
        Optional[bool],
        typer.Option(
            "--clean/--no-clean",
            help="Empty the output directory before writing.",
        ),
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render every page template and copy static assets."""
    _configure_logging(verbose)

    settings = _load(config, input_root=input_root, output_root=output_root, clean=clean)
    settings = settings.model_copy(
        update={
            "copy_rules": settings.copy_rules + [parse_copy(v) for v in copies],
            "stylesheets": settings.stylesheets + [parse_stylesheet(v) for v in stylesheets],
        }
    )

    logger.debug(f"Building {settings.input_root} → {settings.output_root}")

    try:
        report = builder.build_site(settings)
    except SitewrightError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    logger.debug(f"Completed: {len(report.pages)} page(s) written")


@app.command()
def articles(
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the metadata declared by page templates as JSON."""
    _configure_logging(verbose)
    settings = _load(config)
    parser = TemplateParser(settings.input_root, settings.output_root)

    try:
        _, found = builder.parse_pages(parser, settings)
    except SitewrightError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    typer.echo(json.dumps([article.model_dump(mode="json") for article in found], indent=2))


@app.command()
def clean(
    config: ConfigOption = None,
    unsafe: Annotated[
        bool,
        typer.Option(
            "--unsafe",
            help="Delete the output instead of moving it to the trash directory.",
        ),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Empty the output directory."""
    _configure_logging(verbose)
    settings = _load(config)

    try:
        moved_to = assets.clean_output(
            settings.output_root, safe=not unsafe, trash_root=settings.trash_root
        )
    except SitewrightError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    if moved_to:
        typer.echo(f"Previous output moved to {moved_to}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
