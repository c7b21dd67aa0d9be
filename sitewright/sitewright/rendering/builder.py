"""Site build pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

from ..content.articles import extract_article
from ..core.models import Article, BuildReport, Role, TemplateRecord
from ..core.settings import Settings
from ..templating.compositor import Compositor
from ..templating.filters import markdown_renderer
from ..templating.parser import TemplateParser
from . import assets, engine
from .io import atomic_write_text, discover

logger = logging.getLogger(__name__)


def page_url(url_root: str, output_root: Path, output_target: Path) -> str:
    """Return the public URL of a rendered page."""
    relative = output_target.relative_to(output_root).as_posix()
    return f"{url_root.rstrip('/')}/{relative}"


def parse_bases(parser: TemplateParser, settings: Settings) -> dict[str, TemplateRecord]:
    """Parse every base template, keyed by logical name."""
    parents = {}
    for path, text in discover(settings.input_root, settings.base_pattern):
        record = parser.parse(path, text, Role.BASE)
        parents[record.name] = record
    return parents


def parse_pages(
    parser: TemplateParser, settings: Settings
) -> tuple[list[TemplateRecord], list[Article]]:
    """Parse every page template, extracting article metadata first."""
    pages = []
    articles = []

    for path, text in discover(settings.input_root, settings.page_pattern):
        url = page_url(settings.url_root, settings.output_root, parser.output_target(path))
        article, text = extract_article(path, text, url)
        if article is not None:
            articles.append(article)
        pages.append(parser.parse(path, text, Role.PAGE))

    return pages, articles


def build_site(settings: Settings) -> BuildReport:
    """Build the site described by ``settings``.

    Every page is composed before any output is written, so a template error
    leaves the output directory untouched.

    Args:
        settings: Site configuration

    Returns:
        Report of every file written
    """
    parser = TemplateParser(settings.input_root, settings.output_root)
    parents = parse_bases(parser, settings)
    pages, articles = parse_pages(parser, settings)

    logger.info(f"Parsed {len(parents)} base template(s) and {len(pages)} page(s)")

    compositor = Compositor(parents, markdown_renderer(settings.markdown_extensions))
    composed = compositor.compose_all(pages)

    if settings.clean:
        assets.clean_output(settings.output_root, settings.safe_clean, settings.trash_root)

    report = BuildReport(articles=articles)

    for page, html in composed:
        atomic_write_text(page.output_target, html, mode=settings.file_mode)
        logger.info(f"Rendered {page.identity} → {page.output_target}")
        report.pages.append(page.output_target)

    for rule in settings.copy_rules:
        report.copied.extend(assets.copy_assets(rule, settings.output_root))

    for rule in settings.stylesheets:
        report.stylesheets.append(
            assets.compile_stylesheet(rule, settings.output_root, settings.file_mode)
        )

    context = {"site": settings, "articles": articles}
    report.routes.extend(
        engine.render_routes(settings.routes, context, settings.output_root, settings.file_mode)
    )
    report.routes.extend(
        engine.render_redirects(
            settings.redirects,
            settings.output_root,
            settings.file_mode,
            settings.redirect_template,
        )
    )

    logger.info(
        f"Successfully built {len(report.pages)} page(s), {len(report.copied)} asset(s), "
        f"{len(report.stylesheets)} stylesheet(s) and {len(report.routes)} route(s)"
    )
    return report
