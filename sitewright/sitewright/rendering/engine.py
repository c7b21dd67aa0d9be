"""Jinja2 rendering for routed pages and redirects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from ..core.errors import OutputError, RouteError
from ..core.models import Redirect, Route
from .io import atomic_write_text

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta http-equiv="refresh" content="0; url={{ redirect }}" />
    <link rel="canonical" href="{{ redirect }}" />
  </head>
  <body>
    <a href="{{ redirect }}">{{ redirect }}</a>
  </body>
</html>
"""


def _environment(search_path: Path | None = None) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(search_path)) if search_path else None,
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def load_template(template_path: Path) -> Template:
    """Load a Jinja2 template from a file path.

    Args:
        template_path: Path to the template file

    Returns:
        Compiled Jinja2 template
    """
    if not template_path.exists():
        raise OutputError(f"Template not found: {template_path}")

    # Use template's parent directory as loader search path
    env = _environment(template_path.parent)
    try:
        return env.get_template(template_path.name)
    except TemplateError as e:
        raise RouteError(f"Failed to load {template_path}: {e}") from e


def _render(template: Template, context: dict[str, Any], source: object) -> str:
    try:
        return template.render(**context)
    except TemplateError as e:
        raise RouteError(f"Failed to render {source}: {e}") from e


def render_route(
    route: Route, context: dict[str, Any], dest_root: Path, file_mode: int
) -> Path:
    """Render a single routed template.

    Args:
        route: Route to render
        context: Template context data
        dest_root: Base directory for relative paths
        file_mode: File permissions

    Returns:
        Output file path
    """
    logger.debug(f"Rendering template: {route.template}")

    rendered_text = _render(load_template(route.template), context, route.template)

    output_path = route.output
    if not output_path.is_absolute():
        output_path = dest_root / output_path

    atomic_write_text(output_path, rendered_text, mode=file_mode)
    logger.info(f"Rendered {route.template} → {output_path}")

    return output_path


def render_redirects(
    redirects: list[Redirect],
    dest_root: Path,
    file_mode: int,
    template_path: Path | None = None,
) -> list[Path]:
    """Render a redirect page for each configured redirect.

    Args:
        redirects: Redirects to render
        dest_root: Base directory for relative paths
        file_mode: File permissions
        template_path: Jinja2 template receiving ``redirect``; a meta-refresh
            page is used when omitted

    Returns:
        List of output file paths
    """
    if not redirects:
        return []

    if template_path:
        template = load_template(template_path)
    else:
        template = _environment().from_string(DEFAULT_REDIRECT_TEMPLATE)

    outputs = []
    for redirect in redirects:
        output_path = redirect.output
        if not output_path.is_absolute():
            output_path = dest_root / output_path
        text = _render(template, {"redirect": redirect.target}, output_path)
        atomic_write_text(output_path, text, mode=file_mode)
        logger.info(f"Redirect {output_path} → {redirect.target}")
        outputs.append(output_path)

    return outputs


def render_routes(
    routes: list[Route], context: dict[str, Any], dest_root: Path, file_mode: int
) -> list[Path]:
    """Render all configured routes."""
    if routes:
        logger.info(f"Rendering {len(routes)} route(s)")

    return [render_route(route, context, dest_root, file_mode) for route in routes]
