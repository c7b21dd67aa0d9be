from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from sitewright.templating.parser import TemplateParser

BASE_HTML = """<html>
<head><title>{% block title | text %}My Site{% endblock title %}</title></head>
<body>
{% block content %}Nothing here yet.{% endblock content %}
</body>
</html>
"""

PAGE_MD = """{% extends "base.html" %}
<!-- define title: Hello World -->
<!-- define category: notes -->
{% block title | text %}Hello{% endblock title %}
{% block content %}Some *content*.{% endblock content %}
"""


@pytest.fixture
def parser() -> TemplateParser:
    return TemplateParser(Path("public"), Path("dist"))


@pytest.fixture
def write(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, write) -> Path:
    """A minimal site under ``tmp_path`` with the working directory set to it."""
    monkeypatch.chdir(tmp_path)
    write("public/base.html", BASE_HTML)
    write("public/index.md", PAGE_MD)
    return tmp_path
