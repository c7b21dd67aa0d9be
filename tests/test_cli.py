import json
from pathlib import Path

from typer.testing import CliRunner

from sitewright.cli import app

runner = CliRunner()


def test_build(site: Path) -> None:
    result = runner.invoke(app, ["build"])

    assert result.exit_code == 0, result.output
    assert "<title>Hello</title>" in Path("dist/index.html").read_text()


def test_build_with_options(site: Path, write) -> None:
    write("static/robots.txt", "User-agent: *")
    write("scss/site.scss", "p { color: blue; }")

    result = runner.invoke(
        app,
        [
            "build",
            "--output",
            "out",
            "--copy",
            "static/robots.txt=robots.txt",
            "--scss",
            "scss/site.scss=css/site.css",
        ],
    )

    assert result.exit_code == 0, result.output
    assert Path("out/index.html").exists()
    assert Path("out/robots.txt").read_text() == "User-agent: *"
    assert "color: blue" in Path("out/css/site.css").read_text()


def test_build_with_config_file(site: Path, write) -> None:
    config = write("site.yaml", "output_root: public-html\n")

    result = runner.invoke(app, ["build", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert Path("public-html/index.html").exists()


def test_build_template_error(site: Path, write) -> None:
    write("public/bad.md", '{% extends "missing.html" %}')

    result = runner.invoke(app, ["build"])

    assert result.exit_code == 1
    assert not Path("dist").exists()


def test_build_invalid_copy_argument(site: Path) -> None:
    result = runner.invoke(app, ["build", "--copy", "no-separator"])

    assert result.exit_code == 2


def test_build_missing_config(site: Path) -> None:
    result = runner.invoke(app, ["build", "--config", "nope.yaml"])

    assert result.exit_code == 1


def test_articles(site: Path) -> None:
    result = runner.invoke(app, ["articles"])

    assert result.exit_code == 0, result.output
    [article] = json.loads(result.stdout)
    assert article["title"] == "Hello World"
    assert article["slug"] == "hello-world"
    assert article["template_path"] == "public/index.md"


def test_clean(site: Path, write) -> None:
    write("dist/old.html", "old")

    result = runner.invoke(app, ["clean", "--unsafe"])

    assert result.exit_code == 0, result.output
    assert Path("dist").is_dir()
    assert not Path("dist/old.html").exists()


def test_safe_clean(site: Path, write) -> None:
    write("dist/old.html", "old")

    result = runner.invoke(app, ["clean"])

    assert result.exit_code == 0, result.output
    assert "moved to" in result.stdout
    [trashed] = Path(".sitewright/trash").iterdir()
    assert (trashed / "old.html").read_text() == "old"
