from pathlib import Path

import pytest

from sitewright.core.errors import OutputError, StylesheetError
from sitewright.core.models import CopyRule, StylesheetRule
from sitewright.rendering import assets
from sitewright.rendering.assets import (
    clean_output,
    compile_stylesheet,
    copy_assets,
    copy_file,
)


def test_copy_single_file(tmp_path: Path, write) -> None:
    source = write("static/robots.txt", "User-agent: *")
    dist = tmp_path / "dist"

    written = copy_assets(CopyRule(source=source, destination=Path("robots.txt")), dist)

    assert written == [dist / "robots.txt"]
    assert (dist / "robots.txt").read_text() == "User-agent: *"


def test_copy_directory_with_pattern(tmp_path: Path, write) -> None:
    write("static/images/a.png", "a")
    write("static/images/icons/b.png", "b")
    write("static/images/notes.txt", "skip")
    dist = tmp_path / "dist"

    rule = CopyRule(
        source=tmp_path / "static/images", destination=Path("images"), pattern=r"\.png$"
    )
    written = copy_assets(rule, dist)

    assert written == [dist / "images/a.png", dist / "images/icons/b.png"]
    assert not (dist / "images/notes.txt").exists()


def test_copy_without_overwrite_keeps_existing(tmp_path: Path, write) -> None:
    source = write("static/style.css", "new")
    target = write("dist/style.css", "old")

    assert copy_file(source, target, overwrite=False) is False
    assert target.read_text() == "old"

    assert copy_file(source, target, overwrite=True) is True
    assert target.read_text() == "new"


def test_copy_missing_source(tmp_path: Path) -> None:
    rule = CopyRule(source=tmp_path / "nope", destination=Path("nope"))

    with pytest.raises(OutputError, match="not found"):
        copy_assets(rule, tmp_path / "dist")


def test_compile_stylesheet(tmp_path: Path, write) -> None:
    source = write("scss/main.scss", "$accent: red;\na { b { color: $accent; } }\n")
    rule = StylesheetRule(source=source, destination=Path("css/main.css"))

    output = compile_stylesheet(rule, tmp_path / "dist")

    assert output == tmp_path / "dist/css/main.css"
    css = output.read_text()
    assert "a b" in css
    assert "color: red" in css


def test_compile_stylesheet_error(tmp_path: Path, write) -> None:
    source = write("scss/broken.scss", "a { color: $undefined; }\n")
    rule = StylesheetRule(source=source, destination=Path("css/broken.css"))

    with pytest.raises(StylesheetError, match="broken.scss"):
        compile_stylesheet(rule, tmp_path / "dist")

    assert not (tmp_path / "dist/css/broken.css").exists()


def test_compile_missing_stylesheet(tmp_path: Path) -> None:
    rule = StylesheetRule(source=tmp_path / "missing.scss", destination=Path("x.css"))

    with pytest.raises(StylesheetError, match="not found"):
        compile_stylesheet(rule, tmp_path / "dist")


def test_safe_clean_moves_output_to_trash(tmp_path: Path, write) -> None:
    write("dist/index.html", "old")
    trash = tmp_path / "trash"

    moved_to = clean_output(tmp_path / "dist", safe=True, trash_root=trash)

    assert moved_to is not None
    assert moved_to.parent == trash
    assert (moved_to / "index.html").read_text() == "old"
    assert (tmp_path / "dist").is_dir()
    assert list((tmp_path / "dist").iterdir()) == []


def test_safe_clean_twice_in_one_second(
    tmp_path: Path, write, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(assets, "_timestamp", lambda: "2024-01-01-at-00-00-00")
    trash = tmp_path / "trash"
    dist = tmp_path / "dist"

    write("dist/one.html", "one")
    first = clean_output(dist, safe=True, trash_root=trash)
    write("dist/two.html", "two")
    second = clean_output(dist, safe=True, trash_root=trash)

    assert first == trash / "2024-01-01-at-00-00-00"
    assert second == trash / "2024-01-01-at-00-00-00-1"
    assert [p.name for p in first.iterdir()] == ["one.html"]
    assert [p.name for p in second.iterdir()] == ["two.html"]


def test_unsafe_clean_deletes_output(tmp_path: Path, write) -> None:
    write("dist/nested/index.html", "old")

    moved_to = clean_output(tmp_path / "dist", safe=False)

    assert moved_to is None
    assert (tmp_path / "dist").is_dir()
    assert list((tmp_path / "dist").iterdir()) == []


def test_clean_creates_missing_output(tmp_path: Path) -> None:
    assert clean_output(tmp_path / "dist", trash_root=tmp_path / "trash") is None
    assert (tmp_path / "dist").is_dir()
