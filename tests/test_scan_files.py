from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from scan.files import _build_gitignore_matcher, find_markup_files

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path, content: str = "<p></p>\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _relative(repo_root: Path, **kwargs: object) -> list[str]:
    return [
        path.relative_to(repo_root).as_posix()
        for path in find_markup_files(repo_root, **kwargs)  # type: ignore[arg-type]
    ]


def test_find_markup_files_sorted_and_filtered_by_extension(tmp_path: Path) -> None:
    for name in ("b.html", "a/z.HTM", "a/b.htm", "notes.txt", "script.js"):
        _touch(tmp_path / name)

    assert _relative(tmp_path) == ["a/b.htm", "a/z.HTM", "b.html"]
    assert _relative(tmp_path, extensions=[".txt"]) == ["notes.txt"]


def test_find_markup_files_respects_gitignore_and_output_dir(tmp_path: Path) -> None:
    _touch(tmp_path / "app.html")
    _touch(tmp_path / "bower_components" / "lib.html")
    _touch(tmp_path / ".bindscan" / "stale.html")
    (tmp_path / ".gitignore").write_text("bower_components/\n", encoding="utf-8")

    assert _relative(tmp_path) == ["app.html"]


def test_find_markup_files_include_and_exclude(tmp_path: Path) -> None:
    for name in ("src/a.html", "src/demo/b.html", "test/c.html"):
        _touch(tmp_path / name)

    assert _relative(
        tmp_path, include_patterns=["src/*"], exclude_patterns=["src/demo/*"]
    ) == ["src/a.html"]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_markup_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "elements" / "el.html")

    external_root = tmp_path / "external"
    _touch(external_root / "leak.html")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = _relative(repo_root)

    assert "elements/el.html" in results
    assert "linked/leak.html" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "elements" / "el.html")
    (repo_root / ".gitignore").write_text("*.bin\n", encoding="utf-8")

    external_root = tmp_path / "external"
    external_root.mkdir()
    (external_root / "outside.gitignore").write_text(
        "elements/el.html\n", encoding="utf-8"
    )

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "elements" / "el.html")) is False
