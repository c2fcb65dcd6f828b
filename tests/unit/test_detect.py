# tests/unit/test_detect.py: Unit tests for project type detection.

import pathspec
import pytest
from pathlib import Path

from qst.detect import PROJECT_TYPES, detect, detect_all, get_by_id, pattern
from qst.util.errors import NoMatchError


def test_detect_single_file(tmp_path: Path):
    """Tests that a source file is classified by its extension."""
    script = tmp_path / "hello.py"
    script.write_text("print('hello')\n")

    assert detect(script).id == "python"

def test_detect_directory_by_marker_file(tmp_path: Path):
    """Tests that a build tool's marker file identifies a directory."""
    (tmp_path / "Cargo.toml").write_text("[package]\n")
    (tmp_path / "main.rs").write_text("fn main() {}\n")

    assert detect(tmp_path).id == "rust/cargo"

def test_first_match_wins(tmp_path: Path):
    """Tests that table order decides between several matching types."""
    (tmp_path / "package.json").write_text("{}")
    (tmp_path / "index.js").write_text("")

    assert detect(tmp_path).id == "javascript/npm"
    assert [p.id for p in detect_all(tmp_path)] == ["javascript/npm", "javascript"]

def test_executable_file_beats_extension(tmp_path: Path):
    """Tests that an executable script is run directly."""
    script = tmp_path / "tool.py"
    script.write_text("#!/usr/bin/env python\n")
    script.chmod(0o755)

    assert detect(script).id == "executable"

def test_directory_is_not_executable(tmp_path: Path):
    """Tests that the execute bit of a directory doesn't count."""
    with pytest.raises(NoMatchError):
        detect(tmp_path)

def test_combined_predicates(tmp_path: Path):
    """Tests the types matched by more than one rule."""
    (tmp_path / "_posts").mkdir()
    assert detect(tmp_path).id == "jekyll"

    paper = tmp_path / "paper.tex"
    paper.write_text("")
    assert detect(paper).id == "latex"

    literate = tmp_path / "Main.lhs"
    literate.write_text("")
    assert detect(literate).id == "haskell"

def test_nested_marker_file(tmp_path: Path):
    """Tests marker files that live in a subdirectory."""
    (tmp_path / ".meteor").mkdir()
    (tmp_path / ".meteor" / ".id").write_text("abc")

    assert detect(tmp_path).id == "javascript/meteor"

def test_no_match(tmp_path: Path):
    """Tests that an unknown file raises NoMatchError."""
    notes = tmp_path / "notes.txt"
    notes.write_text("")

    with pytest.raises(NoMatchError):
        detect(notes)
    assert detect_all(notes) == []

def test_get_by_id():
    """Tests lookup of project types by id."""
    assert get_by_id("make").commands["test"] == "make test"
    assert get_by_id("cobol") is None

def test_project_ids_are_unique():
    ids = [p.id for p in PROJECT_TYPES]
    assert len(ids) == len(set(ids))

def test_pattern_compiles_once(tmp_path: Path, mocker):
    """Tests that a pattern matcher reuses its compiled globs across calls."""
    from_lines = mocker.spy(pathspec.PathSpec, "from_lines")
    for name in ("a.txt", "b.txt", "c.py"):
        (tmp_path / name).write_text("")

    matcher = pattern("*.py")
    assert matcher(tmp_path) is True
    assert matcher(tmp_path / "a.txt") is False

    assert from_lines.call_count == 1
