"""Tests for release note generation."""

from datetime import date

import pytest

from noter.config import Configuration, NoteEntry, NoteVariant
from noter.errors import ConfigError, NoNotesError, TemplateError, VersionError
from noter.releasenote import (
    DocumentWriter,
    MarkdownFormatter,
    TextFormatter,
    collect_notes,
    compile_release_notes,
    find_variant,
    prepend_release_notes,
    render_template,
    resolve_version,
)


FEATURE = NoteVariant(extension="feature", name="Features", show_content=True)
BUGFIX = NoteVariant(extension="bugfix", name="Bugfixes", show_content=True)
MISC = NoteVariant(extension="misc", name="Misc", show_content=False)


def make_config(**overrides):
    values = dict(
        directory="notes",
        filename="ReleaseNotes.rst",
        title_format="v{version} - {project_date}",
        issue_format="<{issue}>",
        variant=[FEATURE, BUGFIX, MISC],
    )
    values.update(overrides)
    return Configuration(**values)


def test_render_template():
    """Test named placeholders are substituted."""
    assert render_template("issue_format", "#{issue}", issue="42") == "#42"


@pytest.mark.parametrize("template", ["{nope}", "{version", "{}", "{0}", "{version.real}"])
def test_render_template_errors(template):
    """Test bad templates raise TemplateError naming the key."""
    with pytest.raises(TemplateError) as exc_info:
        render_template("title_format", template, version="1.0")

    assert exc_info.value.key == "title_format"
    assert "title_format" in str(exc_info.value)


def test_find_variant():
    """Test variants match on the dotted extension suffix."""
    config = make_config()

    assert find_variant(config, "PROJ-1.feature") == FEATURE
    assert find_variant(config, "PROJ-1.bugfix") == BUGFIX
    assert find_variant(config, "PROJ-1.xbugfix") is None
    assert find_variant(config, "README") is None


def test_collect_notes(tmp_path):
    """Test fragments are grouped by variant in file name order."""
    (tmp_path / "PROJ-2.feature").write_text("Second feature\n", encoding="utf-8")
    (tmp_path / "PROJ-1.feature").write_text("First feature\n", encoding="utf-8")
    (tmp_path / "PROJ-3.bugfix").write_text("  A fix  \n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "sub.feature").mkdir()

    notes = collect_notes(make_config(), tmp_path)

    assert notes == {
        FEATURE: [
            NoteEntry(base_file_name="PROJ-1", content="First feature"),
            NoteEntry(base_file_name="PROJ-2", content="Second feature"),
        ],
        BUGFIX: [NoteEntry(base_file_name="PROJ-3", content="A fix")],
    }


def test_collect_notes_missing_directory(tmp_path):
    """Test a missing notes directory is a config error."""
    with pytest.raises(ConfigError):
        collect_notes(make_config(), tmp_path / "missing")


def test_collect_notes_empty(tmp_path):
    """Test a directory without fragments raises NoNotesError."""
    (tmp_path / "README").write_text("nothing here", encoding="utf-8")

    with pytest.raises(NoNotesError):
        collect_notes(make_config(), tmp_path)


def test_compile_release_notes_text():
    """Test sections follow configuration order and skip empty variants."""
    notes = {
        MISC: [NoteEntry(base_file_name="PROJ-9", content="hidden")],
        FEATURE: [NoteEntry(base_file_name="PROJ-1", content="Add a thing")],
    }

    output = compile_release_notes(
        DocumentWriter(TextFormatter()), make_config(), "1.2.0", notes,
        project_date=date(2024, 3, 1),
    )

    assert output == (
        "v1.2.0 - 2024-03-01\n"
        "===================\n"
        "Features\n"
        "--------\n"
        "- PROJ-1: Add a thing <PROJ-1>\n"
        "\n"
        "Misc\n"
        "----\n"
        "- PROJ-9: <PROJ-9>\n"
    )


def test_compile_release_notes_markdown():
    """Test Markdown output from grouped notes."""
    notes = {BUGFIX: [NoteEntry(base_file_name="PROJ-3", content="Fix crash")]}
    config = make_config(filename="CHANGELOG.md", title_format="{version}",
                         issue_format="[{issue}](https://example.com/{issue})")

    output = compile_release_notes(
        DocumentWriter(MarkdownFormatter()), config, "0.1.0", notes,
    )

    assert output == (
        "# 0.1.0\n"
        "\n"
        "## Bugfixes\n"
        "\n"
        "- PROJ-3: Fix crash [PROJ-3](https://example.com/PROJ-3)\n"
    )


def test_compile_release_notes_defaults_to_today():
    """Test project_date defaults to the current date."""
    notes = {FEATURE: [NoteEntry(base_file_name="A", content="a")]}
    config = make_config(title_format="{project_date}")

    output = compile_release_notes(DocumentWriter(TextFormatter()), config, "1", notes)

    assert output.split("\n")[0] == date.today().strftime("%Y-%m-%d")


def test_compile_release_notes_bad_issue_format():
    """Test a bad issue template aborts before anything is written."""
    notes = {FEATURE: [NoteEntry(base_file_name="A", content="a")]}
    config = make_config(issue_format="{ticket}")
    writer = DocumentWriter(TextFormatter())

    with pytest.raises(TemplateError) as exc_info:
        compile_release_notes(writer, config, "1.0", notes)

    assert exc_info.value.key == "issue_format"
    assert writer.serialize() == ""


def test_resolve_version_override(tmp_path):
    """Test an explicit version wins."""
    assert resolve_version("3.1.4", tmp_path) == "3.1.4"


def test_resolve_version_from_pyproject(tmp_path):
    """Test the version is read from pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\nversion = "0.9.1"\n', encoding="utf-8"
    )

    assert resolve_version(None, tmp_path) == "0.9.1"


def test_resolve_version_from_poetry(tmp_path):
    """Test the version is read from a poetry section."""
    (tmp_path / "pyproject.toml").write_text(
        '[tool.poetry]\nname = "demo"\nversion = "1.0.0b1"\n', encoding="utf-8"
    )

    assert resolve_version(None, tmp_path) == "1.0.0b1"


def test_resolve_version_missing(tmp_path):
    """Test a missing version raises VersionError."""
    with pytest.raises(VersionError):
        resolve_version(None, tmp_path)

    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    with pytest.raises(VersionError):
        resolve_version(None, tmp_path)


def test_prepend_release_notes_new_file(tmp_path):
    """Test a missing changelog is created with the notes only."""
    path = tmp_path / "CHANGELOG.md"

    prepend_release_notes(path, "# 1.0\n")

    assert path.read_text(encoding="utf-8") == "# 1.0\n"


def test_prepend_release_notes_existing_file(tmp_path):
    """Test notes go above existing content with one separating newline."""
    path = tmp_path / "CHANGELOG.md"
    path.write_text("# 0.9\n\nold\n", encoding="utf-8")

    prepend_release_notes(path, "# 1.0\n")

    assert path.read_text(encoding="utf-8") == "# 1.0\n\n# 0.9\n\nold\n"


def test_collect_notes_invalid_utf8(tmp_path):
    """Test an undecodable fragment is a config error naming the file."""
    (tmp_path / "PROJ-1.bugfix").write_bytes(b"\xff\xfe bad")

    with pytest.raises(ConfigError, match="PROJ-1.bugfix"):
        collect_notes(make_config(), tmp_path)


def test_resolve_version_invalid_utf8(tmp_path):
    """Test an undecodable pyproject.toml raises VersionError."""
    (tmp_path / "pyproject.toml").write_bytes(b"\xff\xfe bad")

    with pytest.raises(VersionError):
        resolve_version(None, tmp_path)


@pytest.mark.parametrize("raw", [
    'project = "x"\n',
    'tool = "x"\n',
    '[tool]\npoetry = 3\n',
    '[project]\nversion = 1\n',
])
def test_resolve_version_unexpected_layout(tmp_path, raw):
    """Test non-table sections in pyproject.toml raise VersionError."""
    (tmp_path / "pyproject.toml").write_text(raw, encoding="utf-8")

    with pytest.raises(VersionError):
        resolve_version(None, tmp_path)
