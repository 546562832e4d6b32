"""Tests for the tagdoc parse and generate CLI commands."""

import json
import subprocess
import tempfile
from pathlib import Path

SOURCE = """\
/**
 * Adds two numbers.
 * @param a - the first operand
 * @beta
 */
function add(a, b) {}

/** Second comment. @internal */
"""


def _run(cwd, *args):
    return subprocess.run(
        ["tagdoc", *args],
        capture_output=True,
        text=True,
        cwd=cwd,
    )


def test_parse_json_first_comment():
    """Test parse reports the first doc comment only by default."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "add.ts").write_text(SOURCE)

        result = _run(tmpdir, "parse", "add.ts", "--json")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert len(data) == 1
        assert data[0]["line"] == 1
        assert data[0]["column"] == 1
        assert data[0]["summary"] == "Adds two numbers."
        assert data[0]["modifiers"] == ["@beta"]
        assert data[0]["params"] == ["a"]
        assert data[0]["findings"] == []


def test_parse_all_comments():
    """Test --all walks every doc comment in the file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "add.ts").write_text(SOURCE)

        result = _run(tmpdir, "parse", "add.ts", "--all", "--json")

        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert [d["line"] for d in data] == [1, 8]
        assert data[1]["modifiers"] == ["@internal"]


def test_parse_text_output():
    """Test the human-readable report includes the tree."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "add.ts").write_text(SOURCE)

        result = _run(tmpdir, "parse", "add.ts")

        assert result.returncode == 0
        assert "add.ts(1,1):" in result.stdout
        assert "No errors or warnings." in result.stdout
        assert "Modifiers: @beta" in result.stdout
        assert "- Comment" in result.stdout


def test_parse_without_comments():
    """Test a file with no doc comment is an error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "plain.ts").write_text("/* not a doc comment */\n")

        result = _run(tmpdir, "parse", "plain.ts")

        assert result.returncode == 1
        assert "No doc comments" in result.stderr


def test_parse_strict_support_fails_on_unsupported_tags():
    """Test [support] entries make unsupported tags errors."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "add.ts").write_text(SOURCE)
        (Path(tmpdir) / "tagdoc.toml").write_text('[support]\n"@param" = true\n')

        result = _run(tmpdir, "parse", "add.ts", "--json")

        assert result.returncode == 1
        findings = json.loads(result.stdout)[0]["findings"]
        assert [(f["severity"], f["id"]) for f in findings] == [
            ("error", "tagdoc-tag-not-supported")
        ]
        assert (findings[0]["line"], findings[0]["column"]) == (4, 4)


def test_generate_then_check():
    """Test generate writes the artifact and --check then passes."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "generate", "--out", "standard.yaml")
        assert result.returncode == 1
        assert "has been regenerated" in result.stdout

        content = (Path(tmpdir) / "standard.yaml").read_text()
        assert '"tagName": "@alpha"' in content

        result = _run(tmpdir, "generate", "--out", "standard.yaml", "--check")
        assert result.returncode == 0
        assert "up to date" in result.stdout


def test_generate_check_reports_drift():
    """Test --check fails on a missing artifact without writing it."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "generate", "--check")

        assert result.returncode == 1
        assert "out of date" in result.stderr
        assert not (Path(tmpdir) / "tagdoc-standard.yaml").exists()


def test_generate_stdout():
    """Test --stdout prints the artifact."""
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "generate", "--stdout")

        assert result.returncode == 0
        assert result.stdout.startswith("#")
        assert '"supportForTags": { }' in result.stdout


def test_generate_with_project_docs():
    """Test --docs adds the project's custom tags."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "tagdoc.toml").write_text('[[tags]]\nname = "@customBlock"\n')
        (Path(tmpdir) / "docs.yaml").write_text(
            "customBlock: |\n  /** A project block. */\n"
        )

        result = _run(tmpdir, "generate", "--docs", "docs.yaml", "--stdout")

        assert result.returncode == 0
        assert "    # A project block." in result.stdout
        assert '"tagName": "@customBlock"' in result.stdout


def test_generate_without_docs_for_custom_tag():
    """Test an undocumented project tag fails generation."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "tagdoc.toml").write_text('[[tags]]\nname = "@customBlock"\n')
        (Path(tmpdir) / "docs.yaml").write_text("{}\n")

        result = _run(tmpdir, "generate", "--docs", "docs.yaml", "--stdout")

        assert result.returncode == 2
        assert "ERROR:" in result.stderr
        assert "@customBlock" in result.stderr


def test_invalid_config_is_reported():
    """Test a broken tagdoc.toml exits with status 2."""
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "tagdoc.toml").write_text("[generate]\nwidth = -1\n")

        result = _run(tmpdir, "generate", "--stdout")

        assert result.returncode == 2
        assert "ERROR:" in result.stderr
