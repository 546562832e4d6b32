"""Tests for the --version report."""

import platform
import subprocess

from tagdoc import __version__
from tagdoc.cli import version_text


def test_version_text_lines():
    """Test the report names the package, interpreter and platform."""
    lines = version_text().split("\n")
    assert lines == [
        f"tagdoc {__version__}",
        f"python {platform.python_version()}",
        f"platform {platform.platform()}",
    ]


def test_version_is_semver_like():
    """Test the package version has numeric major and minor parts."""
    major, minor, *_ = __version__.split(".")
    assert major.isdigit() and minor.isdigit()


def test_version_flag():
    """Test the console script prints the report and exits cleanly."""
    result = subprocess.run(
        ["tagdoc", "--version"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert result.stdout.startswith(f"tagdoc {__version__}\n")
    assert "platform " in result.stdout
