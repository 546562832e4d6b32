"""Tests for configuration loading."""

import os
import tempfile
from pathlib import Path

import pytest

from tagdoc.config import load_config
from tagdoc.core.errors import ConfigurationError
from tagdoc.core.tags import TagSyntaxKind
from tagdoc.runtime import build_configuration, build_runtime


def test_load_config_defaults(tmp_path, monkeypatch):
    """Test loading config with defaults when no file exists."""
    monkeypatch.chdir(tmp_path)
    config = load_config()

    # Should use defaults
    assert config.parser.include_standard is True
    assert config.parser.config_file is None
    assert config.tags == []
    assert config.support == {}
    assert config.generate.out == Path("tagdoc-standard.yaml")
    assert config.generate.width == 80


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "tagdoc.toml"
        config_path.write_text("""
[parser]
include_standard = false
config_file = "tags.yaml"

[[tags]]
name = "@customBlock"

[[tags]]
name = "@customInline"
kind = "inline"
allow_multiple = true

[support]
"@customBlock" = true

[generate]
out = "out/standard.yaml"
width = 60
""")

        config = load_config(config_path=config_path)

        assert config.parser.include_standard is False
        assert config.parser.config_file == Path(tmpdir) / "tags.yaml"
        assert [t.name for t in config.tags] == ["@customBlock", "@customInline"]
        assert config.tags[0].kind == "block"
        assert config.tags[1].to_definition().syntax_kind is TagSyntaxKind.INLINE_TAG
        assert config.tags[1].allow_multiple is True
        assert config.support == {"@customBlock": True}
        assert config.generate.out == Path(tmpdir) / "out" / "standard.yaml"
        assert config.generate.width == 60


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config_path = Path(tmpdir) / "tagdoc.toml"
            config_path.write_text("""
[generate]
width = 100
""")

            config = load_config()
            assert config.generate.width == 100
        finally:
            os.chdir(orig_cwd)


@pytest.mark.parametrize(
    "body, fragment",
    [
        ("[generate]\nwidth = 0\n", "positive integer"),
        ("[support]\n'@beta' = 'yes'\n", "true or false"),
        ("[[tags]]\nkind = 'block'\n", "needs a name"),
        ("[[tags]]\nname = 'bad'\n", "Invalid tag name"),
        ("[[tags]]\nname = '@x'\nkind = 'weird'\n", "Unknown syntax kind"),
        ("[parser\n", "tagdoc.toml"),
        ("support = 1\n", "\\[support\\] must be a table"),
        ("parser = 'standard'\n", "\\[parser\\] must be a table"),
        ("generate = [80]\n", "\\[generate\\] must be a table"),
    ],
)
def test_load_config_rejects_invalid_values(tmp_path, body, fragment):
    """Test invalid settings are reported at load time."""
    config_path = tmp_path / "tagdoc.toml"
    config_path.write_text(body)
    with pytest.raises(ConfigurationError, match=fragment):
        load_config(config_path=config_path)


ARTIFACT = """\
{
  "tagDefinitions": [
    { "tagName": "@fromFile", "syntaxKind": "modifier" }
  ],
  "supportForTags": { "@fromFile": true }
}
"""


def test_build_configuration_layers(tmp_path):
    """Test standard set, artifact, [[tags]] and [support] are applied in order."""
    (tmp_path / "tags.yaml").write_text(ARTIFACT)
    config_path = tmp_path / "tagdoc.toml"
    config_path.write_text("""
[parser]
config_file = "tags.yaml"

[[tags]]
name = "@customBlock"

[support]
"@customBlock" = false
""")
    configuration = build_configuration(load_config(config_path=config_path))

    names = [d.tag_name for d in configuration.all_definitions()]
    assert names[0] == "@alpha"
    assert names[-2:] == ["@fromFile", "@customBlock"]
    assert configuration.support_for_tags() == {"@fromFile": True, "@customBlock": False}
    assert configuration.validation.report_unsupported_tags is True


def test_build_configuration_rejects_unknown_support(tmp_path):
    """Test [support] may only name defined tags."""
    config_path = tmp_path / "tagdoc.toml"
    config_path.write_text("[support]\n'@nowhere' = true\n")
    with pytest.raises(ConfigurationError, match="undefined tag"):
        build_configuration(load_config(config_path=config_path))


def test_build_runtime_freezes_configuration(tmp_path, monkeypatch):
    """Test the wired parser owns a frozen registry."""
    monkeypatch.chdir(tmp_path)
    rt = build_runtime()
    assert rt.configuration.frozen
    assert rt.parser.configuration is rt.configuration
