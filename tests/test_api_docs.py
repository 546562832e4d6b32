"""Tests for the documentation model."""

import pytest

from tagdoc.adapters.api_docs import ApiDocumentation
from tagdoc.core.errors import ConfigurationError
from tagdoc.core.tags import StandardTags


def test_standard_docs_cover_every_standard_tag():
    """Test each standard definition has documentation."""
    docs = ApiDocumentation.standard()
    assert sorted(docs) == sorted(d.symbol_name for d in StandardTags.all_definitions)


def test_summary_excludes_other_sections():
    """Test the summary stops at the first block tag."""
    docs = ApiDocumentation.standard()
    summary = docs.summary("alpha")
    assert summary.startswith('Marks an API item as being at the "alpha" release stage.')
    assert "Tooling" not in summary
    assert docs["alpha"].remarks_block is not None


def test_code_spans_keep_tag_names_in_summary():
    """Test tag names quoted in code spans survive into the summary."""
    docs = ApiDocumentation.standard()
    assert "`@beta`" in docs.summary("experimental")
    assert len(docs["experimental"].modifier_tag_set) == 0


def test_summary_of_unknown_symbol():
    """Test unknown symbols have no summary."""
    assert ApiDocumentation.standard().summary("nope") is None


def test_load_file(tmp_path):
    """Test loading project documentation from YAML."""
    path = tmp_path / "docs.yaml"
    path.write_text("customBlock: |\n  /**\n   * Project block.\n   */\n", encoding="utf-8")
    docs = ApiDocumentation.load_file(path)
    assert docs.summary("customBlock") == "Project block."


def test_non_string_documentation_is_rejected():
    """Test every value must be comment text."""
    with pytest.raises(ConfigurationError, match="must be a string"):
        ApiDocumentation.from_mapping({"alpha": 3})


def test_non_mapping_file_is_rejected(tmp_path):
    """Test the file must be a mapping."""
    path = tmp_path / "docs.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="expected a mapping"):
        ApiDocumentation.load_file(path)
