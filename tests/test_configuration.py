"""Tests for the tag definition registry."""

import logging

import pytest

from tagdoc.core.configuration import ParserConfiguration
from tagdoc.core.errors import ConfigurationError, DuplicateDefinitionError
from tagdoc.core.tags import StandardTags, TagDefinition, TagSyntaxKind
from tagdoc.parser.parser import DocParser


def _names(configuration):
    return [d.tag_name for d in configuration.all_definitions()]


def test_standard_definitions_come_first_in_declaration_order():
    """Test the registry starts with the standard set."""
    configuration = ParserConfiguration()
    assert configuration.all_definitions() == list(StandardTags.all_definitions)
    assert _names(configuration)[:3] == ["@alpha", "@beta", "@decorator"]


def test_empty_registry_without_standard_set():
    """Test include_standard=False starts empty."""
    configuration = ParserConfiguration(include_standard=False)
    assert configuration.all_definitions() == []


def test_custom_definitions_follow_in_insertion_order():
    """Test custom tags are appended after the standard tags."""
    configuration = ParserConfiguration()
    configuration.add_tag_definitions([
        TagDefinition("@customInline", TagSyntaxKind.INLINE_TAG, allow_multiple=True),
        TagDefinition("@customBlock", TagSyntaxKind.BLOCK_TAG),
        TagDefinition("@customModifier", TagSyntaxKind.MODIFIER_TAG),
    ])
    names = _names(configuration)
    assert names[-3:] == ["@customInline", "@customBlock", "@customModifier"]
    assert len(names) == len(StandardTags.all_definitions) + 3


def test_lookup_is_case_insensitive():
    """Test tag names match regardless of case."""
    configuration = ParserConfiguration()
    assert configuration.try_get_tag_definition("@ALPHA") is StandardTags.alpha
    assert configuration.try_get_tag_definition("@Remarks") is StandardTags.remarks
    assert configuration.try_get_tag_definition("@nope") is None


def test_last_write_wins_keeps_original_slot(caplog):
    """Test replacing a standard definition keeps its position but takes the new content."""
    configuration = ParserConfiguration()
    slot = _names(configuration).index("@remarks")
    replacement = TagDefinition("@remarks", TagSyntaxKind.MODIFIER_TAG)

    with caplog.at_level(logging.WARNING, logger="tagdoc.core.configuration"):
        configuration.add_tag_definition(replacement)

    found = configuration.try_get_tag_definition("@remarks")
    assert found.syntax_kind is TagSyntaxKind.MODIFIER_TAG
    assert _names(configuration).index("@remarks") == slot
    assert configuration.all_definitions()[slot] == replacement
    assert len(configuration.all_definitions()) == len(StandardTags.all_definitions)

    assert len(configuration.warnings) == 1
    assert configuration.warnings[0].tag_name == "@remarks"
    assert "replaces" in caplog.text


def test_identical_redefinition_is_silent():
    """Test re-adding the same definition records no warning."""
    configuration = ParserConfiguration()
    configuration.add_tag_definition(StandardTags.alpha)
    assert configuration.warnings == []


def test_replace_false_raises_duplicate_definition_error():
    """Test a collision is fatal when replacement is forbidden."""
    configuration = ParserConfiguration()
    with pytest.raises(DuplicateDefinitionError) as excinfo:
        configuration.add_tag_definition(
            TagDefinition("@beta", TagSyntaxKind.BLOCK_TAG), replace=False
        )
    assert excinfo.value.tag_name == "@beta"
    assert configuration.try_get_tag_definition("@beta") is StandardTags.beta


def test_invalid_tag_names_are_rejected():
    """Test malformed definitions are precondition violations."""
    with pytest.raises(ConfigurationError):
        TagDefinition("noAt", TagSyntaxKind.BLOCK_TAG)
    with pytest.raises(ConfigurationError):
        TagDefinition("@has space", TagSyntaxKind.BLOCK_TAG)
    with pytest.raises(ConfigurationError):
        TagDefinition("@ok", "block")


def test_syntax_kind_from_label():
    """Test the normalized labels map to kinds."""
    assert TagSyntaxKind.from_label("inline") is TagSyntaxKind.INLINE_TAG
    with pytest.raises(ConfigurationError, match="Unknown syntax kind"):
        TagSyntaxKind.from_label("footnote")


def test_definitions_of_kind():
    """Test partitioning by syntax kind."""
    configuration = ParserConfiguration()
    inline = [d.tag_name for d in configuration.definitions_of_kind(TagSyntaxKind.INLINE_TAG)]
    assert inline == ["@inheritDoc", "@label", "@link"]


def test_support_flags_enable_validation():
    """Test that the first support entry turns on unsupported-tag reporting."""
    configuration = ParserConfiguration()
    assert configuration.validation.report_unsupported_tags is False

    configuration.set_support_for_tag(StandardTags.remarks, True)
    assert configuration.validation.report_unsupported_tags is True
    assert configuration.is_tag_supported(StandardTags.remarks)
    assert not configuration.is_tag_supported(StandardTags.beta)
    assert configuration.support_for_tags() == {"@remarks": True}


def test_support_for_undefined_tag_raises():
    """Test support can only be set for defined tags."""
    configuration = ParserConfiguration(include_standard=False)
    with pytest.raises(ConfigurationError, match="undefined"):
        configuration.set_support_for_tag(StandardTags.alpha, True)


def test_configuration_is_frozen_once_used_by_a_parser():
    """Test the registry cannot change after a parser takes it."""
    configuration = ParserConfiguration()
    DocParser(configuration)
    assert configuration.frozen
    with pytest.raises(ConfigurationError, match="can no longer be changed"):
        configuration.add_tag_definition(TagDefinition("@late", TagSyntaxKind.BLOCK_TAG))
    with pytest.raises(ConfigurationError):
        configuration.set_support_for_tag(StandardTags.alpha, True)
