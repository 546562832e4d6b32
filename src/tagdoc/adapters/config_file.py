"""Reader for the tag configuration artifact.

The artifact is a JSON-shaped YAML flow document::

    # banner comments
    {
      "tagDefinitions": [
        # summary of the tag
        {
          "tagName": "@alpha",
          "syntaxKind": "modifier"
        }
      ],
      "supportForTags": { }
    }

Content problems are collected in ``errors``; nothing here raises for a bad
document. Only an unreadable file raises (OSError).
"""

import io
from pathlib import Path
from typing import Any

import yaml

from ..core.configuration import ParserConfiguration
from ..core.errors import ConfigurationError
from ..core.tags import TAG_NAME_RE, TagDefinition, TagSyntaxKind

_TOP_LEVEL_KEYS = {"$schema", "tagDefinitions", "supportForTags"}
_DEFINITION_KEYS = {"tagName", "syntaxKind", "allowMultiple"}


class TagConfigFile:
    def __init__(self, file_path: Path | None = None):
        self.file_path = file_path
        self.tag_definitions: list[TagDefinition] = []
        self.support_for_tags: dict[str, bool] = {}
        self.errors: list[str] = []

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def get_error_summary(self) -> str:
        if not self.errors:
            return "No errors."
        where = f"{self.file_path}: " if self.file_path else ""
        return "\n".join(where + error for error in self.errors)

    @classmethod
    def load_file(cls, path: Path) -> "TagConfigFile":
        text = Path(path).read_text(encoding="utf-8")
        return cls.load_text(text, file_path=Path(path))

    @classmethod
    def load_text(cls, text: str, file_path: Path | None = None) -> "TagConfigFile":
        config_file = cls(file_path)
        try:
            data = yaml.safe_load(io.StringIO(text))
        except yaml.YAMLError as e:
            config_file.errors.append(f"Invalid syntax: {e}")
            return config_file
        config_file._read(data)
        return config_file

    def _read(self, data: Any) -> None:
        if not isinstance(data, dict):
            self.errors.append("The top level must be a mapping")
            return
        for key in data:
            if key not in _TOP_LEVEL_KEYS:
                self.errors.append(f"Unknown top-level field {key!r}")

        definitions = data.get("tagDefinitions", [])
        if definitions is None:
            definitions = []
        if not isinstance(definitions, list):
            self.errors.append('"tagDefinitions" must be a list')
            definitions = []
        seen: set[str] = set()
        for position, item in enumerate(definitions):
            definition = self._read_definition(position, item)
            if definition is None:
                continue
            key = definition.tag_name_with_upper_case
            if key in seen:
                self.errors.append(
                    f"tagDefinitions[{position}]: {definition.tag_name} is defined more than once"
                )
                continue
            seen.add(key)
            self.tag_definitions.append(definition)

        support = data.get("supportForTags", {})
        if support is None:
            support = {}
        if not isinstance(support, dict):
            self.errors.append('"supportForTags" must be a mapping')
            return
        for tag_name, supported in support.items():
            if not isinstance(tag_name, str) or not TAG_NAME_RE.match(tag_name):
                self.errors.append(f"supportForTags: invalid tag name {tag_name!r}")
            elif not isinstance(supported, bool):
                self.errors.append(f"supportForTags: {tag_name} must be true or false")
            else:
                self.support_for_tags[tag_name] = supported

    def _read_definition(self, position: int, item: Any) -> TagDefinition | None:
        where = f"tagDefinitions[{position}]"
        if not isinstance(item, dict):
            self.errors.append(f"{where}: expected a mapping")
            return None
        unknown = [key for key in item if key not in _DEFINITION_KEYS]
        if unknown:
            self.errors.append(f"{where}: unknown fields {', '.join(map(str, unknown))}")
            return None
        tag_name = item.get("tagName")
        kind_label = item.get("syntaxKind")
        allow_multiple = item.get("allowMultiple", False)
        if not isinstance(kind_label, str):
            self.errors.append(f"{where}: missing or invalid \"syntaxKind\"")
            return None
        if not isinstance(allow_multiple, bool):
            self.errors.append(f"{where}: \"allowMultiple\" must be true or false")
            return None
        try:
            return TagDefinition(tag_name, TagSyntaxKind.from_label(kind_label), allow_multiple)
        except ConfigurationError as e:
            self.errors.append(f"{where}: {e}")
            return None

    def configure_parser(self, configuration: ParserConfiguration) -> None:
        """Merge this file's definitions and support flags into ``configuration``."""
        if self.has_errors:
            raise ConfigurationError(
                "Cannot apply an invalid configuration file:\n" + self.get_error_summary()
            )
        configuration.add_tag_definitions(self.tag_definitions)
        for tag_name, supported in self.support_for_tags.items():
            definition = configuration.try_get_tag_definition(tag_name)
            if definition is None:
                raise ConfigurationError(
                    f"supportForTags refers to {tag_name}, which is not defined"
                )
            configuration.set_support_for_tag(definition, supported)

    def to_configuration(self) -> ParserConfiguration:
        """A registry holding exactly the definitions listed in this file."""
        configuration = ParserConfiguration(include_standard=False)
        self.configure_parser(configuration)
        return configuration
