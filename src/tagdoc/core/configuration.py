"""The registry of tag definitions a parser recognizes."""

import logging
from dataclasses import dataclass
from typing import Iterable

from .errors import ConfigurationError, DuplicateDefinitionError
from .tags import StandardTags, TagDefinition, TagSyntaxKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigurationWarning:
    tag_name: str
    message: str


@dataclass
class ValidationOptions:
    # Turned on as soon as any support entry exists
    report_unsupported_tags: bool = False


@dataclass
class _Slot:
    definition: TagDefinition
    standard: bool


class ParserConfiguration:
    """
    Ordered, name-keyed table of TagDefinition values.

    Standard definitions come first in their declaration order, custom ones
    follow in insertion order. Adding a definition whose name already exists
    replaces the content but keeps the original slot (last write wins); the
    replacement is recorded in ``warnings``. Pass ``replace=False`` to make
    a collision fatal instead.
    """

    def __init__(self, include_standard: bool = True):
        self._slots: list[_Slot] = []
        self._index: dict[str, int] = {}
        self._supported: dict[str, bool] = {}
        self._frozen = False
        self.validation = ValidationOptions()
        self.warnings: list[ConfigurationWarning] = []
        if include_standard:
            for definition in StandardTags.all_definitions:
                self._insert(definition, standard=True, replace=False)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigurationError(
                "Configuration is in use by a parser and can no longer be changed"
            )

    def _insert(self, definition: TagDefinition, standard: bool, replace: bool) -> None:
        if not isinstance(definition, TagDefinition):
            raise ConfigurationError(f"Expected a TagDefinition, got {definition!r}")
        key = definition.tag_name_with_upper_case
        existing = self._index.get(key)
        if existing is None:
            self._index[key] = len(self._slots)
            self._slots.append(_Slot(definition, standard))
            return
        if not replace:
            raise DuplicateDefinitionError(definition.tag_name)
        previous = self._slots[existing].definition
        if previous == definition:
            return
        message = (
            f"The definition for {definition.tag_name} replaces an earlier "
            f"{previous.syntax_kind.value} definition"
        )
        logger.warning(message)
        self.warnings.append(ConfigurationWarning(definition.tag_name, message))
        self._slots[existing].definition = definition

    def add_tag_definition(self, definition: TagDefinition, replace: bool = True) -> None:
        self._check_mutable()
        self._insert(definition, standard=False, replace=replace)

    def add_tag_definitions(
        self, definitions: Iterable[TagDefinition], replace: bool = True
    ) -> None:
        for definition in definitions:
            self.add_tag_definition(definition, replace=replace)

    def all_definitions(self) -> list[TagDefinition]:
        return [slot.definition for slot in self._slots]

    def definitions_of_kind(self, kind: TagSyntaxKind) -> list[TagDefinition]:
        return [d for d in self.all_definitions() if d.syntax_kind is kind]

    def try_get_tag_definition(self, tag_name: str) -> TagDefinition | None:
        index = self._index.get(tag_name.upper())
        if index is None:
            return None
        return self._slots[index].definition

    def is_defined(self, definition: TagDefinition) -> bool:
        return self.try_get_tag_definition(definition.tag_name) == definition

    # Support flags

    def set_support_for_tag(self, definition: TagDefinition, supported: bool) -> None:
        self._check_mutable()
        if self.try_get_tag_definition(definition.tag_name) is None:
            raise ConfigurationError(
                f"Cannot set support for undefined tag {definition.tag_name}"
            )
        self._supported[definition.tag_name_with_upper_case] = supported
        self.validation.report_unsupported_tags = True

    def set_support_for_tags(
        self, definitions: Iterable[TagDefinition], supported: bool
    ) -> None:
        for definition in definitions:
            self.set_support_for_tag(definition, supported)

    def is_tag_supported(self, definition: TagDefinition) -> bool:
        return self._supported.get(definition.tag_name_with_upper_case, False)

    def support_for_tags(self) -> dict[str, bool]:
        """Explicit support entries keyed by the defined tag name, in definition order."""
        out: dict[str, bool] = {}
        for definition in self.all_definitions():
            key = definition.tag_name_with_upper_case
            if key in self._supported:
                out[definition.tag_name] = self._supported[key]
        return out
