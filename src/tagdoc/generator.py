"""Generate the tag configuration artifact from a registry.

The artifact lists every definition of a ParserConfiguration in registry
order, each preceded by the wrapped summary of its documentation. Output is
only returned after it has been loaded back through the consumer loader and
found to describe the same tag set.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Mapping

from .adapters.api_docs import section_text
from .adapters.config_file import TagConfigFile
from .core.configuration import ParserConfiguration
from .core.errors import (
    ConfigurationError,
    MissingDocumentationError,
    RoundTripError,
)
from .core.nodes import DocComment
from .core.ports import ArtifactLoader
from .core.tags import TagDefinition
from .format.text import same_content, wrap_words

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80

BANNER = [
    "# This file defines the standard tagdoc tags. A project configuration can",
    "# list it to start from the standard set.",
    "#",
    "# (THIS IS A MACHINE-GENERATED FILE. To make a change, edit the tag",
    "# definitions or their documentation and regenerate it.)",
]

Documentation = Mapping[str, "DocComment | str"]


class SyncStatus(Enum):
    UP_TO_DATE = "up-to-date"
    DRIFT = "drift"
    REGENERATED = "regenerated"


def _lookup(documentation: Documentation, definition: TagDefinition) -> str:
    doc = documentation.get(definition.tag_name)
    if doc is None:
        doc = documentation.get(definition.symbol_name)
    if doc is None:
        raise MissingDocumentationError(definition.tag_name)
    text = section_text(doc.summary_section) if isinstance(doc, DocComment) else str(doc)
    if not text.strip():
        raise MissingDocumentationError(definition.tag_name)
    return text


def _record(definition: TagDefinition) -> list[str]:
    lines = [
        "    {",
        f'      "tagName": {json.dumps(definition.tag_name)},',
        f'      "syntaxKind": {json.dumps(definition.syntax_kind.value)}',
    ]
    if definition.allow_multiple:
        lines[-1] += ","
        lines.append('      "allowMultiple": true')
    lines.append("    }")
    return lines


def _support_map(configuration: ParserConfiguration) -> list[str]:
    support = configuration.support_for_tags()
    if not support:
        return ['  "supportForTags": { }']
    entries = [
        f"    {json.dumps(name)}: {json.dumps(supported)}"
        for name, supported in support.items()
    ]
    return ['  "supportForTags": {', ",\n".join(entries), "  }"]


def render_config(
    configuration: ParserConfiguration,
    documentation: Documentation,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Emit the artifact text without validating it."""
    lines = list(BANNER)
    lines.append("{")
    lines.append('  "tagDefinitions": [')

    first = True
    for definition in configuration.all_definitions():
        summary = wrap_words(_lookup(documentation, definition), width)
        if first:
            first = False
        else:
            lines[-1] += ","
            lines.append("")
        lines.extend(("    # " + line).rstrip() for line in summary.split("\n"))
        lines.extend(_record(definition))

    lines.append("  ],")
    lines.append("")
    lines.append("  # Adding at least one entry to this map enables warnings for unsupported tags")
    lines.extend(_support_map(configuration))
    lines.append("}")
    return "\n".join(lines) + "\n"


def _signature(configuration: ParserConfiguration) -> list[tuple[str, str, bool]]:
    return [
        (d.tag_name, d.syntax_kind.value, d.allow_multiple)
        for d in configuration.all_definitions()
    ]


def validate_round_trip(
    configuration: ParserConfiguration,
    content: str,
    loader: ArtifactLoader = TagConfigFile,
) -> ParserConfiguration:
    """Reload ``content`` and check it reproduces ``configuration``."""
    loaded = loader.load_text(content)
    if loaded.has_errors:
        raise RoundTripError(
            "The generated configuration is invalid: " + loaded.get_error_summary(),
            loaded.errors,
        )
    try:
        reloaded = loaded.to_configuration()
    except ConfigurationError as e:
        raise RoundTripError(f"The generated configuration cannot be applied: {e}") from e

    expected, actual = _signature(configuration), _signature(reloaded)
    if expected != actual:
        problems = [
            f"expected {e!r}, reloaded {a!r}"
            for e, a in zip(expected, actual)
            if e != a
        ]
        if len(expected) != len(actual):
            problems.append(
                f"expected {len(expected)} definitions, reloaded {len(actual)}"
            )
        raise RoundTripError(
            "The generated configuration does not reproduce the tag set", problems
        )
    if configuration.support_for_tags() != reloaded.support_for_tags():
        raise RoundTripError(
            "The generated configuration does not reproduce the supportForTags map"
        )
    return reloaded


def generate_config(
    configuration: ParserConfiguration,
    documentation: Documentation,
    width: int = DEFAULT_WIDTH,
    loader: ArtifactLoader = TagConfigFile,
) -> str:
    """Render and validate the artifact; raises GenerationError subclasses."""
    content = render_config(configuration, documentation, width)
    validate_round_trip(configuration, content, loader)
    logger.info(
        "Generated configuration with %d tag definitions",
        len(configuration.all_definitions()),
    )
    return content


def sync_config_file(path: Path, content: str, check_only: bool = False) -> SyncStatus:
    """
    Bring ``path`` in line with ``content``.

    Line-ending style and surrounding whitespace are ignored when comparing.
    In check-only mode a difference is reported as DRIFT and nothing is
    written.
    """
    path = Path(path)
    logger.info("Checking target file: %s", path)
    if path.exists():
        previous = path.read_text(encoding="utf-8")
        if same_content(previous, content):
            logger.info("Target file is up to date")
            return SyncStatus.UP_TO_DATE
    if check_only:
        logger.warning("Target file %s is out of date", path)
        return SyncStatus.DRIFT
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
    logger.warning("Target file %s has been regenerated", path)
    return SyncStatus.REGENERATED


class ConfigGenerator:
    """Binds a registry to its documentation for repeated generate/sync calls."""

    def __init__(
        self,
        configuration: ParserConfiguration,
        documentation: Documentation,
        width: int = DEFAULT_WIDTH,
    ):
        self.configuration = configuration
        self.documentation = documentation
        self.width = width

    def generate(self) -> str:
        return generate_config(self.configuration, self.documentation, self.width)

    def sync(self, path: Path, check_only: bool = False) -> SyncStatus:
        return sync_config_file(path, self.generate(), check_only=check_only)
