"""Configuration loader for tagdoc.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .core.errors import ConfigurationError
from .core.tags import TagDefinition, TagSyntaxKind

CONFIG_FILENAME = "tagdoc.toml"


@dataclass
class ParserSection:
    """Which tag sets the parser starts from."""
    include_standard: bool = True
    config_file: Path | None = None


@dataclass
class TagEntry:
    """A custom tag declared in [[tags]]."""
    name: str
    kind: str = "block"
    allow_multiple: bool = False

    def to_definition(self) -> TagDefinition:
        return TagDefinition(self.name, TagSyntaxKind.from_label(self.kind), self.allow_multiple)


@dataclass
class GenerateSection:
    """Where and how the standard artifact is generated."""
    out: Path = Path("tagdoc-standard.yaml")
    width: int = 80


@dataclass
class TagDocConfig:
    """Complete tagdoc configuration."""
    parser: ParserSection = field(default_factory=ParserSection)
    tags: list[TagEntry] = field(default_factory=list)
    support: dict[str, bool] = field(default_factory=dict)
    generate: GenerateSection = field(default_factory=GenerateSection)


def _parse_tags(raw: Any) -> list[TagEntry]:
    if not isinstance(raw, list):
        raise ConfigurationError("[[tags]] must be an array of tables")
    tags = []
    for item in raw:
        if not isinstance(item, dict) or "name" not in item:
            raise ConfigurationError("Every [[tags]] entry needs a name")
        entry = TagEntry(
            name=item["name"],
            kind=item.get("kind", "block"),
            allow_multiple=item.get("allow_multiple", False),
        )
        # Validate eagerly so a bad entry is reported at load time
        entry.to_definition()
        tags.append(entry)
    return tags


def _table(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigurationError(f"[{name}] must be a table")
    return value


def load_config(config_path: Path | None = None) -> TagDocConfig:
    """
    Load configuration from tagdoc.toml.
    
    Search order:
    1. config_path (if provided)
    2. cwd/tagdoc.toml
    
    Args:
        config_path: Explicit path to config file
    
    Returns:
        TagDocConfig with resolved settings; defaults when no file exists
    """
    toml_data: dict[str, Any] = {}
    base = Path.cwd()
    
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)
    
    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                try:
                    toml_data = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigurationError(f"{path}: {e}") from e
            base = path.parent
            break
    
    # Parse parser config
    parser_data = _table(toml_data, "parser")
    config_file = parser_data.get("config_file")
    parser_section = ParserSection(
        include_standard=parser_data.get("include_standard", True),
        config_file=base / config_file if config_file else None,
    )
    
    tags = _parse_tags(toml_data.get("tags", []))
    
    support = _table(toml_data, "support")
    for name, value in support.items():
        if not isinstance(value, bool):
            raise ConfigurationError(f"[support] {name} must be true or false")
    
    # Parse generate config
    generate_data = _table(toml_data, "generate")
    width = generate_data.get("width", 80)
    if not isinstance(width, int) or width <= 0:
        raise ConfigurationError(f"[generate] width must be a positive integer, got {width!r}")
    generate_section = GenerateSection(
        out=base / generate_data["out"] if "out" in generate_data else Path("tagdoc-standard.yaml"),
        width=width,
    )
    
    return TagDocConfig(
        parser=parser_section,
        tags=tags,
        support=dict(support),
        generate=generate_section,
    )
