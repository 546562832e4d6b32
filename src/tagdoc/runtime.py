"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.comment_locator import BlockCommentLocator
from .adapters.config_file import TagConfigFile
from .config import TagDocConfig, load_config
from .core.configuration import ParserConfiguration
from .core.errors import ConfigurationError
from .parser.parser import DocParser


@dataclass
class Runtime:
    """Container for all wired components."""
    configuration: ParserConfiguration
    parser: DocParser
    locator: BlockCommentLocator
    config: TagDocConfig


def build_configuration(config: TagDocConfig) -> ParserConfiguration:
    """Standard set, then the artifact named in [parser], then [[tags]], then [support]."""
    configuration = ParserConfiguration(include_standard=config.parser.include_standard)
    
    if config.parser.config_file is not None:
        config_file = TagConfigFile.load_file(config.parser.config_file)
        config_file.configure_parser(configuration)
    
    configuration.add_tag_definitions(entry.to_definition() for entry in config.tags)
    
    for name, supported in config.support.items():
        definition = configuration.try_get_tag_definition(name)
        if definition is None:
            raise ConfigurationError(f"[support] refers to undefined tag {name}")
        configuration.set_support_for_tag(definition, supported)
    
    return configuration


def build_runtime(config_path: Path | None = None) -> Runtime:
    """Build and wire all components."""
    config = load_config(config_path=config_path)
    configuration = build_configuration(config)
    return Runtime(
        configuration=configuration,
        parser=DocParser(configuration),
        locator=BlockCommentLocator(),
        config=config,
    )
