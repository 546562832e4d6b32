"""Exception taxonomy for tagdoc.

Grammar problems inside a comment are never raised; they are recorded as
ParserMessage entries on the parser log. Everything here is either a caller
precondition violation or a generation integrity failure.
"""


class TagDocError(Exception):
    """Base class for all tagdoc errors."""


class RangeError(TagDocError, ValueError):
    """A TextRange was requested with a missing buffer or invalid offsets."""


class ConfigurationError(TagDocError):
    """A tag definition or project configuration is malformed."""


class DuplicateDefinitionError(ConfigurationError):
    def __init__(self, tag_name: str):
        super().__init__(f"A tag named {tag_name} is already defined")
        self.tag_name = tag_name


class GenerationError(TagDocError):
    """The configuration artifact could not be produced."""


class MissingDocumentationError(GenerationError):
    def __init__(self, tag_name: str):
        super().__init__(f"Unable to find documentation for {tag_name}")
        self.tag_name = tag_name


class RoundTripError(GenerationError):
    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])
