"""Exceptions raised by Noter."""


class NoterError(Exception):
    """Base class for all Noter errors."""


class ConfigError(NoterError):
    """Configuration file is missing, unreadable or invalid."""


class TemplateError(NoterError):
    """A title or issue template could not be resolved."""

    def __init__(self, key: str, template: str, reason: str):
        self.key = key
        self.template = template
        super().__init__(f"invalid `{key}` given ({template!r}): {reason}")


class NoNotesError(NoterError):
    """No release note fragments matched any configured variant."""


class VersionError(NoterError):
    """The release version could not be determined."""


class MisuseError(NoterError, RuntimeError):
    """The document writer was driven out of order."""
