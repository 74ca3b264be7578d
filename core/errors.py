"""Exceptions raised by padnav"""


class PadnavError(Exception):
    """Base class for every padnav error."""


class ParseError(PadnavError, ValueError):
    """A serialized combination contains something that is not a token."""


class DuplicateNameError(PadnavError):
    """A shortcut with the same name is already registered."""


class CollisionError(PadnavError):
    """A combination is already bound to a different shortcut."""


class ConfigError(PadnavError):
    """A configuration or controls profile holds an invalid value."""
