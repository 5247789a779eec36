class ShortenerError(Exception):
    """Base class for token generation failures."""


class ConfigurationError(ShortenerError, ValueError):
    """Secret key, alphabet or offset settings are unusable."""


class AllocationError(ShortenerError):
    """The identifier source failed or returned a non-monotonic value."""


class DecodeError(ShortenerError, ValueError):
    """A token contains a symbol that is not part of the alphabet."""
