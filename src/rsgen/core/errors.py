class RsgenError(Exception):
    """Base class for errors raised by rsgen."""


class EmptyAlphabetError(RsgenError, ValueError):
    """Raised when a charset policy resolves to zero characters."""


class InvalidLengthError(RsgenError, ValueError):
    """Raised when a requested string length is negative or not an int."""


class RandomSourceUnavailableError(RsgenError, RuntimeError):
    """Raised when the OS entropy source cannot be used."""
