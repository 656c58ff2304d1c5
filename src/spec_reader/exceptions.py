"""Exceptions raised by the spec reader."""


class SpecReaderError(Exception):
    """Base class for all spec reader errors."""


class InputUnavailableError(SpecReaderError):
    """The page text provider could not supply the pages of a document."""


class ConfigError(SpecReaderError):
    """A configuration value could not be interpreted."""
