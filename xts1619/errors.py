class XTSError(ValueError):
    """Base class for errors raised by the XTS engine."""


class ConfigurationError(XTSError):
    """Ciphers or engine parameters cannot be combined."""


class InvalidLengthError(XTSError):
    """Input or output buffer does not fit a whole data unit."""
