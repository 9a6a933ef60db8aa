# urlsigner/core/errors.py
class UrlSignerError(ValueError):
    """Base class for everything the signer raises."""


class ConfigurationError(UrlSignerError):
    """Secret key missing/empty or an option the signer cannot use."""


class NotConfiguredError(UrlSignerError):
    """A signing or verification call was made without a SignerConfig."""

    def __init__(self, msg: str = "configure() with a secret key first"):
        super().__init__(msg)


class MalformedURLError(UrlSignerError):
    """Input could not be parsed as a URL."""
