"""HMAC-signed, expiring URLs."""
from .core import (
    ConfigurationError,
    MalformedURLError,
    NotConfiguredError,
    SignerConfig,
    UrlSigner,
    VerificationOutcome,
    configure,
    get_signed_url,
    get_url_signature,
    verify_signature,
    verify_signed_url,
)
from .api.validator import make_validator

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "MalformedURLError",
    "NotConfiguredError",
    "SignerConfig",
    "UrlSigner",
    "VerificationOutcome",
    "configure",
    "get_signed_url",
    "get_url_signature",
    "make_validator",
    "verify_signature",
    "verify_signed_url",
]
