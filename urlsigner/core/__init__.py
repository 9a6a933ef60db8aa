from .canonical import (
    EXPIRES,
    RESERVED,
    SIGNATURE,
    CanonicalURL,
    canonicalize,
    get_param,
    serialize,
    strip_reserved,
    with_param,
)
from .config import SignerConfig, configure
from .errors import ConfigurationError, MalformedURLError, NotConfiguredError, UrlSignerError
from .signer import get_signed_url, get_url_signature, sign
from .url_signer import UrlSigner
from .verifier import VerificationOutcome, verify_signature, verify_signed_url

__all__ = [
    "EXPIRES",
    "RESERVED",
    "SIGNATURE",
    "CanonicalURL",
    "ConfigurationError",
    "MalformedURLError",
    "NotConfiguredError",
    "SignerConfig",
    "UrlSigner",
    "UrlSignerError",
    "VerificationOutcome",
    "canonicalize",
    "configure",
    "get_param",
    "get_signed_url",
    "get_url_signature",
    "serialize",
    "sign",
    "strip_reserved",
    "verify_signature",
    "verify_signed_url",
    "with_param",
]
