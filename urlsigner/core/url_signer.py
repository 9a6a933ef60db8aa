# urlsigner/core/url_signer.py
from __future__ import annotations

from typing import Optional, Union

from .config import SignerConfig, configure
from .signer import get_signed_url, get_url_signature
from .verifier import VerificationOutcome, verify_signature, verify_signed_url


class UrlSigner:
    """Object wrapper around one SignerConfig, for callers that want `signer.sign_url(...)`."""

    def __init__(self, config: Union[SignerConfig, str, bytes], **options):
        if isinstance(config, SignerConfig):
            self.config = config if not options else config.replace(**options)
        else:
            self.config = configure(config, **options)

    def signature(self, url: str) -> str:
        return get_url_signature(self.config, url)

    def sign_url(self, url: str, ttl: Optional[int] = None) -> str:
        return get_signed_url(self.config, url, ttl=ttl)

    def verify_signature(self, signature: str, url: str) -> bool:
        return verify_signature(self.config, signature, url)

    def verify(self, url: str) -> VerificationOutcome:
        return verify_signed_url(self.config, url)

    def validator(self, on_invalid=None, on_expired=None):
        from ..api.validator import make_validator

        return make_validator(self.config, on_invalid=on_invalid, on_expired=on_expired)

    def __repr__(self) -> str:
        return f"UrlSigner(algorithm={self.config.algorithm!r}, digest={self.config.digest!r}, ttl={self.config.ttl})"
