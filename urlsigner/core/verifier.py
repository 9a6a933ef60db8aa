# urlsigner/core/verifier.py
from __future__ import annotations

import enum
import hmac
import logging
from typing import Optional

from .canonical import EXPIRES, SIGNATURE, canonicalize, count_param, get_param, serialize, strip_param
from .config import SignerConfig, require_config
from .signer import get_url_signature, now

logger = logging.getLogger("urlsigner.verifier")


class VerificationOutcome(str, enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    EXPIRED = "expired"

    def __bool__(self) -> bool:
        return self is VerificationOutcome.VALID


def verify_signature(config: Optional[SignerConfig], signature: Optional[str], url: str) -> bool:
    expected = get_url_signature(config, url)
    if not isinstance(signature, str):
        return False
    # latin1 digests can hold non-ascii chars, compare_digest wants bytes then
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))


def _redact(sig: Optional[str]) -> str:
    if not sig:
        return "<none>"
    return sig[:4] + "****"


def verify_signed_url(
    config: Optional[SignerConfig],
    url: str,
    at: Optional[int] = None,
) -> VerificationOutcome:
    """
    Check a URL produced by get_signed_url.

    The signature is checked before expiry: a tampered URL is INVALID no matter
    how old it is. `expires` stays in the signed string, only `signature` is
    removed before recomputing. A repeated `signature` or `expires` is INVALID.
    """
    config = require_config(config)
    canonical = canonicalize(url)
    if count_param(canonical, SIGNATURE) > 1 or count_param(canonical, EXPIRES) > 1:
        logger.debug("[verify] repeated signature/expires for %s", canonical.prefix)
        return VerificationOutcome.INVALID

    signature = get_param(canonical, SIGNATURE)
    expires = get_param(canonical, EXPIRES)

    if not verify_signature(config, signature, serialize(strip_param(canonical, SIGNATURE))):
        logger.debug("[verify] invalid signature %s for %s", _redact(signature), canonical.prefix)
        return VerificationOutcome.INVALID

    if expires is not None:
        try:
            expires_at = int(expires)
        except ValueError:
            logger.debug("[verify] signed but unreadable expires=%r for %s", expires, canonical.prefix)
            return VerificationOutcome.INVALID
        current = now() if at is None else int(at)
        if current > expires_at:
            logger.debug("[verify] expired at %s (now %s) for %s", expires_at, current, canonical.prefix)
            return VerificationOutcome.EXPIRED

    return VerificationOutcome.VALID
