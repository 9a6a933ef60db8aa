# urlsigner/core/signer.py
from __future__ import annotations

import base64
import hmac
import logging
import time
from typing import Optional

from .canonical import EXPIRES, SIGNATURE, canonicalize, serialize, strip_reserved, with_param
from .config import SignerConfig, check_ttl, require_config

logger = logging.getLogger("urlsigner.signer")


def now() -> int:
    return int(time.time())


def _encode(raw: bytes, digest: str) -> str:
    if digest == "hex":
        return raw.hex()
    if digest == "base64url":
        return base64.urlsafe_b64encode(raw).decode().rstrip("=")
    if digest in ("latin1", "binary"):
        return raw.decode("latin-1")
    return base64.b64encode(raw).decode()


def sign(config: SignerConfig, canonical_string: str) -> str:
    """HMAC over the UTF-8 bytes of `canonical_string`, encoded per config.digest."""
    mac = hmac.new(config.secret_key, canonical_string.encode("utf-8"), config.algorithm).digest()
    return _encode(mac, config.digest)


def get_url_signature(config: Optional[SignerConfig], url: str) -> str:
    """Signature of `url` exactly as given (no canonicalization)."""
    return sign(require_config(config), url)


def get_signed_url(
    config: Optional[SignerConfig],
    url: str,
    ttl: Optional[int] = None,
    at: Optional[int] = None,
) -> str:
    """
    Return `url` with `expires` (unless ttl is 0) and `signature` query params.

    Any `expires`/`signature` already on the URL are dropped first. `ttl`
    overrides config.ttl for this one link; `at` pins the signing time.
    """
    config = require_config(config)
    ttl = config.ttl if ttl is None else check_ttl(ttl)

    canonical = strip_reserved(canonicalize(url))
    if ttl:
        expires = (now() if at is None else int(at)) + ttl
        canonical = with_param(canonical, EXPIRES, expires)

    signature = get_url_signature(config, serialize(canonical))
    signed = serialize(with_param(canonical, SIGNATURE, signature))
    logger.debug("[sign] %s (ttl=%s)", canonical.prefix, ttl)
    return signed
