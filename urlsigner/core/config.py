# urlsigner/core/config.py
from __future__ import annotations

import hmac
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError, NotConfiguredError

DEFAULT_ALGORITHM = "sha256"
DEFAULT_DIGEST = "base64"
DEFAULT_TTL = 3600  # seconds, 0 = never expire

DIGESTS = ("base64", "base64url", "hex", "latin1", "binary")


class SignerConfig(BaseModel):
    """Immutable signer settings. Build with configure(), never mutate."""

    model_config = ConfigDict(frozen=True)

    secret_key: bytes = Field(repr=False)
    algorithm: str = DEFAULT_ALGORITHM
    digest: str = DEFAULT_DIGEST
    ttl: int = DEFAULT_TTL

    def replace(self, **changes) -> "SignerConfig":
        data = self.model_dump()
        data.update(changes)
        return configure(**data)


def check_ttl(ttl) -> int:
    if isinstance(ttl, bool) or not isinstance(ttl, (int, str)):
        raise ConfigurationError(f"ttl must be an integer >= 0, got {ttl!r}")
    try:
        value = int(ttl)
    except ValueError:
        raise ConfigurationError(f"ttl must be an integer >= 0, got {ttl!r}") from None
    if value < 0:
        raise ConfigurationError(f"ttl must be >= 0, got {value}")
    return value


def configure(
    secret_key: Union[str, bytes, None] = None,
    algorithm: Optional[str] = None,
    digest: Optional[str] = None,
    ttl=None,
) -> SignerConfig:
    """
    Build a SignerConfig. `secret_key` is required; the rest fall back to
    sha256 / base64 / 3600s. Raises ConfigurationError on anything unusable.
    """
    if secret_key is None or len(secret_key) == 0:
        raise ConfigurationError("secret_key is required")
    key = secret_key.encode("utf-8") if isinstance(secret_key, str) else bytes(secret_key)

    algorithm = (algorithm or DEFAULT_ALGORITHM).lower()
    try:
        hmac.new(b"probe", b"", algorithm).digest()
    except (ValueError, TypeError):
        raise ConfigurationError(f"unsupported hash algorithm: {algorithm}") from None

    digest = (digest or DEFAULT_DIGEST).lower()
    if digest not in DIGESTS:
        raise ConfigurationError(f"unsupported digest encoding: {digest} (use one of {', '.join(DIGESTS)})")

    return SignerConfig(
        secret_key=key,
        algorithm=algorithm,
        digest=digest,
        ttl=DEFAULT_TTL if ttl is None else check_ttl(ttl),
    )


def require_config(config: Optional[SignerConfig]) -> SignerConfig:
    if config is None:
        raise NotConfiguredError()
    if not isinstance(config, SignerConfig):
        raise NotConfiguredError(f"expected SignerConfig, got {type(config).__name__}")
    if not config.secret_key:
        raise NotConfiguredError("SignerConfig has an empty secret_key")
    return config
