# urlsigner/api/validator.py
"""
Framework-free validator: URL in, outcome out, then one of three callbacks.

Host frameworks wrap this (see middleware.py for Starlette/FastAPI). Nothing
here knows about requests or responses beyond passing *args through.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from ..core.config import SignerConfig, require_config
from ..core.verifier import VerificationOutcome, verify_signed_url

FORBIDDEN = 403
GONE = 410


def forbidden(*_args: Any, **_kwargs: Any) -> int:
    return FORBIDDEN


def gone(*_args: Any, **_kwargs: Any) -> int:
    return GONE


class Validator:
    def __init__(
        self,
        config: SignerConfig,
        on_invalid: Optional[Callable[..., Any]] = None,
        on_expired: Optional[Callable[..., Any]] = None,
    ):
        self.config = require_config(config)
        self.on_invalid = on_invalid or forbidden
        self.on_expired = on_expired or gone

    def check(self, url: str) -> VerificationOutcome:
        return verify_signed_url(self.config, url)

    def dispatch(self, outcome: VerificationOutcome, proceed: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        if outcome is VerificationOutcome.VALID:
            return proceed(*args, **kwargs)
        if outcome is VerificationOutcome.INVALID:
            return self.on_invalid(*args, **kwargs)
        if outcome is VerificationOutcome.EXPIRED:
            return self.on_expired(*args, **kwargs)
        raise AssertionError(f"unhandled outcome: {outcome!r}")

    def __call__(self, url: str, proceed: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Verify `url`; call `proceed(*args)` on VALID, else the matching callback with the same args."""
        return self.dispatch(self.check(url), proceed, *args, **kwargs)


def make_validator(
    config: SignerConfig,
    on_invalid: Optional[Callable[..., Any]] = None,
    on_expired: Optional[Callable[..., Any]] = None,
) -> Validator:
    return Validator(config, on_invalid=on_invalid, on_expired=on_expired)
