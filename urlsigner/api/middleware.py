# urlsigner/api/middleware.py
from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from fastapi import HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from ..core.config import SignerConfig
from ..core.errors import MalformedURLError
from ..core.verifier import VerificationOutcome
from .validator import Validator

logger = logging.getLogger("urlsigner.middleware")

Callback = Callable[[Request], Union[Response, Awaitable[Response]]]


def request_url(request: Request) -> str:
    """Path + query exactly as the client sent them (still percent-encoded)."""
    raw_path = request.scope.get("raw_path") or request.url.path.encode("utf-8")
    path = raw_path.split(b"?", 1)[0].decode("latin-1")
    query = (request.scope.get("query_string") or b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _forbidden(request: Request) -> Response:
    return PlainTextResponse("Forbidden", status_code=status.HTTP_403_FORBIDDEN)


def _gone(request: Request) -> Response:
    return PlainTextResponse("Gone", status_code=status.HTTP_410_GONE)


def _config_for(request: Request, config: Optional[SignerConfig]) -> Optional[SignerConfig]:
    if config is not None:
        return config
    return getattr(request.app.state, "signer_config", None)


def check_request(request: Request, validator: Validator) -> VerificationOutcome:
    url = request_url(request)
    try:
        return validator.check(url)
    except MalformedURLError as e:
        logger.info("[signed] malformed request url: %s", e)
        return VerificationOutcome.INVALID


class SignedURLMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose URL is not a valid signed URL.

    `paths` limits the check to requests whose path starts with one of the
    given prefixes (default: every request). Without an explicit `config` the
    middleware reads `app.state.signer_config` on each request, so swapping
    that attribute swaps the key for all following requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        config: Optional[SignerConfig] = None,
        on_invalid: Optional[Callback] = None,
        on_expired: Optional[Callback] = None,
        paths: Optional[Sequence[str]] = None,
    ):
        super().__init__(app)
        self.config = config
        self.on_invalid = on_invalid or _forbidden
        self.on_expired = on_expired or _gone
        self.paths = tuple(paths or ())

    def guards(self, request: Request) -> bool:
        if not self.paths:
            return True
        return any(request.url.path.startswith(p) for p in self.paths)

    async def dispatch(self, request: Request, call_next) -> Response:
        if not self.guards(request):
            return await call_next(request)

        config = _config_for(request, self.config)
        if config is None:
            logger.warning("[signed] no signer config, refusing %s", request.url.path)
            return PlainTextResponse("Signer not configured", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        validator = Validator(config, on_invalid=self.on_invalid, on_expired=self.on_expired)
        outcome = check_request(request, validator)
        if outcome is not VerificationOutcome.VALID:
            logger.info("[signed] %s %s -> %s", request.method, request.url.path, outcome.value)

        result: Any = validator.dispatch(outcome, call_next, request)
        if inspect.isawaitable(result):
            result = await result
        return result


def require_signed_url(config: Optional[SignerConfig] = None):
    """FastAPI dependency: 403 on a tampered URL, 410 on an expired one."""

    def _raise_forbidden(request: Request):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="invalid signature")

    def _raise_gone(request: Request):
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="link expired")

    async def dependency(request: Request) -> VerificationOutcome:
        cfg = _config_for(request, config)
        if cfg is None:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="signer not configured")
        validator = Validator(cfg, on_invalid=_raise_forbidden, on_expired=_raise_gone)
        outcome = check_request(request, validator)
        validator.dispatch(outcome, lambda _request: None, request)
        return outcome

    return dependency
