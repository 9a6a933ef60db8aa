# urlsigner/api/links.py
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from ..core.canonical import EXPIRES, canonicalize, get_param
from ..core.config import SignerConfig
from ..core.errors import ConfigurationError, MalformedURLError
from ..core.signer import get_signed_url
from ..core.verifier import verify_signed_url
from .deps import get_signer_config
from .downloads import resolve_download

router = APIRouter(prefix="/links", tags=["links"])
logger = logging.getLogger("urlsigner.links")


class SignIn(BaseModel):
    url: str = Field(..., min_length=1)
    ttl: Optional[int] = Field(default=None, ge=0)


class SignOut(BaseModel):
    url: str
    expires: Optional[int] = None


class VerifyIn(BaseModel):
    url: str = Field(..., min_length=1)


def _signed(config: SignerConfig, url: str, ttl: Optional[int] = None) -> SignOut:
    try:
        signed = get_signed_url(config, url, ttl=ttl)
    except (MalformedURLError, ConfigurationError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    expires = get_param(canonicalize(signed), EXPIRES)
    return SignOut(url=signed, expires=int(expires) if expires is not None else None)


@router.post("/sign", response_model=SignOut)
async def sign_link(body: SignIn, config: SignerConfig = Depends(get_signer_config)):
    return _signed(config, body.url, body.ttl)


@router.post("/verify")
async def verify_link(body: VerifyIn, config: SignerConfig = Depends(get_signer_config)) -> dict[str, Any]:
    try:
        outcome = verify_signed_url(config, body.url)
    except MalformedURLError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"outcome": outcome.value}


@router.get("/download/{name}", response_model=SignOut)
async def download_link(
    name: str,
    request: Request,
    ttl: Optional[int] = None,
    config: SignerConfig = Depends(get_signer_config),
):
    """Signed /downloads/{name} path for a file that exists."""
    if ttl is not None and ttl < 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ttl must be >= 0")
    path = resolve_download(request.app.state.settings.DOWNLOADS_DIR, name)
    out = _signed(config, str(request.app.url_path_for("download_file", name=quote(path.name))), ttl)
    logger.info("[links] download link for %s (expires=%s)", path.name, out.expires)
    return out
