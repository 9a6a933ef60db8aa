# urlsigner/api/deps.py
from fastapi import HTTPException, Request, status

from ..core.config import SignerConfig


def get_signer_config(request: Request) -> SignerConfig:
    config = getattr(request.app.state, "signer_config", None)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="SIGNER_SECRET is not configured",
        )
    return config
