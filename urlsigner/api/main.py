# urlsigner/api/main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings, get_settings
from ..core.errors import ConfigurationError
from . import downloads, links
from .middleware import SignedURLMiddleware

LOG_ASCII_ONLY = os.getenv("LOG_ASCII_ONLY", "1") == "1"

logger = logging.getLogger("urlsigner")


def ok(msg: str) -> str:
    return f"[OK] {msg}" if LOG_ASCII_ONLY else f"✅ {msg}"


def fail(msg: str) -> str:
    return f"[FAIL] {msg}" if LOG_ASCII_ONLY else f"❌ {msg}"


# ============================================================
# LOGGING
# ============================================================
def setup_logging(settings: Settings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.LOG_DIR is not None:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.LOG_DIR / "urlsigner.log", encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )


# ============================================================
# APP
# ============================================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(ok(f"urlsigner {settings.APP_VERSION} gestart"))
        if app.state.signer_config is None:
            logger.error(fail("SIGNER_SECRET ontbreekt, signing routes geven 503"))
        else:
            cfg = app.state.signer_config
            logger.info(ok(f"signer: algorithm={cfg.algorithm} digest={cfg.digest} ttl={cfg.ttl}"))
        logger.info(ok(f"downloads uit {settings.DOWNLOADS_DIR}"))
        yield

    app = FastAPI(title="urlsigner", version=settings.APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    try:
        app.state.signer_config = settings.signer_config()
    except ConfigurationError as e:
        logger.error(fail(f"signer config: {e}"))
        app.state.signer_config = None

    # volgorde: laatst toegevoegd = buitenste laag
    app.add_middleware(SignedURLMiddleware, paths=["/downloads/"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(links.router)
    app.include_router(downloads.router)

    @app.get("/healthz")
    async def healthz():
        cfg = app.state.signer_config
        return {
            "ok": cfg is not None,
            "version": settings.APP_VERSION,
            "algorithm": cfg.algorithm if cfg else None,
            "ttl": cfg.ttl if cfg else None,
        }

    return app


_settings = get_settings()
setup_logging(_settings)
app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("urlsigner.api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")), reload=False)
