import time

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from urlsigner.api.middleware import SignedURLMiddleware, require_signed_url
from urlsigner.core.config import configure
from urlsigner.core.signer import get_signed_url

KEY = "mySuperSecurePrivateKey"
ENDPOINT = "/endpoint?user=5&someOtherVar=value"


def _app(config=None, **kwargs) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SignedURLMiddleware, config=config, **kwargs)

    @app.get("/endpoint")
    def endpoint():
        return {"ok": True}

    @app.get("/open")
    def open_route():
        return {"open": True}

    return app


def test_valid_tampered_expired(monkeypatch):
    cfg = configure(KEY, ttl=3600)
    client = TestClient(_app(cfg))

    signed = get_signed_url(cfg, ENDPOINT)
    assert client.get(signed).status_code == 200
    assert client.get(signed + "t").status_code == 403
    assert client.get("/endpoint?user=5").status_code == 403
    assert client.get(signed + "&signature=forged").status_code == 403

    short = configure(KEY, ttl=1)
    client = TestClient(_app(short))
    monkeypatch.setattr(time, "time", lambda: 1000.0)
    signed = get_signed_url(short, ENDPOINT)
    monkeypatch.setattr(time, "time", lambda: 1002.0)
    assert client.get(signed).status_code == 410


def test_custom_callbacks():
    cfg = configure(KEY)
    app = _app(
        cfg,
        on_invalid=lambda request: JSONResponse({"error": "nope", "path": request.url.path}, status_code=401),
    )
    r = TestClient(app).get("/endpoint?signature=forged")
    assert r.status_code == 401
    assert r.json() == {"error": "nope", "path": "/endpoint"}


def test_async_callback(monkeypatch):
    cfg = configure(KEY, ttl=1)

    async def expired(request):
        return JSONResponse({"expired": True}, status_code=419)

    client = TestClient(_app(cfg, on_expired=expired))
    signed = get_signed_url(cfg, "/endpoint", at=1000)
    monkeypatch.setattr(time, "time", lambda: 5000.0)
    r = client.get(signed)
    assert r.status_code == 419 and r.json() == {"expired": True}


def test_paths_filter():
    client = TestClient(_app(configure(KEY), paths=["/endpoint"]))
    assert client.get("/open").status_code == 200
    assert client.get("/endpoint").status_code == 403


def test_config_from_app_state():
    app = _app()
    client = TestClient(app)
    app.state.signer_config = None
    assert client.get("/endpoint").status_code == 503

    first = configure("first-key")
    app.state.signer_config = first
    signed = get_signed_url(first, "/endpoint")
    assert client.get(signed).status_code == 200

    # sleutel wisselen = hele config vervangen
    app.state.signer_config = configure("second-key")
    assert client.get(signed).status_code == 403


def test_dependency(monkeypatch):
    cfg = configure(KEY, ttl=1)
    app = FastAPI()

    @app.get("/file", dependencies=[Depends(require_signed_url(cfg))])
    def file():
        return {"file": True}

    client = TestClient(app)
    monkeypatch.setattr(time, "time", lambda: 1000.0)
    signed = get_signed_url(cfg, "/file?name=report.pdf")
    assert client.get(signed).status_code == 200
    assert client.get(signed + "t").status_code == 403
    monkeypatch.setattr(time, "time", lambda: 1002.0)
    r = client.get(signed)
    assert r.status_code == 410
    assert r.json() == {"detail": "link expired"}
