import time

from fastapi.testclient import TestClient

from urlsigner.api.main import create_app
from urlsigner.config import Settings

KEY = "mySuperSecurePrivateKey"


def _client(tmp_path, **overrides) -> TestClient:
    values = dict(SIGNER_SECRET=KEY, SIGNER_DEFAULT_TTL=3600, DOWNLOADS_DIR=tmp_path)
    values.update(overrides)
    return TestClient(create_app(Settings(**values)))


def test_healthz(tmp_path):
    r = _client(tmp_path).get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["ttl"] == 3600


def test_sign_and_verify(tmp_path, monkeypatch):
    client = _client(tmp_path)
    monkeypatch.setattr(time, "time", lambda: 1_700_000_000.0)

    r = client.post("/links/sign", json={"url": "http://site.com?id=50"})
    assert r.status_code == 200
    body = r.json()
    assert body["expires"] == 1_700_003_600
    assert body["url"].startswith("http://site.com?id=50&expires=1700003600&signature=")

    assert client.post("/links/verify", json={"url": body["url"]}).json() == {"outcome": "valid"}
    assert client.post("/links/verify", json={"url": body["url"] + "t"}).json() == {"outcome": "invalid"}

    monkeypatch.setattr(time, "time", lambda: 1_700_003_601.0)
    assert client.post("/links/verify", json={"url": body["url"]}).json() == {"outcome": "expired"}


def test_sign_without_expiry(tmp_path):
    r = _client(tmp_path).post("/links/sign", json={"url": "/a?b=1", "ttl": 0})
    assert r.status_code == 200
    assert r.json()["expires"] is None
    assert "expires=" not in r.json()["url"]


def test_bad_input(tmp_path):
    client = _client(tmp_path)
    assert client.post("/links/sign", json={"url": "http://[::1"}).status_code == 422
    assert client.post("/links/sign", json={"url": "/a", "ttl": -5}).status_code == 422
    assert client.post("/links/verify", json={"url": "two words"}).status_code == 422


def test_no_secret(tmp_path):
    client = _client(tmp_path, SIGNER_SECRET=None)
    assert client.get("/healthz").json()["ok"] is False
    assert client.post("/links/sign", json={"url": "/a"}).status_code == 503
    assert client.get("/downloads/anything.txt").status_code == 503


def test_signed_download(tmp_path, monkeypatch):
    (tmp_path / "report.txt").write_text("hallo", encoding="utf-8")
    client = _client(tmp_path, SIGNER_DEFAULT_TTL=60)

    monkeypatch.setattr(time, "time", lambda: 1000.0)
    r = client.get("/links/download/report.txt")
    assert r.status_code == 200
    url = r.json()["url"]
    assert url.startswith("/downloads/report.txt?expires=1060&signature=")

    got = client.get(url)
    assert got.status_code == 200
    assert got.content == b"hallo"

    assert client.get("/downloads/report.txt").status_code == 403
    assert client.get(url + "t").status_code == 403

    monkeypatch.setattr(time, "time", lambda: 1061.0)
    assert client.get(url).status_code == 410


def test_download_link_checks_file(tmp_path):
    client = _client(tmp_path)
    assert client.get("/links/download/missing.txt").status_code == 404
    assert client.get("/links/download/.env").status_code == 400
    assert client.get("/links/download/report.txt", params={"ttl": -1}).status_code == 400
