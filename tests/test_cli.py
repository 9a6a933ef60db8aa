import time

from urlsigner.cli import main


def test_sign_then_verify(capsys):
    assert main(["--secret", "k", "sign", "http://site.com?id=50", "--ttl", "0"]) == 0
    signed = capsys.readouterr().out.strip()
    assert signed.startswith("http://site.com?id=50&signature=")

    assert main(["--secret", "k", "verify", signed]) == 0
    assert capsys.readouterr().out.strip() == "valid"

    assert main(["--secret", "k", "verify", signed + "t"]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


def test_expired_exit_code(capsys, monkeypatch):
    monkeypatch.setattr(time, "time", lambda: 1000.0)
    main(["--secret", "k", "sign", "/f", "--ttl", "1"])
    signed = capsys.readouterr().out.strip()
    monkeypatch.setattr(time, "time", lambda: 1002.0)
    assert main(["--secret", "k", "verify", signed]) == 2


def test_signature_command(capsys):
    assert main(["--secret", "Jefe", "--digest", "hex", "signature", "what do ya want for nothing?"]) == 0
    assert capsys.readouterr().out.strip() == "5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"


def test_missing_secret(capsys, monkeypatch):
    monkeypatch.delenv("SIGNER_SECRET", raising=False)
    assert main(["sign", "/f"]) == 64
    assert "secret_key is required" in capsys.readouterr().err
