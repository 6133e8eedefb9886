from goat_admin import __main__ as entrypoint
from goat_admin.main import app


def test_main_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs))
    )
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9001")

    entrypoint.main()

    assert calls == [((app,), {"host": "0.0.0.0", "port": 9001})]


def test_main_defaults_to_localhost(monkeypatch):
    calls = []
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda *args, **kwargs: calls.append(kwargs)
    )
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    entrypoint.main()

    assert calls == [{"host": "127.0.0.1", "port": 8000}]
