from __future__ import annotations

from pathlib import Path

import pytest

from pflow_store import main as main_module


def test_parse_args_serve_options(tmp_path: Path) -> None:
    args = main_module.parse_args(
        ["serve", "--port", "9000", "--db-path", str(tmp_path / "x.db"), "--collection", "demo"]
    )

    assert args.cmd == "serve"
    assert args.port == 9000
    assert args.db_path == tmp_path / "x.db"
    assert args.collection == "demo"
    assert args.host is None


def test_parse_args_requires_command() -> None:
    with pytest.raises(SystemExit):
        main_module.parse_args([])


def test_serve_builds_app_and_creates_table(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured = {}

    def fake_run(app, host, port, log_config=None):
        captured["app"] = app
        captured["host"] = host
        captured["port"] = port

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    monkeypatch.setattr(main_module, "load_dotenv", lambda: None)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.delenv("PFLOW_HOST", raising=False)

    db_path = tmp_path / "served.db"
    exit_code = main_module.main(["serve", "--port", "9001", "--db-path", str(db_path), "--collection", "demo"])

    assert exit_code == 0
    assert captured["host"] == "127.0.0.1"
    assert captured["port"] == 9001
    assert captured["app"].state.collection == "demo"
    assert db_path.exists()


def test_serve_port_zero_overrides_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured = {}

    def fake_run(app, host, port, log_config=None):
        captured["port"] = port

    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    monkeypatch.setattr(main_module, "load_dotenv", lambda: None)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.setenv("PFLOW_PORT", "9999")

    main_module.main(["serve", "--port", "0", "--db-path", str(tmp_path / "zero.db")])

    assert captured["port"] == 0
