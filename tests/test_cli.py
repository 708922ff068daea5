from __future__ import annotations

import json
import time
from pathlib import Path

# pylint: disable=import-error
from offline_auth import DEFAULT_MAX_AGE_SECONDS
from offline_auth.cli import build_parser


def _run(argv: list[str]) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


def test_cli_save_then_load_redacts_token(tmp_path: Path, capsys) -> None:
    data_dir = tmp_path / "app-data"
    exit_code = _run(
        ["save", "--data-dir", str(data_dir), "--user-id", "user-42", "--token", "token-abc"]
    )
    saved = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert saved["saved"] is True
    assert saved["storage_path"] == str(data_dir / "offline_auth.json")

    exit_code = _run(["load", "--data-dir", str(data_dir)])
    loaded = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert loaded["user_id"] == "user-42"
    assert loaded["auth_token"] == "[REDACTED]"
    assert loaded["timestamp"] == saved["issued_at"]


def test_cli_load_show_token(tmp_path: Path, capsys) -> None:
    _run(["save", "--data-dir", str(tmp_path), "--user-id", "user-42", "--token", "token-abc"])
    capsys.readouterr()
    exit_code = _run(["load", "--data-dir", str(tmp_path), "--show-token"])
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["auth_token"] == "token-abc"


def test_cli_load_missing_record_exits_non_zero(tmp_path: Path, capsys) -> None:
    exit_code = _run(["load", "--data-dir", str(tmp_path)])
    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "not_found: No offline login data found." in captured.err


def test_cli_load_expired_record(tmp_path: Path, capsys) -> None:
    file_path = tmp_path / "offline_auth.json"
    file_path.write_text(
        json.dumps(
            {
                "user_id": "user-42",
                "auth_token": "token-abc",
                "timestamp": int(time.time()) - DEFAULT_MAX_AGE_SECONDS - 120,
            }
        ),
        encoding="utf-8",
    )
    exit_code = _run(["load", "--data-dir", str(tmp_path)])
    assert exit_code == 1
    assert "expired:" in capsys.readouterr().err
    assert not file_path.exists()


def test_cli_status_uses_config_file(tmp_path: Path, capsys) -> None:
    data_dir = tmp_path / "data"
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"data_dir": str(data_dir)}), encoding="utf-8")

    assert _run(["status", "--config", str(config_file)]) == 0
    status = json.loads(capsys.readouterr().out)
    assert status["present"] is False

    _run(["save", "--config", str(config_file), "--user-id", "user-42", "--token", "token-abc"])
    capsys.readouterr()
    assert _run(["status", "--config", str(config_file)]) == 0
    status = json.loads(capsys.readouterr().out)
    assert status["present"] is True
    assert status["fresh"] is True
    assert status["user_id"] == "user-42"
    assert "token-abc" not in json.dumps(status)


def test_cli_reports_bad_config(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"max_age_seconds": 10}), encoding="utf-8")
    exit_code = _run(["status", "--config", str(config_file)])
    assert exit_code == 2
    assert "Config load failed: data_dir is required." in capsys.readouterr().err


def test_cli_reports_invalid_yaml_config(tmp_path: Path, capsys) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("data_dir: [unclosed", encoding="utf-8")
    exit_code = _run(["status", "--config", str(config_file)])
    assert exit_code == 2
    assert "Config load failed: Config file is not valid YAML" in capsys.readouterr().err


def test_cli_rejects_empty_data_dir(tmp_path: Path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    exit_code = _run(["save", "--data-dir", "", "--user-id", "user-42", "--token", "token-abc"])
    assert exit_code == 2
    assert "data_dir is required." in capsys.readouterr().err
    assert not (tmp_path / "offline_auth.json").exists()
