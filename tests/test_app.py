from __future__ import annotations

import json

import app
import settings


def _configure(monkeypatch, tmp_path, patterns: list) -> None:
    gateway = tmp_path / "openclaw.json"
    gateway.write_text(json.dumps({"messages": {"groupChat": {"mentionPatterns": patterns}}}), encoding="utf-8")
    monkeypatch.setattr(settings, "GATEWAY_CONFIG_PATH", str(gateway))
    monkeypatch.setattr(settings, "ADMIN_CONFIG_PATH", str(tmp_path / "admin" / "config.json"))


def test_build_filter_config_uses_settings(monkeypatch) -> None:
    monkeypatch.setattr(settings, "TOKENS_PER_SESSION", 1234)
    monkeypatch.setattr(settings, "COUNTRY_CODE", "33")

    config = settings.build_filter_config()

    assert config.tokens_per_session == 1234
    assert config.country_code == "33"


def test_check_prints_verdict(monkeypatch, tmp_path, capsys) -> None:
    _configure(monkeypatch, tmp_path, ["pricing"])

    app.main(["check", "--sender", "0501234567", "--body", "what is your pricing"])
    app.main(["check", "--sender", "0501234567", "--body", "hey"])

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "ALLOW: keyword match (pricing)"
    assert out[1] == "DROP: no keyword match"


def test_replay_reports_session_totals(monkeypatch, tmp_path, capsys) -> None:
    _configure(monkeypatch, tmp_path, ["pricing"])
    messages = tmp_path / "messages.jsonl"
    messages.write_text(
        "\n".join(
            [
                json.dumps({"sender": "1", "body": "pricing please"}),
                json.dumps({"sender": "2", "body": "hello"}),
                "not json",
                json.dumps({"sender": "3", "body": "hello", "chat_type": "group"}),
                json.dumps({"sender": "4", "body": "/exit"}),
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(app, "_print_banner", lambda: None)

    app.main(["replay", str(messages)])

    out = capsys.readouterr().out
    assert "Messages replayed: 4" in out
    assert "Reached the agent: 3" in out
    assert "1 dropped, 1 allowed, ~2,500 tokens saved" in out


def test_status_reports_patterns_and_policy(monkeypatch, tmp_path, capsys) -> None:
    _configure(monkeypatch, tmp_path, ["pricing", "pric(ing"])
    admin = tmp_path / "admin" / "config.json"
    admin.parent.mkdir()
    admin.write_text(
        json.dumps(
            {
                "agentSettings": {
                    "godMode": {
                        "enabled": True,
                        "superUsers": [{"platform": "whatsapp", "identifier": "0501234567", "passwordRequired": False}],
                    }
                },
                "rules": [{"enabled": True, "triggerType": "lead", "noKeywordRestrictions": True}],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(settings, "PLATFORM", "whatsapp")
    monkeypatch.setattr(app, "_print_banner", lambda: None)

    app.main(["status"])

    out = capsys.readouterr().out
    assert "Keyword patterns: 2 configured, 1 invalid" in out
    assert "God Mode enabled: True" in out
    assert "Passwordless super-users: 1" in out
    assert "Rules without keyword restrictions: 0" in out
