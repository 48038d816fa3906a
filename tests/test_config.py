from datetime import datetime

from tempo_app.core.config import TEMPO_DEFAULT_SERVER, AppSettings, load_settings, local_now


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    for name in ("TEMPO_API_TOKEN", "TEMPO_ACCOUNT_ID", "TEMPO_SERVER", "TEMPO_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings(tmp_path / "missing.yaml")
    assert settings == AppSettings()
    assert settings.tempo_server == TEMPO_DEFAULT_SERVER


def test_yaml_section_and_env_override(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "tempo:\n  tempo_token: file-token\n  account_id: acc-file\n  timezone: Europe/Madrid\n  page_size: 50\n"
    )
    monkeypatch.setenv("TEMPO_API_TOKEN", "env-token")
    monkeypatch.delenv("TEMPO_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("TEMPO_SERVER", raising=False)
    monkeypatch.delenv("TEMPO_TIMEZONE", raising=False)
    settings = load_settings(path)
    assert settings.tempo_token == "env-token"
    assert settings.account_id == "acc-file"
    assert settings.timezone == "Europe/Madrid"
    assert settings.page_size == 50


def test_broken_yaml_is_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("TEMPO_API_TOKEN", raising=False)
    path = tmp_path / "settings.yaml"
    path.write_text("tempo: [unclosed\n")
    assert load_settings(path).tempo_token is None


def test_local_now_is_naive():
    assert local_now(AppSettings(timezone="America/Santiago")).tzinfo is None
    assert isinstance(local_now(), datetime)
