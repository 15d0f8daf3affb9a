from personal_wiki_ui.config import Settings


def test_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.wikis_path == "/wikis"
    assert cfg.public_wiki_base_url == "https://personalwiki.com.de/wikis"
    assert cfg.label_revert_delay == 2.0
    assert cfg.request_timeout is None
    assert cfg.terminal_on_transport_error is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PERSONAL_WIKI_ENDPOINT_BASE_URL", "http://localhost:3000")
    monkeypatch.setenv("PERSONAL_WIKI_LABEL_REVERT_DELAY", "0.5")
    monkeypatch.setenv("PERSONAL_WIKI_TERMINAL_ON_TRANSPORT_ERROR", "true")

    cfg = Settings(_env_file=None)

    assert str(cfg.endpoint_base_url).rstrip("/") == "http://localhost:3000"
    assert cfg.label_revert_delay == 0.5
    assert cfg.terminal_on_transport_error is True
