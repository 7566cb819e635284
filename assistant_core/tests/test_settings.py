from assistant_core.config.settings import AssistantSettings


def clear_env(monkeypatch):
    for key in [
        "SERVICE_URL",
        "SERVICE_APIKEY",
        "WATSON_CONVERSATION_URL",
        "WATSON_CONVERSATION_APIKEY",
        "WORKSPACE_ID",
        "HTTP_TIMEOUT",
    ]:
        monkeypatch.delenv(key, raising=False)


def test_env_keys(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(tmp_path / "none.yaml"))
    monkeypatch.setenv("SERVICE_URL", "https://example.com/api/")
    monkeypatch.setenv("SERVICE_APIKEY", "k")
    monkeypatch.setenv("WORKSPACE_ID", "ws-env")
    s = AssistantSettings(_env_file=None)
    assert s.service_url == "https://example.com/api"
    assert s.service_apikey == "k"
    assert s.workspace_id == "ws-env"
    assert s.http_timeout is None


def test_legacy_watson_keys(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(tmp_path / "none.yaml"))
    monkeypatch.setenv("WATSON_CONVERSATION_URL", "https://legacy.example.com")
    monkeypatch.setenv("WATSON_CONVERSATION_APIKEY", "legacy-key")
    s = AssistantSettings(_env_file=None)
    assert s.service_url == "https://legacy.example.com"
    assert s.service_apikey == "legacy-key"


def test_yaml_config_file(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("service_url: https://yaml.example.com\nworkspace_id: ws-yaml\n", encoding="utf-8")
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(cfg))
    s = AssistantSettings(_env_file=None)
    assert s.service_url == "https://yaml.example.com"
    assert s.workspace_id == "ws-yaml"


def test_env_overrides_yaml(monkeypatch, tmp_path):
    clear_env(monkeypatch)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("workspace_id: ws-yaml\n", encoding="utf-8")
    monkeypatch.setenv("ASSISTANT_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("WORKSPACE_ID", "ws-env")
    assert AssistantSettings(_env_file=None).workspace_id == "ws-env"
