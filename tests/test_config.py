from dbal_adapter.config import AdapterConfig, load_config


def test_defaults(monkeypatch):
    for name in ("DBAL_BACKEND", "DBAL_URI", "DBAL_ENABLE_LOGGING", "DBAL_LOG_LEVEL", "DBAL_LOGGER_NAME"):
        monkeypatch.delenv(name, raising=False)

    assert load_config() == AdapterConfig()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DBAL_BACKEND", " Postgres ")
    monkeypatch.setenv("DBAL_URI", "postgresql://app@db/app")
    monkeypatch.setenv("DBAL_ENABLE_LOGGING", "yes")
    monkeypatch.setenv("DBAL_LOG_LEVEL", "debug")
    monkeypatch.setenv("DBAL_LOGGER_NAME", "app.sql")

    cfg = load_config()
    assert cfg.db_backend == "postgres"
    assert cfg.db_uri == "postgresql://app@db/app"
    assert cfg.enable_logging is True
    assert cfg.log_level == "DEBUG"
    assert cfg.logger_name == "app.sql"
