from ingest_bridge.app.api.deps import default_source_config
from ingest_bridge.app.core.config import IngestBridgeSettings, get_settings
from ingest_bridge.app.services.transfer import SourceKind


def test_settings_singleton(monkeypatch) -> None:
    monkeypatch.setenv("INGEST_BRIDGE_SERVICE__BASE_URL", "http://ingest.internal:5000")
    get_settings.cache_clear()

    first = get_settings()
    second = get_settings()

    assert first is second
    assert first.service.base_url == "http://ingest.internal:5000"


def test_default_session_config(monkeypatch) -> None:
    monkeypatch.delenv("INGEST_BRIDGE_DEFAULTS__SOURCE", raising=False)
    get_settings.cache_clear()

    config = default_source_config()

    assert config.kind is SourceKind.COLUMNAR
    assert config.columnar.host == "localhost"
    assert config.columnar.port == "9000"
    assert config.columnar.database == "ingestion_db"
    assert config.columnar.user == "default"
    assert config.flat_file.delimiter == ","


def test_nested_env_override(monkeypatch) -> None:
    monkeypatch.setenv("INGEST_BRIDGE_DEFAULTS__SOURCE", "flatfile")
    monkeypatch.setenv("INGEST_BRIDGE_DEFAULTS__FILE_PATH", "data/in.csv")
    monkeypatch.setenv("INGEST_BRIDGE_SERVICE__TIMEOUT_S", "5")

    settings = IngestBridgeSettings()

    assert settings.defaults.source == "flatfile"
    assert settings.defaults.file_path == "data/in.csv"
    assert settings.service.timeout_s == 5.0


def test_credential_hidden_from_settings_repr(monkeypatch) -> None:
    monkeypatch.setenv("INGEST_BRIDGE_DEFAULTS__CREDENTIAL", "jwt-value")

    settings = IngestBridgeSettings()

    assert settings.defaults.credential == "jwt-value"
    assert "jwt-value" not in repr(settings)
