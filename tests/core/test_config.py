"""Configuration parsing tests."""

from src.core.config import DEFAULT_CORS_ORIGINS, DEFAULT_PLANS_FILE, Settings


def test_defaults() -> None:
    """Settings load without any environment overrides."""
    cfg = Settings(_env_file=None)
    assert cfg.plans_file == DEFAULT_PLANS_FILE
    assert cfg.create_schema is False
    assert cfg.cors_origins == DEFAULT_CORS_ORIGINS


def test_cors_origins_accepts_csv(monkeypatch) -> None:
    """CSV string in env parses into a list of origins."""
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test/,http://a.test")
    cfg = Settings(_env_file=None)
    assert cfg.cors_origins == ["http://a.test", "http://b.test"]


def test_cors_origins_accepts_json_array(monkeypatch) -> None:
    """JSON array string in env parses into a list of origins."""
    monkeypatch.setenv("CORS_ORIGINS", '["http://a.test","http://b.test"]')
    cfg = Settings(_env_file=None)
    assert cfg.cors_origins == ["http://a.test", "http://b.test"]


def test_cors_origins_rejects_invalid_object(monkeypatch) -> None:
    """Invalid values fail with a clear validation error."""
    monkeypatch.setenv("CORS_ORIGINS", '{"invalid":"json"}')
    try:
        Settings(_env_file=None)
    except Exception as exc:
        assert "CORS_ORIGINS" in str(exc)
    else:
        raise AssertionError("Expected invalid CORS_ORIGINS to fail")
