from utils.config import Settings, validate_config, settings

def test_defaults(monkeypatch):
    for name in ["ENVIRONMENT", "MAX_TEXT_LENGTH", "MAX_UPLOAD_MB", "AUDIO_SAMPLE_RATE", "DOWNLOAD_DURATION_SECONDS"]:
        monkeypatch.delenv(name, raising=False)

    cfg = Settings()
    assert cfg.ENVIRONMENT == "development"
    assert cfg.CORS_ORIGINS == ["*"]
    assert cfg.MAX_TEXT_LENGTH == 50000
    assert cfg.MAX_UPLOAD_BYTES == 10 * 1024 * 1024
    assert cfg.AUDIO_SAMPLE_RATE == 44100
    assert cfg.DOWNLOAD_DURATION_SECONDS == 5
    assert "text/plain" in cfg.ALLOWED_UPLOAD_TYPES

def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAX_TEXT_LENGTH", "1000")
    monkeypatch.setenv("MAX_UPLOAD_MB", "2")

    cfg = Settings()
    assert cfg.MAX_TEXT_LENGTH == 1000
    assert cfg.MAX_UPLOAD_BYTES == 2 * 1024 * 1024

def test_production_cors_origins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("CORS_ORIGINS", "https://studio.example.com, https://app.example.com")

    cfg = Settings()
    assert cfg.is_production()
    assert cfg.CORS_ORIGINS == ["https://studio.example.com", "https://app.example.com"]

def test_production_without_origins_is_invalid(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.delenv("CORS_ORIGINS", raising=False)

    cfg = Settings()
    assert cfg.CORS_ORIGINS == []
    assert validate_config(cfg) is False

def test_validate_config():
    assert validate_config(settings) is True

def test_validate_config_rejects_bad_limits(monkeypatch):
    monkeypatch.setenv("MAX_TEXT_LENGTH", "0")
    assert validate_config(Settings()) is False
