from src.core import config


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.setenv("NOMINATIM_URL", "http://geocoder.local/search")
    monkeypatch.setenv("OVERPASS_URL", "http://overpass.local/api/interpreter")
    monkeypatch.setenv("HTTP_USER_AGENT", "CareFinder/2.0 (ops@example.org)")
    monkeypatch.setenv("GEOCODE_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("OVERPASS_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("SEARCH_DEADLINE_SECONDS", "60")
    monkeypatch.setenv("PORT", "9100")

    settings = config.get_settings()

    assert settings.nominatim_url == "http://geocoder.local/search"
    assert settings.overpass_url == "http://overpass.local/api/interpreter"
    assert settings.user_agent == "CareFinder/2.0 (ops@example.org)"
    assert settings.geocode_timeout == 5.0
    assert settings.overpass_timeout == 12.5
    assert settings.search_deadline_seconds == 60.0
    assert settings.worker_port == 9100


def test_get_settings_defaults_and_warns(monkeypatch, caplog):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in (
        "NOMINATIM_URL",
        "OVERPASS_URL",
        "HTTP_USER_AGENT",
        "GEOCODE_TIMEOUT_SECONDS",
        "OVERPASS_TIMEOUT_SECONDS",
        "SEARCH_DEADLINE_SECONDS",
        "PORT",
        "WORKER_PORT",
    ):
        monkeypatch.delenv(name, raising=False)

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "HTTP_USER_AGENT is not configured" in " ".join(caplog.messages)
    assert settings.nominatim_url == "https://nominatim.openstreetmap.org/search"
    assert settings.overpass_url == "https://overpass-api.de/api/interpreter"
    assert settings.geocode_timeout == 10.0
    assert settings.overpass_timeout == 30.0
    assert settings.worker_port == 8001


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    assert config.get_settings() is config.get_settings()


def test_get_settings_rejects_non_positive_timeouts(monkeypatch, caplog):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.setenv("OVERPASS_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("GEOCODE_TIMEOUT_SECONDS", "-3")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.overpass_timeout == 30.0
    assert settings.geocode_timeout == 10.0
    assert "OVERPASS_TIMEOUT_SECONDS must be positive" in " ".join(caplog.messages)
