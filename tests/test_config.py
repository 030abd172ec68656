"""Tests for configuration loading."""

from restaurant_booking.config import Config


class TestConfig:
    """Tests for the Config settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
        monkeypatch.delenv("DEFAULT_SEARCH_RADIUS", raising=False)

        config = Config(_env_file=None)

        assert config.default_search_radius == 3000
        assert config.places_api_base_url == "https://places.googleapis.com/v1"
        assert config.has_places_config() is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "test-key")
        monkeypatch.setenv("DEFAULT_LATITUDE", "35.68")
        monkeypatch.setenv("SERVER_PORT", "8080")

        config = Config(_env_file=None)

        assert config.has_places_config() is True
        assert config.default_latitude == 35.68
        assert config.server_port == 8080
