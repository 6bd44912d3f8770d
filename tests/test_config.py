"""Tests for settings loading."""

from shared.config import DEFAULT_BASE_URL, Settings, load_yaml_config


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test the built-in defaults."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.environment == "development"
        assert settings.shortcut.base_url == DEFAULT_BASE_URL
        assert settings.shortcut.timeout_seconds == 30.0
        assert settings.server.name == "shortcut-server"
        assert settings.server.enable_audit is True

    def test_from_yaml(self, tmp_path):
        """Test loading nested settings from YAML."""
        path = tmp_path / "settings.yaml"
        path.write_text(
            "environment: production\n"
            "log_level: DEBUG\n"
            "log_json: true\n"
            "shortcut:\n"
            "  base_url: https://shortcut.example.test/api/v3\n"
            "  timeout_seconds: 5\n"
            "server:\n"
            "  enable_audit: false\n"
        )

        settings = Settings.from_yaml(path)

        assert settings.environment == "production"
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.shortcut.base_url == "https://shortcut.example.test/api/v3"
        assert settings.shortcut.timeout_seconds == 5
        assert settings.server.enable_audit is False

    def test_missing_yaml_falls_back_to_defaults(self, tmp_path):
        """Test that a missing file is not an error."""
        assert load_yaml_config(tmp_path / "absent.yaml") == {}
        assert Settings.from_yaml(tmp_path / "absent.yaml").log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("SHORTCUT_MCP_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SHORTCUT_TIMEOUT_SECONDS", "12.5")

        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.shortcut.timeout_seconds == 12.5
