"""
Unit tests for configuration loading and validation.
"""

import pytest

from polymer_toolkit.shared.config import (
    DEFAULT_API_URL,
    ProofConfig,
    load_config,
)
from polymer_toolkit.shared.exceptions import ConfigurationError, ErrorKind


class TestProofConfigValidation:
    """Tests for ProofConfig.validate."""

    def test_defaults(self):
        config = ProofConfig()

        assert config.api_url == DEFAULT_API_URL
        assert config.debug is False
        assert config.max_attempts == 20
        assert config.poll_interval_ms == 3000
        assert config.poll_interval == 3.0

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError, match="API key is required") as exc_info:
            ProofConfig().validate()

        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.parametrize("max_attempts", [0, -3])
    def test_non_positive_attempts(self, max_attempts):
        config = ProofConfig(api_key="k", max_attempts=max_attempts)

        with pytest.raises(ConfigurationError, match="max-attempts"):
            config.validate()

    @pytest.mark.parametrize("interval", [0, -1])
    def test_non_positive_interval(self, interval):
        config = ProofConfig(api_key="k", poll_interval_ms=interval)

        with pytest.raises(ConfigurationError, match="interval"):
            config.validate()

    def test_valid_config(self):
        ProofConfig(api_key="k").validate()

    def test_config_is_immutable(self):
        config = ProofConfig(api_key="k")

        with pytest.raises(AttributeError):
            config.api_key = "other"


class TestLoadConfig:
    """Tests for load_config precedence and parsing."""

    def test_defaults_without_sources(self):
        assert load_config(environ={}) == ProofConfig()

    def test_environment(self):
        config = load_config(
            environ={
                "POLYMER_API_KEY": "env-key",
                "POLYMER_API_URL": "https://proof.polymer.zone",
                "POLYMER_DEBUG": "true",
                "POLYMER_MAX_ATTEMPTS": "5",
                "POLYMER_INTERVAL": "250",
            }
        )

        assert config == ProofConfig(
            api_key="env-key",
            api_url="https://proof.polymer.zone",
            debug=True,
            max_attempts=5,
            poll_interval_ms=250,
        )

    def test_precedence_file_env_overrides(self, tmp_path):
        config_file = tmp_path / "polymer.env"
        config_file.write_text(
            "POLYMER_API_KEY=file-key\n"
            "POLYMER_MAX_ATTEMPTS=7\n"
            "POLYMER_INTERVAL=100\n"
        )

        config = load_config(
            config_file=str(config_file),
            overrides={"api_key": "flag-key", "poll_interval_ms": None},
            environ={"POLYMER_MAX_ATTEMPTS": "9"},
        )

        assert config.api_key == "flag-key"
        assert config.max_attempts == 9
        assert config.poll_interval_ms == 100

    def test_default_config_file_is_read(self, tmp_path, monkeypatch):
        default_file = tmp_path / ".polymer-cli.env"
        default_file.write_text("POLYMER_API_KEY=home-key\n")
        monkeypatch.setattr(
            "polymer_toolkit.shared.config.DEFAULT_CONFIG_FILE", default_file
        )

        assert load_config(environ={}).api_key == "home-key"

    def test_missing_explicit_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=str(tmp_path / "nope.env"), environ={})

    @pytest.mark.parametrize(
        "key,value",
        [
            ("POLYMER_MAX_ATTEMPTS", "many"),
            ("POLYMER_INTERVAL", "1.5"),
            ("POLYMER_DEBUG", "maybe"),
        ],
    )
    def test_unparseable_values(self, key, value):
        with pytest.raises(ConfigurationError, match=key):
            load_config(environ={key: value})
