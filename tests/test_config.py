"""
Unit tests for client configuration
"""

import pytest

from wallet_sdk.config import (
    ClientOptions,
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_READ_RETRY,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from wallet_sdk.exceptions import ValidationError


class TestClientOptions:
    """Test configuration defaults and validation"""

    def test_defaults(self):
        options = ClientOptions()
        assert options.endpoint == DEFAULT_ENDPOINT
        assert options.timeout == DEFAULT_TIMEOUT == 10.0
        assert options.max_read_retry == DEFAULT_MAX_READ_RETRY == 5
        assert options.retry_interval == DEFAULT_RETRY_INTERVAL == 0.05
        assert options.debug is False
        assert options.credentials_loader is None
        assert options.user_agent == DEFAULT_USER_AGENT
        assert options.user_agent.startswith("wallet/")
        assert options.user_agent.endswith(" lang/python")

    def test_non_positive_values_fall_back_to_defaults(self):
        options = ClientOptions(timeout=0, max_read_retry=-1, retry_interval=0)
        assert options.timeout == DEFAULT_TIMEOUT
        assert options.max_read_retry == DEFAULT_MAX_READ_RETRY
        assert options.retry_interval == DEFAULT_RETRY_INTERVAL

    def test_endpoint_normalization(self):
        options = ClientOptions(endpoint="https://wallet.example.com/")
        assert options.endpoint == "https://wallet.example.com"

    def test_endpoint_validation(self):
        with pytest.raises(ValidationError, match="Endpoint cannot be empty"):
            ClientOptions(endpoint="")

        with pytest.raises(ValidationError, match="Invalid endpoint URL format"):
            ClientOptions(endpoint="wallet.example.com")

    def test_loader_must_be_callable(self):
        with pytest.raises(ValidationError, match="must be callable"):
            ClientOptions(credentials_loader="not callable")


class TestClientOptionsFromEnv:
    """Test environment based configuration"""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HALOGEN_WALLET_ENDPOINT", "https://sandbox.example.com")
        monkeypatch.setenv("HALOGEN_WALLET_TIMEOUT", "2.5")
        monkeypatch.setenv("HALOGEN_WALLET_MAX_READ_RETRY", "3")
        monkeypatch.setenv("HALOGEN_WALLET_RETRY_INTERVAL_MS", "200")
        monkeypatch.setenv("HALOGEN_WALLET_DEBUG", "true")

        options = ClientOptions.from_env()
        assert options.endpoint == "https://sandbox.example.com"
        assert options.timeout == 2.5
        assert options.max_read_retry == 3
        assert options.retry_interval == pytest.approx(0.2)
        assert options.debug is True

    def test_from_env_defaults(self, monkeypatch):
        for name in ("HALOGEN_WALLET_ENDPOINT", "HALOGEN_WALLET_TIMEOUT", "HALOGEN_WALLET_MAX_READ_RETRY",
                     "HALOGEN_WALLET_RETRY_INTERVAL_MS", "HALOGEN_WALLET_DEBUG"):
            monkeypatch.delenv(name, raising=False)

        options = ClientOptions.from_env()
        assert options.endpoint == DEFAULT_ENDPOINT
        assert options.retry_interval == pytest.approx(DEFAULT_RETRY_INTERVAL)
        assert options.debug is False

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("HALOGEN_WALLET_MAX_READ_RETRY", "3")
        options = ClientOptions.from_env(max_read_retry=7)
        assert options.max_read_retry == 7

    def test_malformed_number(self, monkeypatch):
        monkeypatch.setenv("HALOGEN_WALLET_MAX_READ_RETRY", "many")
        with pytest.raises(ValidationError, match="HALOGEN_WALLET_MAX_READ_RETRY"):
            ClientOptions.from_env()
