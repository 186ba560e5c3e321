"""
Unit tests for credential sources
"""

from unittest.mock import Mock

import pytest

from wallet_sdk.credentials import (
    Credentials,
    DynamicCredentialSource,
    StaticCredentialSource,
    env_credentials_loader,
    file_credentials_loader,
)
from wallet_sdk.exceptions import CredentialsError, WalletSDKError

from conftest import TEST_KEY_ID


class TestCredentials:
    """Test the credentials value object"""

    def test_str_pem_is_encoded(self):
        credentials = Credentials(key_id=TEST_KEY_ID, private_key_pem="-----BEGIN-----")
        assert credentials.private_key_pem == b"-----BEGIN-----"

    def test_invalid_pem_type(self):
        with pytest.raises(CredentialsError):
            Credentials(key_id=TEST_KEY_ID, private_key_pem=12345)

    def test_clear(self, ec_private_key_pem):
        credentials = Credentials(key_id=TEST_KEY_ID, private_key_pem=ec_private_key_pem)
        credentials.clear()
        assert credentials.private_key_pem == b''
        assert credentials.key_id == ''

    def test_repr_hides_key(self, ec_private_key_pem):
        credentials = Credentials(key_id=TEST_KEY_ID, private_key_pem=ec_private_key_pem)
        assert "PRIVATE KEY" not in repr(credentials)
        assert TEST_KEY_ID in repr(credentials)


class TestStaticCredentialSource:
    """Test credentials set once on the client"""

    def test_missing_credentials(self):
        source = StaticCredentialSource()
        with pytest.raises(CredentialsError) as exc_info:
            source.get_credentials()
        assert exc_info.value.error_code == "NO_CREDENTIALS"

    def test_returns_stored_credentials(self, ec_private_key_pem):
        credentials = Credentials(key_id=TEST_KEY_ID, private_key_pem=ec_private_key_pem)
        source = StaticCredentialSource()
        source.set_credentials(credentials)

        assert source.get_credentials() is credentials
        assert source.get_credentials() is credentials
        assert source.ephemeral is False


class TestDynamicCredentialSource:
    """Test credentials retrieved per request"""

    def test_loader_called_every_time(self, ec_private_key_pem):
        loader = Mock(side_effect=lambda: Credentials(TEST_KEY_ID, ec_private_key_pem))
        source = DynamicCredentialSource(loader)

        source.get_credentials()
        source.get_credentials()

        assert loader.call_count == 2
        assert source.ephemeral is True

    def test_returns_a_copy(self, ec_private_key_pem):
        cached = Credentials(TEST_KEY_ID, ec_private_key_pem)
        source = DynamicCredentialSource(lambda: cached)

        credentials = source.get_credentials()
        assert credentials is not cached
        assert credentials.key_id == TEST_KEY_ID
        assert credentials.private_key_pem == ec_private_key_pem

        credentials.clear()
        assert cached.key_id == TEST_KEY_ID
        assert cached.private_key_pem == ec_private_key_pem
        assert source.get_credentials().key_id == TEST_KEY_ID

    def test_tuple_result(self, ec_private_key_pem):
        source = DynamicCredentialSource(lambda: (TEST_KEY_ID, ec_private_key_pem.decode()))
        credentials = source.get_credentials()

        assert credentials.key_id == TEST_KEY_ID
        assert credentials.private_key_pem == ec_private_key_pem

    def test_loader_error_is_wrapped(self):
        def failing_loader():
            raise RuntimeError("vault unavailable")

        source = DynamicCredentialSource(failing_loader)
        with pytest.raises(CredentialsError, match="vault unavailable") as exc_info:
            source.get_credentials()
        assert exc_info.value.error_code == "CREDENTIALS_LOADER_FAILED"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_sdk_errors_pass_through(self):
        error = WalletSDKError("custom", "CUSTOM")

        def failing_loader():
            raise error

        with pytest.raises(WalletSDKError) as exc_info:
            DynamicCredentialSource(failing_loader).get_credentials()
        assert exc_info.value is error

    def test_invalid_result(self):
        with pytest.raises(CredentialsError, match="must return"):
            DynamicCredentialSource(lambda: "not credentials").get_credentials()

    def test_loader_must_be_callable(self):
        with pytest.raises(CredentialsError):
            DynamicCredentialSource("not callable")


class TestLoaders:
    """Test bundled loader factories"""

    def test_file_loader_rereads(self, tmp_path, ec_private_key_pem, rsa_private_key_pem):
        key_file = tmp_path / "wallet.pem"
        key_file.write_bytes(ec_private_key_pem)
        loader = file_credentials_loader(TEST_KEY_ID, key_file)

        assert loader().private_key_pem == ec_private_key_pem

        key_file.write_bytes(rsa_private_key_pem)
        assert loader().private_key_pem == rsa_private_key_pem

    def test_file_loader_missing_file(self, tmp_path):
        loader = file_credentials_loader(TEST_KEY_ID, tmp_path / "missing.pem")
        with pytest.raises(CredentialsError, match="Failed to read private key"):
            loader()

    def test_env_loader(self, monkeypatch, ec_private_key_pem):
        monkeypatch.setenv("HALOGEN_WALLET_KEY_ID", TEST_KEY_ID)
        monkeypatch.setenv("HALOGEN_WALLET_PRIVATE_KEY_PEM", ec_private_key_pem.decode())

        credentials = env_credentials_loader()()
        assert credentials.key_id == TEST_KEY_ID
        assert credentials.private_key_pem == ec_private_key_pem

    def test_env_loader_missing(self, monkeypatch):
        monkeypatch.delenv("HALOGEN_WALLET_KEY_ID", raising=False)
        monkeypatch.delenv("HALOGEN_WALLET_PRIVATE_KEY_PEM", raising=False)

        with pytest.raises(CredentialsError, match="must both be set"):
            env_credentials_loader()()
