"""
Shared fixtures for Wallet SDK tests
"""

import json
import http.client
from unittest.mock import MagicMock

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from wallet_sdk import ClientOptions, WalletClient

TEST_KEY_ID = "3394eb8831ff50634ad973cda5b93fc0b36bd885"
TEST_ENDPOINT = "https://wallet.example.com"


def _to_pem(private_key) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_private_key_pem(ec_private_key):
    return _to_pem(ec_private_key)


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_private_key_pem(rsa_private_key):
    return _to_pem(rsa_private_key)


@pytest.fixture(scope="session")
def ed25519_private_key_pem():
    return _to_pem(ed25519.Ed25519PrivateKey.generate())


@pytest.fixture(scope="session")
def p384_private_key_pem():
    return _to_pem(ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture
def make_response():
    """Factory for requests.Response objects as returned by a live server."""
    def _make(status_code=200, body=None, headers=None, reason=None):
        response = requests.Response()
        response.status_code = status_code
        if body is None:
            response._content = b''
        elif isinstance(body, bytes):
            response._content = body
        elif isinstance(body, str):
            response._content = body.encode('utf-8')
        else:
            response._content = json.dumps(body).encode('utf-8')
        response.headers.update(headers or {})
        response.reason = reason if reason is not None else http.client.responses.get(status_code, '')
        response.encoding = 'utf-8'
        return response

    return _make


@pytest.fixture
def mock_session():
    """HTTP session whose responses are scripted through ``request.side_effect``."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def make_client(mock_session, ec_private_key_pem):
    """Factory for clients wired to ``mock_session`` with static EC credentials."""
    def _make(with_credentials=True, **options):
        options.setdefault('endpoint', TEST_ENDPOINT)
        options.setdefault('session', mock_session)
        options.setdefault('retry_interval', 0.01)
        client = WalletClient(ClientOptions(**options))
        if with_credentials and options.get('credentials_loader') is None:
            client.set_credentials(TEST_KEY_ID, ec_private_key_pem)
        return client

    return _make
