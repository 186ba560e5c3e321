"""
Example usage of the Wallet client

Shows static and loader based credentials, typed responses, deadlines and
error handling. Set HALOGEN_WALLET_KEY_ID and HALOGEN_WALLET_PRIVATE_KEY_PEM
(and optionally HALOGEN_WALLET_ENDPOINT) before running it.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from wallet_sdk import (
    APIError,
    ClientOptions,
    RequestCancelledError,
    RequestContext,
    TransportError,
    WalletClient,
    WalletSDKError,
    env_credentials_loader,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@dataclass
class ListClientAccountsOutput:
    accounts: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListClientAccountsOutput":
        return cls(accounts=data.get('accounts', []))


def static_credentials_example():
    """Example 1: Credentials stored on the client"""
    print("\n=== Static Credentials Example ===")

    with WalletClient(ClientOptions.from_env()) as client:
        client.set_credentials(
            os.environ['HALOGEN_WALLET_KEY_ID'],
            os.environ['HALOGEN_WALLET_PRIVATE_KEY_PEM'].encode('utf-8'),
        )

        output = client.query("list_client_accounts", {}, response_type=ListClientAccountsOutput)
        print(f"Found {len(output.accounts)} accounts")


def credentials_loader_example():
    """Example 2: Credentials fetched for every request"""
    print("\n=== Credentials Loader Example ===")

    options = ClientOptions.from_env(credentials_loader=env_credentials_loader(), debug=True)
    with WalletClient(options) as client:
        banks = client.query("list_banks")
        print(f"Banks: {banks}")


def deadline_example():
    """Example 3: Bounding a call, retries included"""
    print("\n=== Deadline Example ===")

    options = ClientOptions.from_env(credentials_loader=env_credentials_loader())
    with WalletClient(options) as client:
        try:
            client.query("list_client_accounts", context=RequestContext.with_timeout(2.0))
        except RequestCancelledError as e:
            print(f"Gave up: {e}")


def error_handling_example():
    """Example 4: Inspecting API errors"""
    print("\n=== Error Handling Example ===")

    options = ClientOptions.from_env(credentials_loader=env_credentials_loader())
    with WalletClient(options) as client:
        try:
            client.query("get_fund", {"fundId": "does-not-exist"})
        except APIError as e:
            print(f"API error {e.status_code} {e.code} ({e.category}): {e.message}")
        except TransportError as e:
            print(f"Network problem: {e}")


def main():
    """Run all examples"""
    print("Wallet Python SDK Examples")
    print("=" * 50)

    try:
        static_credentials_example()
        credentials_loader_example()
        deadline_example()
        error_handling_example()
    except WalletSDKError as e:
        logger.error(f"Example failed: {e}")


if __name__ == '__main__':
    main()
