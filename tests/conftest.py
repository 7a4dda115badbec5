"""Shared fixtures for opbridge tests."""

import logging

logger = logging.getLogger(__name__)
from typing import Any, Dict, List, Optional, Sequence

import pytest

from opbridge.chains import BASE_SEPOLIA, SEPOLIA
from opbridge.client import TransactionReceipt
from opbridge.config import BridgeConfig

# Well-known development key (anvil/hardhat account 0).
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

L1_TOKEN = "0x1111111111111111111111111111111111111111"
L2_TOKEN = "0x2222222222222222222222222222222222222222"

ONE_TOKEN = 10 ** 18

ENV_KEYS = (
    "PRIVATE_KEY",
    "L1_RPC_URL",
    "L2_RPC_URL",
    "L1_ERC20_ADDRESS",
    "L2_ERC20_ADDRESS",
    "TOKEN_SYMBOL",
    "RECEIPT_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "OPBRIDGE_SKIP_DOTENV",
)


class FakeChainClient:
    """In-memory stand-in for ChainClient that records every call.

    ``events`` may be shared between two clients to observe global ordering.
    Bridge writes debit the sender's token balance immediately.
    """

    def __init__(
        self,
        chain_name: str,
        chain_id: int,
        balances: Optional[Dict[str, int]] = None,
        events: Optional[List[tuple]] = None,
        block_number: int = 4242,
        fail_on: Optional[str] = None,
    ):
        self.chain_name = chain_name
        self.chain_id = chain_id
        self.balances = dict(balances or {})
        self.events = events if events is not None else []
        self.block_number = block_number
        self.fail_on = fail_on
        self.submitted: List[tuple] = []
        self.waited: List[str] = []

    def read_contract(self, address: str, abi, function_name: str, args: Sequence[Any] = ()):
        self.events.append(("read", self.chain_name, function_name))
        if self.fail_on == function_name:
            from opbridge.errors import QueryError

            raise QueryError(f"{function_name} call on {self.chain_name} failed: boom")
        if function_name == "balanceOf":
            return self.balances.get(address, 0)
        raise AssertionError(f"unexpected read {function_name}")

    def write_contract(self, address: str, abi, function_name: str, args: Sequence[Any] = ()) -> str:
        if self.fail_on == function_name:
            from opbridge.errors import TransactionError

            raise TransactionError(f"{function_name} would revert on {self.chain_name}")
        tx_hash = "0x" + format(len(self.events) + 1, "064x")
        self.submitted.append((address, function_name, tuple(args)))
        self.events.append(("write", self.chain_name, function_name, tx_hash))
        if function_name == "depositERC20To":
            token, amount = args[0], args[3]
            self.balances[token] = self.balances.get(token, 0) - amount
        elif function_name == "withdrawTo":
            token, amount = args[0], args[2]
            self.balances[token] = self.balances.get(token, 0) - amount
        return tx_hash

    def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        self.events.append(("wait", self.chain_name, tx_hash))
        self.waited.append(tx_hash)
        return TransactionReceipt(
            transaction_hash=tx_hash, block_number=self.block_number, status=1
        )

    @property
    def writes(self) -> List[str]:
        return [name for _, name, _ in self.submitted]


@pytest.fixture
def bridge_config():
    """Fixture for a fully populated configuration."""
    return BridgeConfig(
        private_key=TEST_PRIVATE_KEY,
        l1_rpc_url="http://localhost:8545",
        l2_rpc_url="http://localhost:9545",
        l1_token_address=L1_TOKEN,
        l2_token_address=L2_TOKEN,
    )


@pytest.fixture
def l1_client():
    return FakeChainClient(SEPOLIA.name, SEPOLIA.chain_id)


@pytest.fixture
def l2_client():
    return FakeChainClient(BASE_SEPOLIA.name, BASE_SEPOLIA.chain_id)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable opbridge reads, restoring them afterwards.

    Each key is set before being deleted so monkeypatch also undoes values
    written by python-dotenv during the test.
    """
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def bridge_env(clean_env):
    """Environment for CLI runs; .env loading disabled."""
    clean_env.setenv("OPBRIDGE_SKIP_DOTENV", "1")
    clean_env.setenv("PRIVATE_KEY", TEST_PRIVATE_KEY)
    clean_env.setenv("L1_RPC_URL", "http://localhost:8545")
    clean_env.setenv("L1_ERC20_ADDRESS", L1_TOKEN)
    clean_env.setenv("L2_ERC20_ADDRESS", L2_TOKEN)
    return clean_env
