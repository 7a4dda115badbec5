"""
Chain client for the bridge workflows.

This module provides the thin layer over web3.py used by every workflow:
- Read-only contract calls
- Signed contract writes (eth-account local signing)
- Receipt waiting, bounded or unbounded
- A factory building the L1/L2 client pair from configuration
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from .chains import ChainEndpoint
from .config import BridgeConfig
from .errors import (
    ClientError,
    ConfigurationError,
    ErrorContext,
    NetworkError,
    QueryError,
    TransactionError,
    create_timeout_error,
)
from .logging import LogContext, get_logger

logger = get_logger(__name__)

_RPC_ERRORS = (Web3Exception, requests.exceptions.RequestException, ValueError)

# web3 rejects an infinite timeout, so unbounded waits poll in windows.
_WAIT_WINDOW = 120.0


@dataclass
class TransactionReceipt:
    """The parts of a receipt the workflows report on."""
    transaction_hash: str
    block_number: int
    status: int
    gas_used: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == 1


def account_from_key(private_key: str) -> LocalAccount:
    """Derive the signing account, rejecting malformed keys as configuration errors."""
    try:
        return Account.from_key(private_key)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"PRIVATE_KEY is not a valid private key: {e}", config_key="PRIVATE_KEY"
        ) from None


class ChainClient:
    """Web3 client bound to one chain endpoint.

    A client built without an account is read-only; ``write_contract`` on it
    raises ``ClientError``.
    """

    def __init__(
        self,
        endpoint: ChainEndpoint,
        account: Optional[LocalAccount] = None,
        receipt_timeout: Optional[float] = None,
        request_timeout: float = 30.0,
    ):
        self.endpoint = endpoint
        self.account = account
        self.receipt_timeout = receipt_timeout
        self.w3 = Web3(
            Web3.HTTPProvider(endpoint.rpc_url, request_kwargs={"timeout": request_timeout})
        )

    @property
    def chain_name(self) -> str:
        return self.endpoint.name

    @property
    def chain_id(self) -> int:
        return self.endpoint.chain_id

    def _contract(self, address: str, abi: List[Dict[str, Any]]):
        try:
            checksum = Web3.to_checksum_address(address)
        except ValueError as e:
            raise QueryError(
                f"Invalid contract address {address!r}: {e}",
                contract=address,
                endpoint=self.endpoint.rpc_url,
            ) from None
        return self.w3.eth.contract(address=checksum, abi=abi)

    def _error_context(self, operation: str) -> ErrorContext:
        return ErrorContext(
            chain=self.chain_name, component="client", operation=operation
        )

    def read_contract(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Call a view function and return its decoded result."""
        contract = self._contract(address, abi)
        logger.debug(
            f"{self.chain_name}: call {function_name}{tuple(args)} on {address}",
            context=LogContext(component="client", chain=self.chain_name),
        )
        try:
            return contract.get_function_by_name(function_name)(*args).call()
        except _RPC_ERRORS as e:
            raise QueryError(
                f"{function_name} call on {self.chain_name} failed: {e}",
                contract=address,
                function_name=function_name,
                endpoint=self.endpoint.rpc_url,
                context=self._error_context("read_contract"),
                cause=e,
            ) from e

    def write_contract(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> str:
        """Build, sign and submit a contract transaction; return its hash."""
        if self.account is None:
            raise ClientError(
                f"Client for {self.chain_name} has no signing account",
                context=self._error_context("write_contract"),
            )

        contract = self._contract(address, abi)
        sender = self.account.address
        try:
            nonce = self.w3.eth.get_transaction_count(sender, "pending")
            tx = contract.get_function_by_name(function_name)(*args).build_transaction(
                {"from": sender, "nonce": nonce, "chainId": self.chain_id}
            )
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        except ContractLogicError as e:
            raise TransactionError(
                f"{function_name} would revert on {self.chain_name}: {e}",
                transaction_type=function_name,
                context=self._error_context("write_contract"),
                cause=e,
            ) from e
        except _RPC_ERRORS as e:
            raise NetworkError(
                f"Submitting {function_name} on {self.chain_name} failed: {e}",
                endpoint=self.endpoint.rpc_url,
                context=self._error_context("write_contract"),
                cause=e,
            ) from e

        tx_hex = Web3.to_hex(tx_hash)
        logger.debug(
            f"{self.chain_name}: submitted {function_name}",
            context=LogContext(component="client", chain=self.chain_name, tx_hash=tx_hex),
        )
        return tx_hex

    def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Block until the transaction is mined.

        Without a receipt timeout this waits indefinitely; the operator
        interrupts the process to abandon the wait.
        """
        while True:
            window = self.receipt_timeout or _WAIT_WINDOW
            try:
                raw = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=window)
                break
            except TimeExhausted:
                if self.receipt_timeout is not None:
                    raise create_timeout_error(
                        f"receipt for {tx_hash}", self.receipt_timeout
                    ) from None
                logger.debug(
                    f"{self.chain_name}: still waiting for receipt",
                    context=LogContext(chain=self.chain_name, tx_hash=tx_hash),
                )
            except _RPC_ERRORS as e:
                raise NetworkError(
                    f"Waiting for {tx_hash} on {self.chain_name} failed: {e}",
                    endpoint=self.endpoint.rpc_url,
                    context=self._error_context("wait_for_transaction_receipt"),
                    cause=e,
                ) from e

        receipt = TransactionReceipt(
            transaction_hash=tx_hash,
            block_number=raw["blockNumber"],
            status=raw["status"],
            gas_used=raw.get("gasUsed", 0),
        )
        if not receipt.succeeded:
            raise TransactionError(
                f"Transaction {tx_hash} reverted in block {receipt.block_number}",
                transaction_hash=tx_hash,
                context=self._error_context("wait_for_transaction_receipt"),
            )
        return receipt


def create_clients(
    config: BridgeConfig, signer: Optional[str] = None
) -> Tuple[ChainClient, ChainClient]:
    """Build the (L1, L2) client pair.

    ``signer`` names the side that submits transactions ("l1" or "l2");
    the other side stays read-only.
    """
    if signer not in (None, "l1", "l2"):
        raise ValueError(f"signer must be 'l1', 'l2' or None, got {signer!r}")

    account = account_from_key(config.private_key) if signer else None
    l1 = ChainClient(
        config.l1_endpoint,
        account=account if signer == "l1" else None,
        receipt_timeout=config.receipt_timeout,
    )
    l2 = ChainClient(
        config.l2_endpoint,
        account=account if signer == "l2" else None,
        receipt_timeout=config.receipt_timeout,
    )
    return l1, l2
