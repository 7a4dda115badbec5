"""
Smart contract interfaces used by the bridge workflows.

This module provides:
- Minimal ERC-20 and OP-stack standard bridge ABIs
- ERC-20 token contract wrapper
- Standard bridge contract wrapper
- ``deposit_erc20`` / ``withdraw_erc20`` bridge actions
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from .chains import ChainSpec
from .logging import get_logger

logger = get_logger(__name__)


def _address(name: str) -> Dict[str, str]:
    return {"internalType": "address", "name": name, "type": "address"}


def _uint(name: str, bits: int = 256) -> Dict[str, str]:
    return {"internalType": f"uint{bits}", "name": name, "type": f"uint{bits}"}


ERC20_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [_address("account")],
        "name": "balanceOf",
        "outputs": [_uint("")],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [_address("spender"), _uint("value")],
        "name": "approve",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

L1_STANDARD_BRIDGE_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            _address("_l1Token"),
            _address("_l2Token"),
            _address("_to"),
            _uint("_amount"),
            _uint("_minGasLimit", 32),
            {"internalType": "bytes", "name": "_extraData", "type": "bytes"},
        ],
        "name": "depositERC20To",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

L2_STANDARD_BRIDGE_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            _address("_l2Token"),
            _address("_to"),
            _uint("_amount"),
            _uint("_minGasLimit", 32),
            {"internalType": "bytes", "name": "_extraData", "type": "bytes"},
        ],
        "name": "withdrawTo",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
]


class ERC20Contract:
    """ERC-20 token contract interface."""

    def __init__(self, client, address: str):
        self.client = client
        self.address = address

    def _call(self, function_name: str, *args):
        return self.client.read_contract(self.address, ERC20_ABI, function_name, args)

    def balance_of(self, account: str) -> int:
        return int(self._call("balanceOf", account))

    def approve(self, spender: str, amount: int) -> str:
        """Submit an approval; returns the transaction hash."""
        return self.client.write_contract(
            self.address, ERC20_ABI, "approve", (spender, amount)
        )


@dataclass
class BridgeRequest:
    """Parameters of an ERC-20 bridge transfer in either direction."""
    token_address: str
    remote_token_address: str
    amount: int
    target_chain: ChainSpec
    to: str
    min_gas_limit: int
    extra_data: bytes = b""


class StandardBridgeContract:
    """OP-stack standard bridge, L1 or L2 side."""

    def __init__(self, client, address: str, abi: List[Dict[str, Any]]):
        self.client = client
        self.address = address
        self.abi = abi

    @classmethod
    def l1(cls, client, address: str) -> "StandardBridgeContract":
        return cls(client, address, L1_STANDARD_BRIDGE_ABI)

    @classmethod
    def l2(cls, client, address: str) -> "StandardBridgeContract":
        return cls(client, address, L2_STANDARD_BRIDGE_ABI)

    def deposit_erc20_to(self, request: BridgeRequest) -> str:
        return self.client.write_contract(
            self.address,
            self.abi,
            "depositERC20To",
            (
                request.token_address,
                request.remote_token_address,
                request.to,
                request.amount,
                request.min_gas_limit,
                request.extra_data,
            ),
        )

    def withdraw_to(self, request: BridgeRequest) -> str:
        return self.client.write_contract(
            self.address,
            self.abi,
            "withdrawTo",
            (
                request.token_address,
                request.to,
                request.amount,
                request.min_gas_limit,
                request.extra_data,
            ),
        )


def deposit_erc20(client, request: BridgeRequest) -> str:
    """Deposit ERC-20 tokens from L1 into ``request.target_chain``.

    The client must be a signing client on the L1 the target chain settles
    to; the bridge address comes from the target chain's metadata.
    """
    bridge_address = request.target_chain.l1_bridge_address(client.chain_id)
    logger.debug(f"depositERC20To via {bridge_address} for {request.amount} base units")
    return StandardBridgeContract.l1(client, bridge_address).deposit_erc20_to(request)


def withdraw_erc20(client, request: BridgeRequest, bridge_address: str) -> str:
    """Initiate an ERC-20 withdrawal from L2 back to ``request.target_chain``.

    Only the first phase: the withdrawal still has to be proven and
    finalized on L1 once the challenge period has passed.
    """
    logger.debug(f"withdrawTo via {bridge_address} for {request.amount} base units")
    return StandardBridgeContract.l2(client, bridge_address).withdraw_to(request)
