"""
Bridge workflows.

Each workflow is a strictly sequential series of chain calls. Progress is
printed for the operator; any failure raises an ``OpBridgeError`` that the
CLI turns into a non-zero exit status. No workflow retries, and none leaves
a half-finished step behind: a transaction is either confirmed or never
submitted.
"""

from dataclasses import dataclass
from typing import Optional

from .config import BridgeConfig
from .contracts import BridgeRequest, ERC20Contract, deposit_erc20, withdraw_erc20
from .errors import InsufficientBalanceError
from .logging import LogContext, get_logger
from .units import format_ether

logger = get_logger(__name__)


@dataclass
class BalanceReport:
    """Token balances of one account on both chains, in base units."""
    address: str
    l1_balance: int
    l2_balance: int


@dataclass
class DepositResult:
    approval_tx: str
    deposit_tx: str
    block_number: int
    l1_balance_after: int


@dataclass
class WithdrawResult:
    withdrawal_tx: str
    block_number: int
    l2_balance_after: int


def check_balance(config: BridgeConfig, l1_client, l2_client, address: str) -> BalanceReport:
    """Read the configured token balance on L1 and on L2 and print both."""
    print(f"📊 Checking balances for: {address}")

    l1_token = ERC20Contract(l1_client, config.l1_token.address)
    l2_token = ERC20Contract(l2_client, config.l2_token.address)

    l1_balance = l1_token.balance_of(address)
    l2_balance = l2_token.balance_of(address)

    symbol = config.token_symbol
    print("\n📊 Current Balances:")
    print(f"L1 ({l1_client.chain_name}): {format_ether(l1_balance)} {symbol}")
    print(f"L2 ({l2_client.chain_name}): {format_ether(l2_balance)} {symbol}")

    return BalanceReport(address=address, l1_balance=l1_balance, l2_balance=l2_balance)


def _ensure_balance(chain_label: str, balance: int, amount: int) -> None:
    if balance < amount:
        raise InsufficientBalanceError(
            f"Insufficient {chain_label} balance. "
            f"Need {format_ether(amount)}, have {format_ether(balance)}",
            chain=chain_label,
            required=amount,
            available=balance,
        )


def deposit(config: BridgeConfig, l1_client, address: str, amount: int) -> DepositResult:
    """Bridge ``amount`` base units of the L1 token to the same account on L2.

    The approval must be confirmed before the deposit is submitted.
    """
    l1_chain, l2_chain = config.l1_chain, config.l2_chain
    l1_token, l2_token = config.l1_token, config.l2_token

    print(
        f"🚀 Starting bridge deposit of {format_ether(amount)} tokens "
        f"from {l1_chain.name} to {l2_chain.name}"
    )
    print(f"📝 Using account: {address}")

    token = ERC20Contract(l1_client, l1_token.address)

    print("\n📊 Checking balances...")
    l1_balance = token.balance_of(address)
    print(f"L1 Balance: {format_ether(l1_balance)} tokens")
    try:
        _ensure_balance("L1", l1_balance, amount)
    except InsufficientBalanceError:
        print(f"💡 Get tokens by calling faucet() on the L1 token contract {l1_token.address}")
        raise

    bridge_address = l2_chain.l1_bridge_address(l1_chain.chain_id)
    print(f"🌉 Using bridge address: {bridge_address}")

    print("\n✅ Approving tokens...")
    approval_tx = token.approve(bridge_address, amount)
    print(f"Approval tx: {approval_tx}")
    l1_client.wait_for_transaction_receipt(approval_tx)
    print("✅ Approval confirmed")
    logger.debug("approval confirmed", context=LogContext(operation="deposit", tx_hash=approval_tx))

    print("\n🚀 Depositing tokens to L2...")
    deposit_tx = deposit_erc20(
        l1_client,
        BridgeRequest(
            token_address=l1_token.address,
            remote_token_address=l2_token.address,
            amount=amount,
            target_chain=l2_chain,
            to=address,
            min_gas_limit=config.min_gas_limit,
        ),
    )
    print(f"Deposit tx: {deposit_tx}")

    receipt = l1_client.wait_for_transaction_receipt(deposit_tx)
    print(f"✅ Deposit confirmed in block {receipt.block_number}")

    print("\n📊 Final balances:")
    l1_balance_after = token.balance_of(address)
    print(f"L1 Balance: {format_ether(l1_balance_after)} tokens")

    print("\n⏳ L2 balance will update after the transaction is processed (usually 1-2 minutes)")
    print("💡 You can check L2 balance by running: opbridge-check-balance")

    return DepositResult(
        approval_tx=approval_tx,
        deposit_tx=deposit_tx,
        block_number=receipt.block_number,
        l1_balance_after=l1_balance_after,
    )


def withdraw(config: BridgeConfig, l2_client, address: str, amount: int) -> WithdrawResult:
    """Initiate a withdrawal of ``amount`` base units from L2 back to L1.

    Only the L2 half happens here; proving and finalizing on L1 after the
    challenge period is left to the operator.
    """
    l1_chain, l2_chain = config.l1_chain, config.l2_chain
    l1_token, l2_token = config.l1_token, config.l2_token

    print(
        f"🔄 Starting withdrawal of {format_ether(amount)} tokens "
        f"from {l2_chain.name} to {l1_chain.name}"
    )
    print(f"📝 Using account: {address}")

    token = ERC20Contract(l2_client, l2_token.address)

    print("\n📊 Checking balances...")
    l2_balance = token.balance_of(address)
    print(f"L2 Balance: {format_ether(l2_balance)} tokens")
    _ensure_balance("L2", l2_balance, amount)

    print("\n🔄 Initiating withdrawal...")
    withdrawal_tx = withdraw_erc20(
        l2_client,
        BridgeRequest(
            token_address=l2_token.address,
            remote_token_address=l1_token.address,
            amount=amount,
            target_chain=l1_chain,
            to=address,
            min_gas_limit=config.min_gas_limit,
        ),
        bridge_address=l2_chain.l2_bridge_address(),
    )
    print(f"Withdrawal tx: {withdrawal_tx}")

    receipt = l2_client.wait_for_transaction_receipt(withdrawal_tx)
    print(f"✅ Withdrawal initiated in block {receipt.block_number}")

    print("\n📊 Updated L2 balance:")
    l2_balance_after = token.balance_of(address)
    print(f"L2 Balance: {format_ether(l2_balance_after)} tokens")

    _print_finalization_notice(l2_chain.name, l2_chain.challenge_period)

    return WithdrawResult(
        withdrawal_tx=withdrawal_tx,
        block_number=receipt.block_number,
        l2_balance_after=l2_balance_after,
    )


def _print_finalization_notice(chain_name: str, challenge_period: Optional[str]) -> None:
    print("\n⚠️  IMPORTANT: Withdrawal Process")
    print("📝 Your withdrawal has been initiated, but it will take time to complete:")
    print(f"   • {chain_name}: {challenge_period or '~1 week'} challenge period")
    print("   • After the challenge period, you need to finalize the withdrawal on L1")
    print("   • Your L1 balance will only update after finalization")
    print(
        "\n💡 Monitor your withdrawal status on the bridge UI "
        "or wait for the challenge period to end."
    )
