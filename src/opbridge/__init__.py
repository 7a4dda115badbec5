"""
opbridge - ERC20 balance checks and OP-stack standard bridge transfers.

Reads token balances on an L1 and its OP-stack L2, deposits tokens L1 -> L2
and initiates withdrawals L2 -> L1.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
