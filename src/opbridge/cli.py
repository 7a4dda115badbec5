"""
Command-line entry points.

Three commands share one shape: resolve configuration, build the chain
clients, run a workflow, and map any failure to exit status 1.
"""

import argparse
import sys
from typing import Callable, List, Optional

from . import __version__
from .client import account_from_key, create_clients
from .config import BridgeConfig, load_config
from .errors import ConfigurationError, InsufficientBalanceError, OpBridgeError
from .logging import LogConfig, LogLevel, get_logger, setup_logging
from .units import parse_ether
from .workflows import check_balance, deposit, withdraw

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _configure_logging(config: BridgeConfig, verbose: bool) -> None:
    level = LogLevel.DEBUG if verbose else config.log_level
    setup_logging(LogConfig(level=level, format_type=config.log_format))


def _run(label: str, verbose: bool, body: Callable[[BridgeConfig], None]) -> int:
    """Resolve configuration, then run ``body`` with uniform error handling."""
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"❌ {e.message}")
        return EXIT_FAILURE

    _configure_logging(config, verbose)
    logger.debug(f"Loaded {config!r}")

    try:
        body(config)
    except InsufficientBalanceError as e:
        logger.error(f"❌ {e.message}")
        return EXIT_FAILURE
    except OpBridgeError as e:
        logger.error(f"❌ Error {label}: {e.message}")
        logger.debug(f"{type(e).__name__}: {e.to_dict()}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.warning("Interrupted; any submitted transaction may still be mined")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception(f"❌ Unexpected error {label}: {e}")
        return EXIT_FAILURE
    return EXIT_OK


def run_check_balance(verbose: bool = False) -> int:
    def body(config: BridgeConfig) -> None:
        address = account_from_key(config.private_key).address
        l1_client, l2_client = create_clients(config)
        check_balance(config, l1_client, l2_client, address)

    return _run("checking balances", verbose, body)


def run_deposit(amount: str = "1", verbose: bool = False) -> int:
    def body(config: BridgeConfig) -> None:
        base_units = parse_ether(amount)
        address = account_from_key(config.private_key).address
        l1_client, _ = create_clients(config, signer="l1")
        deposit(config, l1_client, address, base_units)

    return _run("during deposit", verbose, body)


def run_withdraw(amount: str = "1", verbose: bool = False) -> int:
    def body(config: BridgeConfig) -> None:
        base_units = parse_ether(amount)
        address = account_from_key(config.private_key).address
        _, l2_client = create_clients(config, signer="l2")
        withdraw(config, l2_client, address, base_units)

    return _run("during withdrawal", verbose, body)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def _add_amount(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "amount",
        nargs="?",
        default="1",
        help="Token amount in display units, e.g. 0.5 (default: 1)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opbridge",
        description="ERC20 balances and standard-bridge transfers between L1 and L2",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    balance = sub.add_parser("check-balance", help="Print L1 and L2 token balances")
    _add_common(balance)

    dep = sub.add_parser("deposit", help="Deposit tokens from L1 to L2")
    _add_amount(dep)
    _add_common(dep)

    wd = sub.add_parser("withdraw", help="Initiate a withdrawal from L2 to L1")
    _add_amount(wd)
    _add_common(wd)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "check-balance":
        return run_check_balance(verbose=args.verbose)
    if args.command == "deposit":
        return run_deposit(args.amount, verbose=args.verbose)
    return run_withdraw(args.amount, verbose=args.verbose)


def check_balance_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="opbridge-check-balance", description="Print L1 and L2 token balances"
    )
    _add_common(parser)
    args = parser.parse_args(argv)
    return run_check_balance(verbose=args.verbose)


def deposit_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="opbridge-deposit", description="Deposit tokens from L1 to L2"
    )
    _add_amount(parser)
    _add_common(parser)
    args = parser.parse_args(argv)
    return run_deposit(args.amount, verbose=args.verbose)


def withdraw_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="opbridge-withdraw", description="Initiate a withdrawal from L2 to L1"
    )
    _add_amount(parser)
    _add_common(parser)
    args = parser.parse_args(argv)
    return run_withdraw(args.amount, verbose=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
