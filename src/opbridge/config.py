"""
Configuration resolution for the bridge workflows.

Values come from the process environment, optionally seeded from a ``.env``
file. The configuration is built once at process start and passed explicitly
to every workflow.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from .chains import BASE_SEPOLIA, SEPOLIA, ChainEndpoint, ChainSpec, TokenReference
from .errors import ConfigurationError, create_missing_config_error
from .logging import LogLevel, get_logger

logger = get_logger(__name__)

DEFAULT_L2_RPC_URL = BASE_SEPOLIA.default_rpc_url
DEFAULT_TOKEN_SYMBOL = "DSTRX"

# Minimum gas forwarded to the remote-chain mint/release call.
DEFAULT_MIN_GAS_LIMIT = 200_000


@dataclass
class BridgeConfig:
    """Bridge configuration from environment."""
    private_key: str
    l1_rpc_url: Optional[str] = None  # None uses l1_chain.default_rpc_url
    l2_rpc_url: str = DEFAULT_L2_RPC_URL
    l1_token_address: Optional[str] = None
    l2_token_address: Optional[str] = None
    token_symbol: str = DEFAULT_TOKEN_SYMBOL
    receipt_timeout: Optional[float] = None  # None waits without bound
    min_gas_limit: int = DEFAULT_MIN_GAS_LIMIT
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "text"
    l1_chain: ChainSpec = field(default=SEPOLIA)
    l2_chain: ChainSpec = field(default=BASE_SEPOLIA)

    def __repr__(self) -> str:
        return (
            f"BridgeConfig(private_key='***', l1_rpc_url={self.l1_rpc_url!r}, "
            f"l2_rpc_url={self.l2_rpc_url!r}, l1_token_address={self.l1_token_address!r}, "
            f"l2_token_address={self.l2_token_address!r})"
        )

    def require(self, name: str) -> str:
        """Return a configured value or fail naming its environment variable."""
        value = getattr(self, name)
        if not value:
            raise create_missing_config_error(_ENV_NAMES.get(name, name.upper()))
        return value

    def _endpoint(self, chain: ChainSpec, name: str) -> ChainEndpoint:
        # An unset URL falls back to the chain's public endpoint.
        rpc_url = getattr(self, name) or chain.default_rpc_url
        if not rpc_url:
            raise create_missing_config_error(_ENV_NAMES[name])
        return ChainEndpoint(chain, rpc_url)

    @property
    def l1_endpoint(self) -> ChainEndpoint:
        return self._endpoint(self.l1_chain, "l1_rpc_url")

    @property
    def l2_endpoint(self) -> ChainEndpoint:
        return self._endpoint(self.l2_chain, "l2_rpc_url")

    @property
    def l1_token(self) -> TokenReference:
        return TokenReference(self.l1_chain, self.require("l1_token_address"))

    @property
    def l2_token(self) -> TokenReference:
        return TokenReference(self.l2_chain, self.require("l2_token_address"))


_ENV_NAMES = {
    "private_key": "PRIVATE_KEY",
    "l1_rpc_url": "L1_RPC_URL",
    "l2_rpc_url": "L2_RPC_URL",
    "l1_token_address": "L1_ERC20_ADDRESS",
    "l2_token_address": "L2_ERC20_ADDRESS",
}


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = None,
) -> BridgeConfig:
    """Load configuration from the environment.

    When ``environ`` is None the real process environment is used, after
    loading ``env_file`` (or a ``.env`` found from the working directory)
    without overriding variables that are already set.
    """
    if environ is None:
        if os.environ.get("OPBRIDGE_SKIP_DOTENV") != "1":
            load_dotenv(dotenv_path=env_file, override=False)
        environ = os.environ

    private_key = (environ.get("PRIVATE_KEY") or "").strip()
    if not private_key:
        raise create_missing_config_error("PRIVATE_KEY")

    config = BridgeConfig(
        private_key=private_key,
        l1_rpc_url=_optional(environ, "L1_RPC_URL"),
        l2_rpc_url=_optional(environ, "L2_RPC_URL") or DEFAULT_L2_RPC_URL,
        l1_token_address=_optional(environ, "L1_ERC20_ADDRESS"),
        l2_token_address=_optional(environ, "L2_ERC20_ADDRESS"),
        token_symbol=_optional(environ, "TOKEN_SYMBOL") or DEFAULT_TOKEN_SYMBOL,
        receipt_timeout=_parse_timeout(_optional(environ, "RECEIPT_TIMEOUT")),
        log_level=_parse_log_level(_optional(environ, "LOG_LEVEL")),
        log_format=_parse_log_format(_optional(environ, "LOG_FORMAT")),
    )

    logger.debug(f"L1 RPC: {config.l1_rpc_url}")
    logger.debug(f"L2 RPC: {config.l2_rpc_url}")
    logger.debug(f"L1 token: {config.l1_token_address}")
    logger.debug(f"L2 token: {config.l2_token_address}")
    return config


def _optional(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"RECEIPT_TIMEOUT must be a number of seconds, got {raw!r}",
            config_key="RECEIPT_TIMEOUT",
        ) from None
    if timeout < 0:
        raise ConfigurationError(
            "RECEIPT_TIMEOUT must not be negative", config_key="RECEIPT_TIMEOUT"
        )
    return timeout or None


def _parse_log_level(raw: Optional[str]) -> LogLevel:
    if raw is None:
        return LogLevel.INFO
    try:
        return LogLevel.from_name(raw)
    except ValueError as e:
        raise ConfigurationError(str(e), config_key="LOG_LEVEL") from None


def _parse_log_format(raw: Optional[str]) -> str:
    if raw is None:
        return "text"
    fmt = raw.lower()
    if fmt not in ("text", "json"):
        raise ConfigurationError(
            f"LOG_FORMAT must be 'text' or 'json', got {raw!r}", config_key="LOG_FORMAT"
        )
    return fmt
