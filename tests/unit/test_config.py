"""Tests for configuration resolution."""

import logging

logger = logging.getLogger(__name__)

import pytest

from conftest import L1_TOKEN, L2_TOKEN, TEST_PRIVATE_KEY
from opbridge.chains import BASE_SEPOLIA, SEPOLIA, ChainSpec
from opbridge.config import (
    DEFAULT_L2_RPC_URL,
    DEFAULT_MIN_GAS_LIMIT,
    BridgeConfig,
    load_config,
)
from opbridge.errors import ConfigurationError, ErrorCategory
from opbridge.logging import LogLevel


def _environ(**overrides):
    env = {
        "PRIVATE_KEY": TEST_PRIVATE_KEY,
        "L1_RPC_URL": "http://l1.example",
        "L1_ERC20_ADDRESS": L1_TOKEN,
        "L2_ERC20_ADDRESS": L2_TOKEN,
    }
    env.update(overrides)
    return {k: v for k, v in env.items() if v is not None}


class TestLoadConfig:
    """Test load_config functionality."""

    def test_loads_all_values(self):
        """Test a complete environment."""
        config = load_config(_environ(L2_RPC_URL="http://l2.example"))

        assert config.private_key == TEST_PRIVATE_KEY
        assert config.l1_rpc_url == "http://l1.example"
        assert config.l2_rpc_url == "http://l2.example"
        assert config.l1_token_address == L1_TOKEN
        assert config.l2_token_address == L2_TOKEN

    def test_defaults(self):
        """Test defaults for optional values."""
        config = load_config(_environ())

        assert config.l2_rpc_url == DEFAULT_L2_RPC_URL == "https://sepolia.base.org"
        assert config.token_symbol == "DSTRX"
        assert config.receipt_timeout is None
        assert config.min_gas_limit == DEFAULT_MIN_GAS_LIMIT == 200_000
        assert config.log_level == LogLevel.INFO
        assert config.log_format == "text"
        assert config.l1_chain is SEPOLIA
        assert config.l2_chain is BASE_SEPOLIA

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_private_key(self, value):
        """Test the one enforced precondition."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(_environ(PRIVATE_KEY=value))

        error = exc_info.value
        assert error.message == "Please set PRIVATE_KEY environment variable"
        assert error.config_key == "PRIVATE_KEY"
        assert error.category == ErrorCategory.CONFIGURATION

    def test_other_values_are_not_required_up_front(self):
        """Test that only PRIVATE_KEY is checked at load time."""
        config = load_config({"PRIVATE_KEY": TEST_PRIVATE_KEY})

        assert config.l1_rpc_url is None
        assert config.l1_token_address is None

    def test_receipt_timeout(self):
        """Test receipt timeout parsing."""
        assert load_config(_environ(RECEIPT_TIMEOUT="90")).receipt_timeout == 90.0
        assert load_config(_environ(RECEIPT_TIMEOUT="0")).receipt_timeout is None

    @pytest.mark.parametrize("value", ["soon", "-5"])
    def test_invalid_receipt_timeout(self, value):
        """Test malformed timeouts are configuration errors."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(_environ(RECEIPT_TIMEOUT=value))
        assert exc_info.value.config_key == "RECEIPT_TIMEOUT"

    def test_logging_settings(self):
        """Test log level and format parsing."""
        config = load_config(_environ(LOG_LEVEL="DEBUG", LOG_FORMAT="JSON"))

        assert config.log_level == LogLevel.DEBUG
        assert config.log_format == "json"

    @pytest.mark.parametrize(
        "key, value", [("LOG_LEVEL", "loud"), ("LOG_FORMAT", "xml")]
    )
    def test_invalid_logging_settings(self, key, value):
        """Test unknown logging settings are rejected."""
        with pytest.raises(ConfigurationError):
            load_config(_environ(**{key: value}))

    def test_token_symbol_override(self):
        """Test TOKEN_SYMBOL."""
        assert load_config(_environ(TOKEN_SYMBOL="TKN")).token_symbol == "TKN"


class TestDotenv:
    """Test .env file loading."""

    def test_env_file_is_loaded(self, clean_env, tmp_path):
        """Test values come from the .env file when absent from the environment."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"PRIVATE_KEY={TEST_PRIVATE_KEY}\nL1_RPC_URL=http://from-dotenv\n"
        )

        config = load_config(env_file=str(env_file))

        assert config.private_key == TEST_PRIVATE_KEY
        assert config.l1_rpc_url == "http://from-dotenv"

    def test_environment_wins_over_env_file(self, clean_env, tmp_path):
        """Test the real environment is never overridden."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            f"PRIVATE_KEY={TEST_PRIVATE_KEY}\nL1_RPC_URL=http://from-dotenv\n"
        )
        clean_env.setenv("L1_RPC_URL", "http://from-environment")

        config = load_config(env_file=str(env_file))

        assert config.l1_rpc_url == "http://from-environment"

    def test_skip_dotenv(self, clean_env, tmp_path):
        """Test OPBRIDGE_SKIP_DOTENV disables .env loading."""
        env_file = tmp_path / ".env"
        env_file.write_text(f"PRIVATE_KEY={TEST_PRIVATE_KEY}\n")
        clean_env.setenv("OPBRIDGE_SKIP_DOTENV", "1")

        with pytest.raises(ConfigurationError):
            load_config(env_file=str(env_file))


class TestBridgeConfig:
    """Test BridgeConfig helpers."""

    def test_require_returns_value(self, bridge_config):
        assert bridge_config.require("l1_token_address") == L1_TOKEN

    @pytest.mark.parametrize(
        "attr, env_name",
        [
            ("l1_rpc_url", "L1_RPC_URL"),
            ("l1_token_address", "L1_ERC20_ADDRESS"),
            ("l2_token_address", "L2_ERC20_ADDRESS"),
        ],
    )
    def test_require_names_environment_variable(self, attr, env_name):
        """Test missing values are reported by their environment name."""
        config = BridgeConfig(private_key=TEST_PRIVATE_KEY)

        with pytest.raises(ConfigurationError, match=env_name):
            config.require(attr)

    def test_endpoints_and_tokens(self, bridge_config):
        """Test derived endpoints and token references."""
        assert bridge_config.l1_endpoint.chain_id == SEPOLIA.chain_id
        assert bridge_config.l1_endpoint.rpc_url == "http://localhost:8545"
        assert bridge_config.l2_endpoint.name == "Base Sepolia"
        assert bridge_config.l1_token.address == L1_TOKEN
        assert bridge_config.l2_token.chain is BASE_SEPOLIA

    def test_unset_rpc_falls_back_to_chain_default(self):
        """Test an unset L1_RPC_URL resolves to the chain's public endpoint."""
        config = BridgeConfig(private_key=TEST_PRIVATE_KEY, l2_rpc_url=None)

        assert config.l1_endpoint.rpc_url == SEPOLIA.default_rpc_url
        assert config.l2_endpoint.rpc_url == BASE_SEPOLIA.default_rpc_url

    def test_no_rpc_and_no_default(self):
        """Test a chain without a public endpoint still needs its variable."""
        chain = ChainSpec(chain_id=31337, name="Local")
        config = BridgeConfig(private_key=TEST_PRIVATE_KEY, l1_chain=chain)

        with pytest.raises(ConfigurationError, match="L1_RPC_URL"):
            config.l1_endpoint

    def test_repr_masks_private_key(self, bridge_config):
        """Test the key never appears in the repr."""
        text = repr(bridge_config)

        assert TEST_PRIVATE_KEY not in text
        assert "***" in text
