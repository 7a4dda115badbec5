"""
Static chain metadata for the L1/L2 pair served by the bridge.

This module provides:
- Chain specifications (chain id, name, default RPC endpoint)
- Canonical standard-bridge contract addresses per L1/L2 pair
- Endpoint and token reference value types
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .errors import ConfigurationError

# OP-stack predeploy, identical on every OP-stack L2.
L2_STANDARD_BRIDGE_PREDEPLOY = "0x4200000000000000000000000000000000000010"


@dataclass(frozen=True)
class ChainSpec:
    """Static description of a chain."""
    chain_id: int
    name: str
    # Used when the matching *_RPC_URL variable is unset
    default_rpc_url: Optional[str] = None
    # L1StandardBridge address on the L1 side, keyed by L1 chain id
    l1_standard_bridge: Dict[int, str] = field(default_factory=dict)
    l2_standard_bridge: Optional[str] = None
    # Informational only; enforcement lives in the L1 dispute contracts.
    challenge_period: Optional[str] = None

    def l1_bridge_address(self, l1_chain_id: int) -> str:
        """Return the L1StandardBridge that deposits into this chain from ``l1_chain_id``."""
        try:
            return self.l1_standard_bridge[l1_chain_id]
        except KeyError:
            raise ConfigurationError(
                f"No L1 standard bridge known for {self.name} from chain {l1_chain_id}"
            ) from None

    def l2_bridge_address(self) -> str:
        if not self.l2_standard_bridge:
            raise ConfigurationError(f"{self.name} has no L2 standard bridge")
        return self.l2_standard_bridge

    def __hash__(self):
        return hash(self.chain_id)


SEPOLIA = ChainSpec(
    chain_id=11155111,
    name="Sepolia",
    default_rpc_url="https://sepolia.drpc.org",
)

BASE_SEPOLIA = ChainSpec(
    chain_id=84532,
    name="Base Sepolia",
    default_rpc_url="https://sepolia.base.org",
    l1_standard_bridge={
        SEPOLIA.chain_id: "0xfd0Bf71F60660E2f608ed56e1659C450eB113120",
    },
    l2_standard_bridge=L2_STANDARD_BRIDGE_PREDEPLOY,
    challenge_period="~1 week",
)


@dataclass(frozen=True)
class ChainEndpoint:
    """How to reach a chain: its spec plus the RPC URL in use."""
    chain: ChainSpec
    rpc_url: str

    @property
    def chain_id(self) -> int:
        return self.chain.chain_id

    @property
    def name(self) -> str:
        return self.chain.name


@dataclass(frozen=True)
class TokenReference:
    """An ERC20 deployment on a specific chain."""
    chain: ChainSpec
    address: str
