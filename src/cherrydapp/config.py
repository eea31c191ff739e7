"""
Chain configuration.

Values come from a dotenv file (default ``~/.cherrydapp/.env``) layered
under the process environment.  Loaded once at start-up and treated as
read-only afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .utils import is_address

# Default config directory
CHERRY_DIR = Path.home() / ".cherrydapp"
CHERRY_ENV = CHERRY_DIR / ".env"

DEFAULT_RPC_URL = "https://rpc.sepolia.org"
DEFAULT_CHAIN_ID = 11155111  # Sepolia
DEFAULT_SIMPLE_WALLET = "0x428dc0f4f806054CE70b26F1bB6a186317644123"
DEFAULT_EXPLORER_TX_URL = "https://sepolia.etherscan.io/tx/"
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class ChainConfig:
    chain_id: int
    rpc_url: str
    cherry_token: Optional[str] = None
    simple_wallet: Optional[str] = DEFAULT_SIMPLE_WALLET
    t31_contract: Optional[str] = None
    explorer_url: str = DEFAULT_EXPLORER_TX_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def explorer_link(self, tx_hash: str) -> str:
        return self.explorer_url + tx_hash

    def masked_rpc_url(self) -> str:
        """RPC URL with the trailing path segment (usually an API key) masked."""
        idx = self.rpc_url.rfind("/")
        if idx < 0 or idx == len(self.rpc_url) - 1:
            return self.rpc_url
        key = self.rpc_url[idx + 1:]
        head = key[:6] if len(key) > 6 else ""
        return self.rpc_url[: idx + 1] + head + "****"


def _optional_address(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(name) or default
    if value is None:
        return None
    if not is_address(value):
        raise ConfigError(f"{name} is not a valid address: {value!r}")
    return value


def load_config(env_path: Optional[Path] = None) -> ChainConfig:
    """
    Load chain configuration from .env file and environment.

    Args:
        env_path: Path to .env file (default: ~/.cherrydapp/.env)

    Returns:
        ChainConfig

    Raises:
        ConfigError: If a value is present but malformed
    """
    env_path = env_path or CHERRY_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)

    raw_chain_id = os.environ.get("CHAIN_ID", str(DEFAULT_CHAIN_ID))
    try:
        chain_id = int(raw_chain_id, 0)
    except ValueError:
        raise ConfigError(f"CHAIN_ID must be an integer, got {raw_chain_id!r}") from None
    if chain_id <= 0:
        raise ConfigError(f"CHAIN_ID must be positive, got {chain_id}")

    raw_timeout = os.environ.get("RPC_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))
    try:
        http_timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"RPC_TIMEOUT must be a number, got {raw_timeout!r}") from None

    return ChainConfig(
        chain_id=chain_id,
        rpc_url=os.environ.get("RPC_URL", DEFAULT_RPC_URL),
        cherry_token=_optional_address("CHERRY_TOKEN_ADDRESS"),
        simple_wallet=_optional_address("SIMPLE_WALLET_ADDRESS", DEFAULT_SIMPLE_WALLET),
        t31_contract=_optional_address("T31_CONTRACT_ADDRESS"),
        explorer_url=os.environ.get("EXPLORER_TX_URL", DEFAULT_EXPLORER_TX_URL),
        http_timeout=http_timeout,
    )
