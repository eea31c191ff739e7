"""
Signing identity.

The process holds exactly one ECDSA/secp256k1 key, read from
``PRIVATE_KEY`` in ~/.cherrydapp/.env or the environment.  The key and the
chain configuration travel together in a ``ChainContext`` that is passed
explicitly to the components that need them.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from eth_account import Account
from eth_account.signers.local import LocalAccount

from .config import CHERRY_ENV, ChainConfig, load_config
from .errors import ConfigError


@dataclass(frozen=True)
class ChainContext:
    config: ChainConfig
    account: LocalAccount

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def chain_id(self) -> int:
        return self.config.chain_id


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load private key from .env file or environment.

    Args:
        env_path: Path to .env file (default: ~/.cherrydapp/.env)

    Returns:
        0x-prefixed hex private key

    Raises:
        ConfigError: If PRIVATE_KEY is not set
    """
    env_path = env_path or CHERRY_ENV

    if env_path.exists():
        load_dotenv(env_path, override=False)

    private_key = os.environ.get("PRIVATE_KEY")
    if not private_key:
        raise ConfigError(f"PRIVATE_KEY not found. Set PRIVATE_KEY in {env_path} or the environment.")

    # Ensure 0x prefix
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, loads from .env.

    Returns:
        LocalAccount instance for signing transactions
    """
    if private_key is None:
        private_key = load_private_key()
    try:
        return Account.from_key(private_key)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"PRIVATE_KEY is not a valid secp256k1 key: {exc}") from exc


def build_context(
    private_key: Optional[str] = None,
    env_path: Optional[Path] = None,
    config: Optional[ChainConfig] = None,
) -> ChainContext:
    """Initialise configuration and signing identity in one step."""
    config = config or load_config(env_path)
    if private_key is None:
        private_key = load_private_key(env_path)
    return ChainContext(config=config, account=get_account(private_key))
