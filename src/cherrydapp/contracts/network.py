"""Node connectivity and plain account queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import urlparse

from ..chain.rpc import ChainClient
from ..chain.units import wei_to_ether
from ..errors import ChainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkHealth:
    connected: bool
    rpc_url_masked: str
    rpc_host: str
    configured_chain_id: int
    chain_id_hex: str


class Network:
    def __init__(self, client: ChainClient) -> None:
        self.client = client

    def client_version(self) -> str:
        """Node client version, or "" when the node cannot be asked."""
        try:
            return self.client.client_version()
        except ChainError as exc:
            logger.debug("web3_clientVersion failed: %s", exc)
            return ""

    def is_connected(self) -> bool:
        return bool(self.client_version().strip())

    def block_number(self) -> int:
        """Latest block number, or -1 when unavailable."""
        try:
            return self.client.get_block_number()
        except ChainError as exc:
            logger.debug("eth_blockNumber failed: %s", exc)
            return -1

    def chain_id_hex(self) -> str:
        """Node chain id as hex, or "0x0" when unavailable."""
        try:
            return hex(self.client.get_chain_id())
        except ChainError as exc:
            logger.debug("eth_chainId failed: %s", exc)
            return "0x0"

    def balance_wei(self, address: str) -> int:
        return self.client.get_balance(address)

    def balance_ether(self, address: str) -> Decimal:
        return wei_to_ether(self.balance_wei(address))

    def health(self) -> NetworkHealth:
        config = self.client.config
        return NetworkHealth(
            connected=self.is_connected(),
            rpc_url_masked=config.masked_rpc_url(),
            rpc_host=urlparse(config.rpc_url).hostname or "",
            configured_chain_id=config.chain_id,
            chain_id_hex=self.chain_id_hex(),
        )

    def connection_summary(self) -> str:
        return (
            f"connected={self.is_connected()}, url={self.client.config.masked_rpc_url()}, "
            f"client={self.client_version()}"
        )
