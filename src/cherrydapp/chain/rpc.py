"""
JSON-RPC Client for EVM-compatible nodes.

Lightweight alternative to web3.py: uses httpx for HTTP.
One method per JSON-RPC method the engine needs.  No retries: every
failure surfaces immediately as TransportError or RpcError.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import httpx

from ..config import ChainConfig
from ..errors import RpcError, TransportError
from ..utils import bytes_to_hex, from_quantity, hex_to_bytes, to_quantity
from .abi import FunctionDescriptor, decode_result, encode_call

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TxReceipt:
    tx_hash: str
    block_number: Optional[int]
    status: Optional[int]
    gas_used: Optional[int]
    contract_address: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def status_ok(self) -> bool:
        """Whether on-chain execution succeeded (distinct from being mined)."""
        return self.status == 1

    @classmethod
    def from_rpc(cls, data: dict[str, Any]) -> "TxReceipt":
        def _q(key: str) -> Optional[int]:
            value = data.get(key)
            return from_quantity(value) if value is not None else None

        return cls(
            tx_hash=data.get("transactionHash", ""),
            block_number=_q("blockNumber"),
            status=_q("status"),
            gas_used=_q("gasUsed"),
            contract_address=data.get("contractAddress"),
            raw=data,
        )


class ChainClient:
    """Blocking facade over a node's JSON-RPC endpoint."""

    def __init__(
        self,
        config: ChainConfig,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.config = config
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=config.http_timeout)
        self._ids = itertools.count(1)

    @property
    def rpc_url(self) -> str:
        return self.config.rpc_url

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ChainClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            TransportError: If the node cannot be reached or answers garbage
            RpcError: If the node returns an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }
        logger.debug("rpc %s %s", method, params)

        try:
            response = self._http.post(self.config.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{method} failed: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"{method} returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise TransportError(f"{method} returned a non-object response")

        error = data.get("error")
        if error is not None:
            if isinstance(error, dict):
                raise RpcError(
                    str(error.get("message", "unknown error")),
                    code=error.get("code"),
                    data=error.get("data"),
                )
            raise RpcError(str(error))

        return data.get("result")

    def _quantity(self, method: str, params: list) -> int:
        result = self.request(method, params)
        try:
            return from_quantity(result)
        except ValueError as exc:
            raise TransportError(f"{method} returned a malformed quantity: {result!r}") from exc

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """Read from a contract (eth_call) and return the raw return bytes."""
        result = self.request("eth_call", [{"to": to, "data": bytes_to_hex(data)}, block])
        if result is None:
            return b""
        try:
            return hex_to_bytes(result)
        except (ValueError, AttributeError) as exc:
            raise TransportError(f"eth_call returned malformed data: {result!r}") from exc

    def get_block_number(self) -> int:
        return self._quantity("eth_blockNumber", [])

    def get_chain_id(self) -> int:
        return self._quantity("eth_chainId", [])

    def get_balance(self, address: str, block: str = "latest") -> int:
        """
        Get ETH balance for an address.

        Returns:
            Balance in wei
        """
        return self._quantity("eth_getBalance", [address, block])

    def get_gas_price(self) -> int:
        return self._quantity("eth_gasPrice", [])

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        """
        Get transaction count for an address.

        The default block is "pending" so that transactions already in the
        node's mempool are counted when picking the next nonce.
        """
        return self._quantity("eth_getTransactionCount", [address, block])

    def estimate_gas(self, sender: str, to: str, data: bytes, value: int = 0) -> Optional[int]:
        """
        Estimate gas for a call.

        Returns:
            Gas units, or None if the node returned an empty estimate
        """
        tx = {
            "from": sender,
            "to": to,
            "data": bytes_to_hex(data),
            "value": to_quantity(value),
        }
        result = self.request("eth_estimateGas", [tx])
        if not result:
            return None
        try:
            return from_quantity(result)
        except ValueError as exc:
            raise TransportError(f"eth_estimateGas returned a malformed quantity: {result!r}") from exc

    def get_max_priority_fee_per_gas(self) -> int:
        return self._quantity("eth_maxPriorityFeePerGas", [])

    def get_base_fee(self) -> Optional[int]:
        """Base fee of the latest block, or None on pre-London chains."""
        block = self.request("eth_getBlockByNumber", ["latest", False])
        if block is None:
            return None
        if not isinstance(block, dict):
            raise TransportError(f"eth_getBlockByNumber returned a non-object block: {block!r}")
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            return None
        try:
            return from_quantity(base_fee)
        except ValueError as exc:
            raise TransportError(f"eth_getBlockByNumber returned a malformed baseFeePerGas: {base_fee!r}") from exc

    def get_transaction_receipt(self, tx_hash: str) -> Optional[TxReceipt]:
        result = self.request("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            return None
        if not isinstance(result, dict):
            raise TransportError(f"eth_getTransactionReceipt returned a non-object receipt: {result!r}")
        try:
            return TxReceipt.from_rpc(result)
        except ValueError as exc:
            raise TransportError(f"eth_getTransactionReceipt returned a malformed receipt: {exc}") from exc

    def client_version(self) -> str:
        result = self.request("web3_clientVersion", [])
        return str(result or "")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def send_raw_transaction(self, raw_tx: bytes) -> str:
        """
        Send a signed raw transaction.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        return self.request("eth_sendRawTransaction", [bytes_to_hex(raw_tx)])


def read_contract(
    client: ChainClient,
    contract_address: str,
    descriptor: FunctionDescriptor,
    args: Sequence[Any] = (),
) -> Any:
    """
    Read from a smart contract (eth_call).

    Args:
        client: Chain client
        contract_address: 0x-prefixed contract address
        descriptor: Function to call
        args: Function arguments

    Returns:
        Decoded return value (single value, or tuple for multiple outputs)

    Raises:
        EncodingError, DecodingError, TransportError, RpcError
    """
    data = encode_call(descriptor, args)
    values = decode_result(descriptor, client.call(contract_address, data))
    if len(values) == 1:
        return values[0]
    return tuple(values)
