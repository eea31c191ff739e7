"""
Transaction Pipeline - Build, sign, and send legacy Ethereum transactions.

Uses eth-account for signing (EIP-155, chain id embedded) and the
httpx-based ChainClient for everything else.  Gas is priced with the
node's legacy eth_gasPrice; there is no fee-market logic.

The nonce is read from the node's pending count on every submission, so
submissions for one account must not overlap.  All pipelines share a
lock per account address that covers nonce fetch through broadcast.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Sequence

from eth_account.datastructures import SignedTransaction

from ..errors import EncodingError, RpcError, SubmissionError, TransportError
from ..identity import ChainContext
from ..utils import bytes_to_hex, is_address, to_checksum_address
from .abi import FunctionDescriptor, encode_call
from .rpc import ChainClient

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_GAS_LIMIT = 300_000

# Estimate * 12 / 10, floored
GAS_BUFFER_NUMERATOR = 12
GAS_BUFFER_DENOMINATOR = 10

_ACCOUNT_LOCKS: dict[str, threading.Lock] = {}
_ACCOUNT_LOCKS_GUARD = threading.Lock()


def account_lock(address: str) -> threading.Lock:
    """Return the process-wide submission lock for an account."""
    key = address.lower()
    with _ACCOUNT_LOCKS_GUARD:
        lock = _ACCOUNT_LOCKS.get(key)
        if lock is None:
            lock = _ACCOUNT_LOCKS[key] = threading.Lock()
        return lock


def buffered_gas_limit(estimate: int) -> int:
    return estimate * GAS_BUFFER_NUMERATOR // GAS_BUFFER_DENOMINATOR


@dataclass(frozen=True)
class RawTxRequest:
    to: str
    data: bytes
    nonce: int
    gas_price: int
    gas_limit: int
    chain_id: int
    value: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Transaction dict in the shape eth-account signs as a legacy tx."""
        return {
            "to": to_checksum_address(self.to),
            "data": bytes_to_hex(self.data),
            "value": self.value,
            "nonce": self.nonce,
            "gas": self.gas_limit,
            "gasPrice": self.gas_price,
            "chainId": self.chain_id,
        }


class TransactionPipeline:
    def __init__(
        self,
        client: ChainClient,
        context: ChainContext,
        fallback_gas_limit: int = DEFAULT_FALLBACK_GAS_LIMIT,
    ) -> None:
        self.client = client
        self.context = context
        self.fallback_gas_limit = fallback_gas_limit

    @property
    def sender(self) -> str:
        return self.context.address

    def estimate_gas_limit(self, to: str, data: bytes) -> int:
        """Buffered node estimate, or the fallback limit if estimation fails."""
        try:
            estimate = self.client.estimate_gas(self.sender, to, data)
        except (TransportError, RpcError) as exc:
            logger.info("Gas estimation failed for %s, using %d: %s", to, self.fallback_gas_limit, exc)
            return self.fallback_gas_limit
        if not estimate:
            logger.info("Empty gas estimate for %s, using %d", to, self.fallback_gas_limit)
            return self.fallback_gas_limit
        return buffered_gas_limit(estimate)

    def build(self, to: str, data: bytes) -> RawTxRequest:
        """
        Build an unsigned legacy transaction (gas, price, pending nonce).

        Not serialized on its own; call from within ``submit_calldata`` or
        hold ``account_lock`` yourself.
        """
        gas_limit = self.estimate_gas_limit(to, data)
        gas_price = self.client.get_gas_price()
        nonce = self.client.get_transaction_count(self.sender, "pending")
        return RawTxRequest(
            to=to,
            data=data,
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            chain_id=self.context.chain_id,
        )

    def sign(self, request: RawTxRequest) -> SignedTransaction:
        return self.context.account.sign_transaction(request.as_dict())

    def submit_calldata(self, to: str, data: bytes) -> str:
        """
        Build, sign and broadcast a transaction carrying ``data``.

        Returns:
            Transaction hash (0x-prefixed hex); no wait for mining

        Raises:
            TransportError, RpcError: If any node round-trip fails
            SubmissionError: If eth_sendRawTransaction is rejected
        """
        if not is_address(to):
            raise EncodingError(f"Invalid target address: {to!r}")
        with account_lock(self.sender):
            request = self.build(to, data)
            signed = self.sign(request)
            logger.info(
                "Submitting tx to %s from %s nonce=%d gas=%d gasPrice=%d chainId=%d",
                to, self.sender, request.nonce, request.gas_limit, request.gas_price, request.chain_id,
            )
            try:
                tx_hash = self.client.send_raw_transaction(signed.raw_transaction)
            except SubmissionError:
                raise
            except RpcError as exc:
                raise SubmissionError(exc.message, code=exc.code, data=exc.data) from exc

        if not isinstance(tx_hash, str) or not tx_hash.startswith("0x") or len(tx_hash) <= 2:
            raise SubmissionError(f"Node returned no usable transaction hash for tx to {to}: {tx_hash!r}")
        logger.info("Submitted %s", tx_hash)
        return tx_hash

    def submit(self, to: str, descriptor: FunctionDescriptor, args: Sequence[Any]) -> str:
        """Encode a contract call and submit it."""
        data = encode_call(descriptor, args)
        return self.submit_calldata(to, data)
