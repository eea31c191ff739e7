"""Shared fixtures: an in-memory chain client and a fixed signing identity."""

from __future__ import annotations

import os
from typing import Any, Optional
from unittest.mock import patch

import pytest

from cherrydapp.config import ChainConfig
from cherrydapp.errors import RpcError
from cherrydapp.identity import ChainContext, get_account

# Well-known development key (Hardhat/Anvil account #0). Never holds real funds.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

CONTRACT = "0x1111111111111111111111111111111111111111"
TX_HASH = "0x" + "ab" * 32


def word(value: int) -> bytes:
    return value.to_bytes(32, "big")


class FakeChainClient:
    """Stands in for ChainClient; eth_call answers are keyed by selector."""

    def __init__(self, config: ChainConfig) -> None:
        self.config = config
        self.calls: list[tuple[str, bytes]] = []
        self.call_responses: dict[bytes, Any] = {}
        self.estimate: Any = None
        self.gas_price: Any = 10
        self.nonce: Any = 5
        self.estimates: list[tuple[str, str, bytes]] = []
        self.nonce_queries: list[tuple[str, str]] = []
        self.sent: list[bytes] = []
        self.send_result: Any = TX_HASH
        self.receipts: list[Any] = []
        self.receipt_polls = 0
        self.closed = False

    @property
    def rpc_url(self) -> str:
        return self.config.rpc_url

    def respond(self, selector: bytes, result: Any) -> None:
        self.call_responses[selector] = result

    def call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        self.calls.append((to, data))
        result = self.call_responses.get(data[:4])
        if result is None:
            raise RpcError("execution reverted", code=3)
        if isinstance(result, Exception):
            raise result
        return result

    def called_selectors(self) -> list[bytes]:
        return [data[:4] for _, data in self.calls]

    def estimate_gas(self, sender: str, to: str, data: bytes, value: int = 0) -> Optional[int]:
        self.estimates.append((sender, to, data))
        if isinstance(self.estimate, Exception):
            raise self.estimate
        return self.estimate

    def get_gas_price(self) -> int:
        if isinstance(self.gas_price, Exception):
            raise self.gas_price
        return self.gas_price

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        self.nonce_queries.append((address, block))
        if isinstance(self.nonce, Exception):
            raise self.nonce
        if callable(self.nonce):
            return self.nonce()
        return self.nonce

    def send_raw_transaction(self, raw_tx: bytes) -> str:
        if isinstance(self.send_result, Exception):
            raise self.send_result
        self.sent.append(bytes(raw_tx))
        return self.send_result

    def get_transaction_receipt(self, tx_hash: str):
        self.receipt_polls += 1
        if self.receipts:
            return self.receipts.pop(0)
        return None

    def close(self) -> None:
        self.closed = True


class FakePipeline:
    """Records submissions; fails for the function names listed in ``reject``."""

    def __init__(self, reject: tuple[str, ...] = ()) -> None:
        self.reject = reject
        self.submitted: list[tuple[str, str, list]] = []

    def submit(self, to, descriptor, args) -> str:
        self.submitted.append((to, descriptor.signature, list(args)))
        if descriptor.name in self.reject:
            raise RpcError("execution reverted: Ownable: caller is not the owner", code=3)
        return TX_HASH


@pytest.fixture()
def config() -> ChainConfig:
    return ChainConfig(chain_id=11155111, rpc_url="https://rpc.example/v2/abcdefghijkl")


@pytest.fixture()
def context(config: ChainConfig) -> ChainContext:
    return ChainContext(config=config, account=get_account(TEST_PRIVATE_KEY))


@pytest.fixture()
def fake_client(config: ChainConfig) -> FakeChainClient:
    return FakeChainClient(config)


@pytest.fixture()
def clean_env():
    """Run with an empty environment; anything dotenv loads is discarded afterwards."""
    with patch.dict(os.environ, {}, clear=True):
        yield
