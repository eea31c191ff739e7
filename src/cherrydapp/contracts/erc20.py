"""ERC-20 token operations."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..chain.abi import FunctionDescriptor
from ..chain.rpc import ChainClient, read_contract
from ..chain.tx import TransactionPipeline
from ..chain.units import HumanAmount, to_human, to_raw
from . import require_pipeline

DECIMALS = FunctionDescriptor("decimals", (), ("uint8",))
NAME = FunctionDescriptor("name", (), ("string",))
SYMBOL = FunctionDescriptor("symbol", (), ("string",))
BALANCE_OF = FunctionDescriptor("balanceOf", ("address",), ("uint256",))
ALLOWANCE = FunctionDescriptor("allowance", ("address", "address"), ("uint256",))
APPROVE = FunctionDescriptor("approve", ("address", "uint256"), ("bool",))
TRANSFER = FunctionDescriptor("transfer", ("address", "uint256"), ("bool",))
TRANSFER_FROM = FunctionDescriptor("transferFrom", ("address", "address", "uint256"), ("bool",))


@dataclass(frozen=True)
class Erc20Meta:
    name: str
    symbol: str
    decimals: int


class Erc20:
    def __init__(self, client: ChainClient, pipeline: Optional[TransactionPipeline] = None) -> None:
        self.client = client
        self.pipeline = pipeline

    # ---- reads ----

    def decimals(self, token: str) -> int:
        return int(read_contract(self.client, token, DECIMALS))

    def name(self, token: str) -> str:
        return read_contract(self.client, token, NAME)

    def symbol(self, token: str) -> str:
        return read_contract(self.client, token, SYMBOL)

    def meta(self, token: str) -> Erc20Meta:
        return Erc20Meta(self.name(token), self.symbol(token), self.decimals(token))

    def balance_of(self, token: str, owner: str) -> int:
        return read_contract(self.client, token, BALANCE_OF, [owner])

    def allowance(self, token: str, owner: str, spender: str) -> int:
        return read_contract(self.client, token, ALLOWANCE, [owner, spender])

    # ---- unit conversion by token ----

    def to_raw(self, token: str, amount: HumanAmount) -> int:
        """Human amount -> raw units, using the token's on-chain decimals."""
        return to_raw(amount, self.decimals(token))

    def to_human(self, token: str, raw: int) -> Decimal:
        return to_human(raw, self.decimals(token))

    # ---- writes ----

    def approve(self, token: str, spender: str, raw_amount: int) -> str:
        return require_pipeline(self.pipeline).submit(token, APPROVE, [spender, raw_amount])

    def transfer(self, token: str, to: str, raw_amount: int) -> str:
        return require_pipeline(self.pipeline).submit(token, TRANSFER, [to, raw_amount])

    def transfer_from(self, token: str, sender: str, to: str, raw_amount: int) -> str:
        return require_pipeline(self.pipeline).submit(token, TRANSFER_FROM, [sender, to, raw_amount])
