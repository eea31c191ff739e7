"""SimpleWallet: custody contract holding ERC-20 deposits per sender."""

from __future__ import annotations

from ..chain.abi import FunctionDescriptor
from ..chain.tx import TransactionPipeline

DEPOSIT_ERC20 = FunctionDescriptor("depositErc20", ("address", "uint256"))
WITHDRAW_ERC20 = FunctionDescriptor("withdrawErc20", ("address", "uint256"))


class SimpleWallet:
    def __init__(self, pipeline: TransactionPipeline) -> None:
        self.pipeline = pipeline

    def deposit_erc20(self, wallet: str, token: str, raw_amount: int) -> str:
        # The wallet pulls the tokens, so an ERC-20 approve must precede this.
        return self.pipeline.submit(wallet, DEPOSIT_ERC20, [token, raw_amount])

    def withdraw_erc20(self, wallet: str, token: str, raw_amount: int) -> str:
        return self.pipeline.submit(wallet, WITHDRAW_ERC20, [token, raw_amount])
