"""
Contracts - typed services for the contracts this tool talks to.

Each service reads through a ChainClient and, when given a
TransactionPipeline, writes through it:
- erc20:         ERC-20 metadata, balances, allowance, approve/transfer
- simple_wallet: SimpleWallet ERC-20 deposit / withdraw
- t31:           ThirtyOneGame, with probed reads for unknown surfaces
- network:       node connectivity and account balance
"""

from __future__ import annotations

from typing import Optional

from ..errors import ConfigError
from ..chain.tx import TransactionPipeline


def require_pipeline(pipeline: Optional[TransactionPipeline]) -> TransactionPipeline:
    if pipeline is None:
        raise ConfigError("This operation sends a transaction and needs a signing identity (PRIVATE_KEY).")
    return pipeline
