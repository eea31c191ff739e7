"""
Chain - contract interaction engine.

Provides the JSON-RPC client, ABI codec, unit conversion, function
probing, and the legacy transaction pipeline with receipt polling.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""

from .abi import FunctionDescriptor, decode_result, encode_call
from .probe import CandidateSet, ProbeFailure, ProbeResolver, ProbeSuccess
from .receipts import ReceiptPoller
from .rpc import ChainClient, TxReceipt
from .tx import RawTxRequest, TransactionPipeline
from .units import to_human, to_raw

__all__ = [
    "CandidateSet",
    "ChainClient",
    "FunctionDescriptor",
    "ProbeFailure",
    "ProbeResolver",
    "ProbeSuccess",
    "RawTxRequest",
    "ReceiptPoller",
    "TransactionPipeline",
    "TxReceipt",
    "decode_result",
    "encode_call",
    "to_human",
    "to_raw",
]
