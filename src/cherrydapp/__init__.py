__all__ = [
    # Config / identity
    "ChainConfig",
    "ChainContext",
    "load_config",
    "build_context",
    "load_private_key",
    "get_account",
    # Chain engine
    "ChainClient",
    "TxReceipt",
    "FunctionDescriptor",
    "encode_call",
    "decode_result",
    "to_raw",
    "to_human",
    "CandidateSet",
    "ProbeResolver",
    "ProbeSuccess",
    "ProbeFailure",
    "RawTxRequest",
    "TransactionPipeline",
    "ReceiptPoller",
    # Contract services
    "Erc20",
    "Erc20Meta",
    "SimpleWallet",
    "ThirtyOneGame",
    "Network",
    # Errors
    "ChainError",
    "TransportError",
    "RpcError",
    "SubmissionError",
    "EncodingError",
    "DecodingError",
    "PrecisionError",
    "NoMatchingFunctionError",
    "ConfigError",
]

from .config import ChainConfig, load_config
from .errors import (
    ChainError,
    ConfigError,
    DecodingError,
    EncodingError,
    NoMatchingFunctionError,
    PrecisionError,
    RpcError,
    SubmissionError,
    TransportError,
)
from .identity import ChainContext, build_context, get_account, load_private_key
from .chain.abi import FunctionDescriptor, decode_result, encode_call
from .chain.probe import CandidateSet, ProbeFailure, ProbeResolver, ProbeSuccess
from .chain.receipts import ReceiptPoller
from .chain.rpc import ChainClient, TxReceipt
from .chain.tx import RawTxRequest, TransactionPipeline
from .chain.units import to_human, to_raw
from .contracts.erc20 import Erc20, Erc20Meta
from .contracts.network import Network
from .contracts.simple_wallet import SimpleWallet
from .contracts.t31 import ThirtyOneGame
