"""
Error taxonomy for the contract interaction engine.

Every failure surfaced by the chain layer derives from ``ChainError`` so
callers can catch one type at the command boundary.
"""

from __future__ import annotations

from typing import Any, Optional


class ChainError(Exception):
    pass


class TransportError(ChainError):
    """The node could not be reached or returned an unusable HTTP response."""


class RpcError(ChainError):
    """The node answered with a JSON-RPC ``error`` object (including reverts)."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code {self.code})"


class SubmissionError(RpcError):
    """eth_sendRawTransaction was rejected by the node."""


class EncodingError(ChainError):
    pass


class DecodingError(ChainError):
    pass


class PrecisionError(ChainError):
    """A unit conversion would have needed rounding."""


class NoMatchingFunctionError(ChainError):
    """Every write candidate of a probe set failed."""


class ConfigError(ChainError):
    pass
