"""
ABI Codec - function descriptors, call-data encoding and result decoding.

Selectors are the first 4 bytes of keccak256("name(type1,type2,...)");
argument and return payloads follow the Solidity ABI via eth-abi.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import EncodingError as AbiEncodingError

from ..errors import DecodingError, EncodingError
from ..utils import keccak256, to_checksum_address

SUPPORTED_TYPES = frozenset({"uint8", "uint256", "address", "bool", "string"})
DYNAMIC_TYPES = frozenset({"string"})

WORD = 32


@dataclass(frozen=True)
class FunctionDescriptor:
    """One callable surface: name plus ordered input and output type tags."""

    name: str
    input_types: tuple[str, ...] = ()
    output_types: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return keccak256(self.signature.encode("utf-8"))[:4]

    def __str__(self) -> str:
        return self.signature


def _check_types(types: Sequence[str], error: type[Exception], what: str) -> None:
    unsupported = [t for t in types if t not in SUPPORTED_TYPES]
    if unsupported:
        raise error(f"Unsupported {what} type(s): {', '.join(unsupported)}")


def encode_call(descriptor: FunctionDescriptor, args: Sequence[Any]) -> bytes:
    """
    ABI-encode a function call.

    Args:
        descriptor: Function to call
        args: Argument values, one per input type

    Returns:
        4-byte selector followed by the encoded arguments

    Raises:
        EncodingError: On arity or type mismatch
    """
    _check_types(descriptor.input_types, EncodingError, "input")
    if len(args) != len(descriptor.input_types):
        raise EncodingError(
            f"{descriptor.signature} takes {len(descriptor.input_types)} "
            f"argument(s), got {len(args)}"
        )

    if not args:
        return descriptor.selector

    try:
        encoded_args = encode(list(descriptor.input_types), list(args))
    except (AbiEncodingError, TypeError, ValueError) as exc:
        raise EncodingError(f"Cannot encode arguments for {descriptor.signature}: {exc}") from exc

    return descriptor.selector + encoded_args


def _check_length(descriptor: FunctionDescriptor, data: bytes) -> None:
    head = WORD * len(descriptor.output_types)
    if any(t in DYNAMIC_TYPES for t in descriptor.output_types):
        if len(data) < head or len(data) % WORD:
            raise DecodingError(
                f"{descriptor.signature} returned {len(data)} bytes, "
                f"expected a word-aligned payload of at least {head}"
            )
    elif len(data) != head:
        raise DecodingError(
            f"{descriptor.signature} returned {len(data)} bytes, expected {head}"
        )


def decode_result(descriptor: FunctionDescriptor, data: bytes) -> list[Any]:
    """
    ABI-decode a function call result.

    Returns:
        Decoded values in output order (empty for functions without outputs)

    Raises:
        DecodingError: If the payload does not match the output shape
    """
    _check_types(descriptor.output_types, DecodingError, "output")
    _check_length(descriptor, data)

    if not descriptor.output_types:
        return []

    try:
        decoded = decode(list(descriptor.output_types), data)
    except (AbiDecodingError, ValueError) as exc:
        raise DecodingError(f"Cannot decode result of {descriptor.signature}: {exc}") from exc

    return [
        to_checksum_address(value) if tag == "address" else value
        for tag, value in zip(descriptor.output_types, decoded)
    ]
