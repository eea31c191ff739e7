"""
Function Probe Resolver.

Resolves one logical capability (e.g. "read the pot") against a contract
whose exact function names are unknown, by trying an ordered
``CandidateSet`` until one candidate both transports and decodes.

Each attempt produces a ``ProbeOutcome`` value instead of raising, and the
candidate list is folded left to right, stopping at the first success.
Given identical node responses the same candidate is always selected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from ..errors import (
    ChainError,
    DecodingError,
    EncodingError,
    NoMatchingFunctionError,
    RpcError,
    TransportError,
)
from .abi import FunctionDescriptor, decode_result, encode_call
from .rpc import ChainClient

if TYPE_CHECKING:
    from .tx import TransactionPipeline

logger = logging.getLogger(__name__)

# Failure reasons
TRANSPORT = "transport"
RPC = "rpc"
DECODE = "decode"
ENCODE = "encode"
ARGUMENTS = "arguments"

# Sentinel fallback meaning "no value known"
UNKNOWN = None

ArgumentSupplier = Callable[[], Sequence[Any]]


@dataclass(frozen=True)
class CandidateSet:
    """Ordered, interchangeable realizations of one capability. First success wins."""

    name: str
    candidates: tuple[FunctionDescriptor, ...]
    fallback: Any = UNKNOWN

    def __iter__(self):
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)


@dataclass(frozen=True)
class ProbeSuccess:
    descriptor: FunctionDescriptor
    values: tuple[Any, ...]

    ok = True

    @property
    def value(self) -> Any:
        return self.values[0] if self.values else None


@dataclass(frozen=True)
class ProbeFailure:
    descriptor: FunctionDescriptor
    reason: str
    detail: str = ""

    ok = False


ProbeOutcome = Union[ProbeSuccess, ProbeFailure]


class _LazyArguments:
    """Calls the supplier on first need and replays its answer (or error)."""

    def __init__(self, supplier: Optional[ArgumentSupplier]) -> None:
        self._supplier = supplier
        self._result: Union[tuple[Any, ...], ChainError, None] = None

    def __call__(self, descriptor: FunctionDescriptor) -> tuple[Any, ...]:
        if not descriptor.input_types:
            return ()
        if self._supplier is None:
            raise EncodingError(f"{descriptor.signature} needs arguments but none were supplied")
        if self._result is None:
            try:
                self._result = tuple(self._supplier())
            except ChainError as exc:
                self._result = exc
        if isinstance(self._result, ChainError):
            raise self._result
        return self._result


class ProbeResolver:
    def __init__(self, client: ChainClient) -> None:
        self.client = client

    def attempt(
        self,
        contract: str,
        descriptor: FunctionDescriptor,
        args: Sequence[Any] = (),
    ) -> ProbeOutcome:
        """Try one candidate. Never raises for chain-side failures."""
        try:
            data = encode_call(descriptor, args)
        except EncodingError as exc:
            return ProbeFailure(descriptor, ENCODE, str(exc))
        try:
            returned = self.client.call(contract, data)
        except TransportError as exc:
            return ProbeFailure(descriptor, TRANSPORT, str(exc))
        except RpcError as exc:
            return ProbeFailure(descriptor, RPC, str(exc))
        try:
            values = decode_result(descriptor, returned)
        except DecodingError as exc:
            return ProbeFailure(descriptor, DECODE, str(exc))
        return ProbeSuccess(descriptor, tuple(values))

    def first_success(
        self,
        contract: str,
        candidates: CandidateSet,
        arguments: Optional[ArgumentSupplier] = None,
    ) -> Optional[ProbeSuccess]:
        """
        Fold the candidate set in order and return the first success.

        Args:
            contract: Target contract address
            candidates: Ordered candidate set
            arguments: Returns the argument values shared by every
                candidate that takes inputs.  Called at most once, and
                only when such a candidate is reached.

        Returns:
            The first ProbeSuccess, or None if every candidate failed
        """
        supply = _LazyArguments(arguments)
        for descriptor in candidates:
            try:
                args = supply(descriptor)
            except ChainError as exc:
                outcome: ProbeOutcome = ProbeFailure(descriptor, ARGUMENTS, str(exc))
            else:
                outcome = self.attempt(contract, descriptor, args)

            if isinstance(outcome, ProbeSuccess):
                logger.info("%s on %s resolved by %s", candidates.name, contract, descriptor)
                return outcome
            logger.debug(
                "%s on %s: %s failed (%s) %s",
                candidates.name, contract, descriptor, outcome.reason, outcome.detail,
            )

        logger.info("%s on %s: no candidate matched", candidates.name, contract)
        return None

    def resolve(
        self,
        contract: str,
        candidates: CandidateSet,
        arguments: Optional[ArgumentSupplier] = None,
    ) -> Any:
        """First successful candidate's value, or the set's fallback."""
        success = self.first_success(contract, candidates, arguments)
        if success is None:
            return candidates.fallback
        return success.value

    def resolve_write(
        self,
        contract: str,
        candidates: CandidateSet,
        pipeline: "TransactionPipeline",
    ) -> str:
        """
        Submit write candidates in order until the node accepts one.

        Returns:
            Transaction hash of the first accepted candidate

        Raises:
            NoMatchingFunctionError: If every candidate failed
        """
        failures = []
        for descriptor in candidates:
            try:
                tx_hash = pipeline.submit(contract, descriptor, [])
            except ChainError as exc:
                logger.debug("%s on %s: %s failed: %s", candidates.name, contract, descriptor, exc)
                failures.append(descriptor.name)
                continue
            logger.info("%s on %s submitted via %s: %s", candidates.name, contract, descriptor, tx_hash)
            return tx_hash

        raise NoMatchingFunctionError(
            f"No matching {candidates.name} function ({'/'.join(failures)}) on {contract}"
        )
