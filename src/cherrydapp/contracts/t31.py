"""
ThirtyOneGame - a round-based guessing game whose exact ABI varies
between deployments.

Only ``currentRound()`` and ``submit(uint256)`` are assumed.  Everything
else is resolved by probing the candidate tables below in order:
- pot:    falls back to 0
- isOpen: falls back to unknown (None)
- winner: falls back to unknown (None)
- starting the next round is a write; it raises NoMatchingFunctionError
  when no candidate is accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..chain.abi import FunctionDescriptor
from ..chain.probe import CandidateSet, ProbeResolver
from ..chain.rpc import ChainClient, read_contract
from ..chain.tx import TransactionPipeline
from ..errors import ChainError
from . import require_pipeline

logger = logging.getLogger(__name__)

CURRENT_ROUND = FunctionDescriptor("currentRound", (), ("uint256",))
SUBMIT = FunctionDescriptor("submit", ("uint256",))


def _uint_getter(name: str, *inputs: str) -> FunctionDescriptor:
    return FunctionDescriptor(name, inputs, ("uint256",))


POT = CandidateSet(
    name="pot",
    candidates=(
        _uint_getter("pot"),
        _uint_getter("getBalance"),
        _uint_getter("pot", "uint256"),
        _uint_getter("getPot", "uint256"),
        _uint_getter("potOf", "uint256"),
        _uint_getter("pool", "uint256"),
        _uint_getter("poolOf", "uint256"),
    ),
    fallback=0,
)

IS_OPEN = CandidateSet(
    name="isOpen",
    candidates=tuple(
        FunctionDescriptor(name, (), ("bool",))
        for name in ("isOpen", "isRoundOpen", "isActive", "isRunning", "open")
    ),
)

WINNER = CandidateSet(
    name="winner",
    candidates=(
        FunctionDescriptor("winner", (), ("address",)),
        FunctionDescriptor("getWinner", (), ("address",)),
        FunctionDescriptor("lastWinner", (), ("address",)),
        FunctionDescriptor("winnerOf", ("uint256",), ("address",)),
        FunctionDescriptor("getWinnerOf", ("uint256",), ("address",)),
    ),
)

START_ROUND = CandidateSet(
    name="startNextRound",
    candidates=tuple(
        FunctionDescriptor(name)
        for name in ("start", "startNextRound", "newRound", "openRound")
    ),
)


@dataclass(frozen=True)
class T31State:
    round: int
    pot: int


@dataclass(frozen=True)
class T31Inspection:
    contract: str
    round: int
    pot: int
    is_open: Optional[bool] = None
    winner: Optional[str] = None


class ThirtyOneGame:
    def __init__(
        self,
        client: ChainClient,
        pipeline: Optional[TransactionPipeline] = None,
        resolver: Optional[ProbeResolver] = None,
    ) -> None:
        self.client = client
        self.pipeline = pipeline
        self.resolver = resolver or ProbeResolver(client)

    def current_round(self, contract: str) -> int:
        return read_contract(self.client, contract, CURRENT_ROUND)

    def _round_argument(self, contract: str):
        return lambda: [self.current_round(contract)]

    def pot(self, contract: str) -> int:
        """Pot via ``pot()``, else ``getBalance()``. The second failure propagates."""
        try:
            return read_contract(self.client, contract, POT.candidates[0])
        except ChainError as exc:
            logger.debug("pot() failed on %s, trying getBalance(): %s", contract, exc)
        return read_contract(self.client, contract, POT.candidates[1])

    def pot_smart(self, contract: str) -> int:
        return self.resolver.resolve(contract, POT, self._round_argument(contract))

    def is_open_smart(self, contract: str) -> Optional[bool]:
        return self.resolver.resolve(contract, IS_OPEN)

    def winner_smart(self, contract: str) -> Optional[str]:
        return self.resolver.resolve(contract, WINNER, self._round_argument(contract))

    def state(self, contract: str) -> T31State:
        return T31State(round=self.current_round(contract), pot=self.pot_smart(contract))

    def inspect(self, contract: str) -> T31Inspection:
        """Round, pot, open flag and winner in one pass."""
        return T31Inspection(
            contract=contract,
            round=self.current_round(contract),
            pot=self.pot_smart(contract),
            is_open=self.is_open_smart(contract),
            winner=self.winner_smart(contract),
        )

    def submit(self, contract: str, guess: int) -> str:
        return require_pipeline(self.pipeline).submit(contract, SUBMIT, [guess])

    def start_next_round_smart(self, contract: str) -> str:
        # onlyOwner deployments may reject every candidate.
        return self.resolver.resolve_write(contract, START_ROUND, require_pipeline(self.pipeline))
