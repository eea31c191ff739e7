"""
ThirtyOneGame commands.

The game address comes from --contract, or T31_CONTRACT_ADDRESS.
Pot, open flag and winner are probed across known function names;
unknown values are shown as such rather than failing the command.
"""

from __future__ import annotations

from typing import Optional

import click

from ..contracts.t31 import ThirtyOneGame
from ..errors import ChainError
from . import Runtime, fail, pass_runtime, report_submission, require_address, wait_options

contract_option = click.option(
    "--contract", "contract_address", default=None,
    help="ThirtyOneGame contract address (default: T31_CONTRACT_ADDRESS)",
)


def _resolve_contract(runtime: Runtime, contract: Optional[str]) -> str:
    return require_address(contract or runtime.config.t31_contract, "--contract", "T31_CONTRACT_ADDRESS")


@click.group()
def t31() -> None:
    """ThirtyOneGame operations."""


@t31.command()
@contract_option
@pass_runtime
def state(runtime: Runtime, contract_address: Optional[str]) -> None:
    """Show current round and pot."""
    contract = _resolve_contract(runtime, contract_address)
    try:
        current = ThirtyOneGame(runtime.client).state(contract)
    except ChainError as exc:
        fail(exc)

    click.echo(f"  Contract: {contract}")
    click.echo(f"  Round:    {current.round}")
    click.echo(f"  Pot:      {current.pot} (raw)")


@t31.command()
@contract_option
@pass_runtime
def inspect(runtime: Runtime, contract_address: Optional[str]) -> None:
    """Show round, pot, open flag and winner."""
    contract = _resolve_contract(runtime, contract_address)
    try:
        info = ThirtyOneGame(runtime.client).inspect(contract)
    except ChainError as exc:
        fail(exc)

    click.echo(f"  Contract: {info.contract}")
    click.echo(f"  Round:    {info.round}")
    click.echo(f"  Pot:      {info.pot} (raw)")
    click.echo(f"  Open:     {'unknown' if info.is_open is None else info.is_open}")
    click.echo(f"  Winner:   {info.winner or 'unknown'}")


@t31.command()
@contract_option
@click.option("--guess", required=True, type=click.IntRange(min=0), help="Guess to submit")
@wait_options
@pass_runtime
def submit(
    runtime: Runtime,
    contract_address: Optional[str],
    guess: int,
    wait: bool,
    timeout: float,
) -> None:
    """Submit a guess for the current round."""
    contract = _resolve_contract(runtime, contract_address)
    try:
        click.echo(f"  Submitting guess {guess} to {contract}...")
        tx_hash = ThirtyOneGame(runtime.client, runtime.pipeline).submit(contract, guess)
    except ChainError as exc:
        fail(exc)
    report_submission(runtime, tx_hash, wait, timeout)


@t31.command("next-round")
@contract_option
@wait_options
@pass_runtime
def next_round(
    runtime: Runtime,
    contract_address: Optional[str],
    wait: bool,
    timeout: float,
) -> None:
    """Start the next round (may be owner-only on some deployments)."""
    contract = _resolve_contract(runtime, contract_address)
    try:
        click.echo(f"  Starting next round on {contract}...")
        tx_hash = ThirtyOneGame(runtime.client, runtime.pipeline).start_next_round_smart(contract)
    except ChainError as exc:
        fail(exc)
    report_submission(runtime, tx_hash, wait, timeout)
