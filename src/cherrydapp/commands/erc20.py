"""
ERC-20 commands.

The token address comes from --token, or CHERRY_TOKEN_ADDRESS in config.
Amounts are human-readable decimals converted exactly with the token's
on-chain decimals; an amount with too many fractional digits is refused.

Commands:
- meta:          name, symbol, decimals
- balance:       balanceOf(owner)
- allowance:     allowance(owner, spender)
- approve:       approve(spender, amount)
- transfer:      transfer(to, amount)
- transfer-from: transferFrom(from, to, amount)
"""

from __future__ import annotations

from typing import Optional

import click

from ..chain.units import to_human
from ..contracts.erc20 import Erc20
from ..errors import ChainError
from . import Runtime, fail, pass_runtime, report_submission, require_address, wait_options

token_option = click.option(
    "--token", "token_address", default=None,
    help="ERC-20 token contract address (default: CHERRY_TOKEN_ADDRESS)",
)


def _resolve_token(runtime: Runtime, token: Optional[str]) -> str:
    """Priority: --token flag  >  CHERRY_TOKEN_ADDRESS."""
    return require_address(token or runtime.config.cherry_token, "--token", "CHERRY_TOKEN_ADDRESS")


@click.group()
def erc20() -> None:
    """ERC-20 token operations.

    \b
    Examples:
      cherrydapp erc20 meta --token 0xAbC...
      cherrydapp erc20 balance --owner 0x...
      cherrydapp erc20 transfer --to 0x... --amount 5.5
    """


@erc20.command()
@token_option
@pass_runtime
def meta(runtime: Runtime, token_address: Optional[str]) -> None:
    """Show token name, symbol and decimals."""
    token = _resolve_token(runtime, token_address)
    try:
        info = Erc20(runtime.client).meta(token)
    except ChainError as exc:
        fail(exc)

    click.echo(click.style("  Token:    ", dim=True) + token)
    click.echo(click.style("  Name:     ", dim=True) + info.name)
    click.echo(click.style("  Symbol:   ", dim=True) + info.symbol)
    click.echo(click.style("  Decimals: ", dim=True) + str(info.decimals))


@erc20.command()
@token_option
@click.option("--owner", default=None, help="Holder address (default: your address)")
@pass_runtime
def balance(runtime: Runtime, token_address: Optional[str], owner: Optional[str]) -> None:
    """Show a holder's token balance."""
    token = _resolve_token(runtime, token_address)
    service = Erc20(runtime.client)
    try:
        owner = owner or runtime.context.address
        decimals = service.decimals(token)
        raw = service.balance_of(token, owner)
    except ChainError as exc:
        fail(exc)

    click.echo(click.style("  Owner:    ", dim=True) + owner)
    click.echo(click.style("  Raw:      ", dim=True) + str(raw))
    click.echo(click.style("  Decimals: ", dim=True) + str(decimals))
    click.echo(click.style("  Balance:  ", dim=True) + click.style(f"{to_human(raw, decimals):f}", fg="bright_white"))


@erc20.command()
@token_option
@click.option("--owner", required=True, help="Owner address")
@click.option("--spender", required=True, help="Spender address")
@pass_runtime
def allowance(runtime: Runtime, token_address: Optional[str], owner: str, spender: str) -> None:
    """Show how much SPENDER may move on behalf of OWNER."""
    token = _resolve_token(runtime, token_address)
    service = Erc20(runtime.client)
    try:
        decimals = service.decimals(token)
        raw = service.allowance(token, owner, spender)
    except ChainError as exc:
        fail(exc)

    click.echo(click.style("  Raw:       ", dim=True) + str(raw))
    click.echo(click.style("  Allowance: ", dim=True) + f"{to_human(raw, decimals):f}")


def _send(runtime: Runtime, token: str, amount: str, action, wait: bool, timeout: float) -> None:
    service = Erc20(runtime.client, runtime.pipeline)
    try:
        raw = service.to_raw(token, amount)
        click.echo(click.style("  Amount:   ", dim=True) + f"{amount} ({raw} raw)")
        click.echo("  Sending transaction...")
        tx_hash = action(service, raw)
    except ChainError as exc:
        fail(exc)
    report_submission(runtime, tx_hash, wait, timeout)


@erc20.command()
@token_option
@click.option("--spender", required=True, help="Spender address")
@click.option("--amount", required=True, help="Amount in human-readable units (e.g. 1.5)")
@wait_options
@pass_runtime
def approve(
    runtime: Runtime,
    token_address: Optional[str],
    spender: str,
    amount: str,
    wait: bool,
    timeout: float,
) -> None:
    """Approve SPENDER to move tokens from your address."""
    token = _resolve_token(runtime, token_address)
    _send(runtime, token, amount, lambda s, raw: s.approve(token, spender, raw), wait, timeout)


@erc20.command()
@token_option
@click.option("--to", "recipient", required=True, help="Recipient address")
@click.option("--amount", required=True, help="Amount in human-readable units (e.g. 1.5)")
@wait_options
@pass_runtime
def transfer(
    runtime: Runtime,
    token_address: Optional[str],
    recipient: str,
    amount: str,
    wait: bool,
    timeout: float,
) -> None:
    """Transfer tokens from your address."""
    token = _resolve_token(runtime, token_address)
    _send(runtime, token, amount, lambda s, raw: s.transfer(token, recipient, raw), wait, timeout)


@erc20.command("transfer-from")
@token_option
@click.option("--from", "sender", required=True, help="Address the tokens are taken from")
@click.option("--to", "recipient", required=True, help="Recipient address")
@click.option("--amount", required=True, help="Amount in human-readable units (e.g. 1.5)")
@wait_options
@pass_runtime
def transfer_from(
    runtime: Runtime,
    token_address: Optional[str],
    sender: str,
    recipient: str,
    amount: str,
    wait: bool,
    timeout: float,
) -> None:
    """Move tokens between addresses using your allowance."""
    token = _resolve_token(runtime, token_address)
    _send(
        runtime, token, amount,
        lambda s, raw: s.transfer_from(token, sender, recipient, raw),
        wait, timeout,
    )
