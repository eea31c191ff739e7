"""
SimpleWallet commands.

The wallet address comes from --wallet, or SIMPLE_WALLET_ADDRESS in config.
Depositing pulls tokens with transferFrom, so approve the wallet first
(``cherrydapp erc20 approve --spender <wallet>``).
"""

from __future__ import annotations

from typing import Optional

import click

from ..contracts.erc20 import Erc20
from ..contracts.simple_wallet import SimpleWallet
from ..errors import ChainError
from . import Runtime, fail, pass_runtime, report_submission, require_address, wait_options


def _move(
    runtime: Runtime,
    direction: str,
    token: str,
    amount: str,
    wallet_address: Optional[str],
    wait: bool,
    timeout: float,
) -> None:
    wallet_address = require_address(
        wallet_address or runtime.config.simple_wallet, "--wallet", "SIMPLE_WALLET_ADDRESS"
    )
    try:
        raw = Erc20(runtime.client).to_raw(token, amount)
        wallet = SimpleWallet(runtime.pipeline)
        click.echo(click.style("  Wallet: ", dim=True) + wallet_address)
        click.echo(click.style("  Token:  ", dim=True) + token)
        click.echo(click.style("  Amount: ", dim=True) + f"{amount} ({raw} raw)")
        click.echo("  Sending transaction...")
        if direction == "deposit":
            tx_hash = wallet.deposit_erc20(wallet_address, token, raw)
        else:
            tx_hash = wallet.withdraw_erc20(wallet_address, token, raw)
    except ChainError as exc:
        fail(exc)
    report_submission(runtime, tx_hash, wait, timeout)


@click.group()
def wallet() -> None:
    """SimpleWallet ERC-20 custody."""


@wallet.command()
@click.option("--token", required=True, help="ERC-20 token address")
@click.option("--amount", required=True, help="Amount in human-readable units")
@click.option("--wallet", "wallet_address", default=None,
              help="SimpleWallet address (default: SIMPLE_WALLET_ADDRESS)")
@wait_options
@pass_runtime
def deposit(
    runtime: Runtime,
    token: str,
    amount: str,
    wallet_address: Optional[str],
    wait: bool,
    timeout: float,
) -> None:
    """Deposit tokens into the SimpleWallet."""
    _move(runtime, "deposit", token, amount, wallet_address, wait, timeout)


@wallet.command()
@click.option("--token", required=True, help="ERC-20 token address")
@click.option("--amount", required=True, help="Amount in human-readable units")
@click.option("--wallet", "wallet_address", default=None,
              help="SimpleWallet address (default: SIMPLE_WALLET_ADDRESS)")
@wait_options
@pass_runtime
def withdraw(
    runtime: Runtime,
    token: str,
    amount: str,
    wallet_address: Optional[str],
    wait: bool,
    timeout: float,
) -> None:
    """Withdraw tokens from the SimpleWallet."""
    _move(runtime, "withdraw", token, amount, wallet_address, wait, timeout)
