"""
Commands - click command groups for the cherrydapp CLI.

- network: node health, block number, ETH balance
- erc20:   token metadata, balances, approve / transfer
- wallet:  SimpleWallet deposit / withdraw
- t31:     ThirtyOneGame state, inspect, submit, next round

Every command shares one lazily-built ``Runtime`` (config, client,
signing identity) stored on the click context.
"""

from __future__ import annotations

import dataclasses
import sys
from functools import cached_property
from pathlib import Path
from typing import NoReturn, Optional

import click

from ..chain.receipts import ReceiptPoller
from ..chain.rpc import ChainClient
from ..chain.tx import TransactionPipeline
from ..config import ChainConfig, load_config
from ..errors import ChainError, ConfigError
from ..identity import ChainContext, build_context


class Runtime:
    def __init__(self, env_path: Optional[Path] = None, rpc_url: Optional[str] = None) -> None:
        self.env_path = env_path
        self.rpc_url = rpc_url

    @cached_property
    def config(self) -> ChainConfig:
        try:
            config = load_config(self.env_path)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc
        if self.rpc_url:
            config = dataclasses.replace(config, rpc_url=self.rpc_url)
        return config

    @cached_property
    def client(self) -> ChainClient:
        return ChainClient(self.config)

    @cached_property
    def context(self) -> ChainContext:
        try:
            return build_context(env_path=self.env_path, config=self.config)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc

    @cached_property
    def pipeline(self) -> TransactionPipeline:
        return TransactionPipeline(self.client, self.context)

    @cached_property
    def poller(self) -> ReceiptPoller:
        return ReceiptPoller(self.client)

    def close(self) -> None:
        if "client" in self.__dict__:
            self.client.close()


pass_runtime = click.make_pass_decorator(Runtime)


def fail(exc: Exception) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(1)


def require_address(value: Optional[str], option: str, env_name: str) -> str:
    if value:
        return value
    raise click.UsageError(f"No address given. Use {option} <address> or set {env_name}.")


def wait_options(func):
    func = click.option("--timeout", default=120.0, type=float, show_default=True,
                        help="Receipt wait timeout in seconds")(func)
    func = click.option("--wait/--no-wait", default=True, show_default=True,
                        help="Wait for the transaction to be mined")(func)
    return func


def report_submission(runtime: Runtime, tx_hash: str, wait: bool, timeout: float) -> None:
    """Print the tx hash and, when waiting, the mined status. Exits 1 on revert."""
    click.echo(click.style("  TX:       ", dim=True) + tx_hash)
    click.echo(click.style("  Explorer: ", dim=True) + runtime.config.explorer_link(tx_hash))
    if not wait:
        return

    click.echo("  Waiting for receipt...")
    try:
        receipt = runtime.poller.wait(tx_hash, timeout=timeout)
    except ChainError as exc:
        fail(exc)

    if receipt is None:
        click.secho(f"  Not mined within {timeout:g}s (still pending)", fg="yellow")
    elif receipt.status is None:
        click.secho(f"  MINED: block {receipt.block_number}, status unknown (no status field)", fg="yellow")
    elif receipt.status_ok:
        click.secho(f"  SUCCESS: mined in block {receipt.block_number}", fg="green")
    else:
        click.secho(f"  FAILED: reverted in block {receipt.block_number}", fg="red")
        sys.exit(1)
