"""
cherrydapp CLI

Command-line interface for reading from and transacting with EVM
contracts over JSON-RPC.

Identity = one ECDSA/secp256k1 wallet (PRIVATE_KEY).  Transactions are
legacy (gasPrice) and EIP-155 signed for the configured CHAIN_ID.

Commands:
  whoami    - Show current wallet address
  info      - Show configuration and available commands
  network   - Node connectivity, chain id, block number
  balance   - ETH balance of an address
  erc20     - ERC-20 metadata, balances, approve / transfer
  wallet    - SimpleWallet deposit / withdraw
  t31       - ThirtyOneGame state, inspect, submit, next round
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .commands import Runtime, pass_runtime
from .errors import ConfigError
from .identity import get_account, load_private_key


# ============ Constants ============

VERSION = "0.3.0"


# ============ Banner ============


def _print_banner() -> None:
    border = click.style("  ◆ ═══════════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()
    click.echo(
        click.style("        C H E R R Y D A P P", fg="bright_white", bold=True)
        + click.style(f"    v{VERSION}", dim=True)
    )
    click.secho("        ─── EVM contract console ───", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="cherrydapp")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="dotenv file with RPC_URL / CHAIN_ID / PRIVATE_KEY (default: ~/.cherrydapp/.env)",
)
@click.option("--rpc-url", default=None, help="Override RPC_URL")
@click.option("-v", "--verbose", is_flag=True, help="Log RPC traffic and probe decisions")
@click.pass_context
def cli(ctx: click.Context, env_file: Optional[Path], rpc_url: Optional[str], verbose: bool) -> None:
    """cherrydapp: EVM contract console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    runtime = ctx.ensure_object(Runtime)
    if env_file is not None:
        runtime.env_path = env_file
    if rpc_url is not None:
        runtime.rpc_url = rpc_url
    ctx.call_on_close(runtime.close)

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.erc20 import erc20
from .commands.network import balance, network
from .commands.t31 import t31
from .commands.wallet import wallet

cli.add_command(network)
cli.add_command(balance)
cli.add_command(erc20)
cli.add_command(wallet)
cli.add_command(t31)


# ============ Identity ============


@cli.command()
@pass_runtime
def whoami(runtime: Runtime) -> None:
    """Show current wallet identity."""
    try:
        address = get_account(load_private_key(runtime.env_path)).address
        click.echo(f"Address: {address}")
    except ConfigError as exc:
        click.echo("No wallet found.")
        click.echo(str(exc))
        sys.exit(1)


# ============ Info ============


@cli.command()
@pass_runtime
def info(runtime: Runtime) -> None:
    """Show configuration and available commands."""
    _print_banner()
    config = runtime.config

    click.secho("  Config ─────────────────────────────────", fg="cyan")
    click.echo()

    try:
        address = get_account(load_private_key(runtime.env_path)).address
        click.echo(click.style("  Address:     ", dim=True) + click.style(address, fg="bright_white"))
    except ConfigError:
        click.echo(
            click.style("  Address:     ", dim=True)
            + click.style("not configured", fg="yellow")
            + click.style("  (set PRIVATE_KEY)", dim=True)
        )

    rows = [
        ("RPC URL:     ", config.masked_rpc_url()),
        ("Chain id:    ", str(config.chain_id)),
        ("Token:       ", config.cherry_token or "-"),
        ("Wallet:      ", config.simple_wallet or "-"),
        ("T31 game:    ", config.t31_contract or "-"),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label}", dim=True) + value)

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="cyan")
    click.echo()

    commands = [
        ("network", "Node connectivity and chain id"),
        ("balance", "ETH balance of an address"),
        ("erc20  ", "Token metadata, balances, transfers"),
        ("wallet ", "SimpleWallet deposit / withdraw"),
        ("t31    ", "ThirtyOneGame state and actions"),
        ("whoami ", "Show current wallet address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="cyan")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """cherrydapp CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
