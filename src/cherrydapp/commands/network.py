"""Network commands: node health and plain ETH balance."""

from __future__ import annotations

import click

from ..chain.units import wei_to_ether
from ..contracts.network import Network
from ..errors import ChainError
from . import Runtime, fail, pass_runtime


@click.command()
@pass_runtime
def network(runtime: Runtime) -> None:
    """Show node connectivity, chain id and latest block."""
    net = Network(runtime.client)
    health = net.health()

    click.echo("=== Network ===")
    click.echo("")
    status = click.style("yes", fg="green") if health.connected else click.style("no", fg="red")
    click.echo(f"  Connected:        {status}")
    click.echo(f"  RPC URL:          {health.rpc_url_masked}")
    click.echo(f"  RPC host:         {health.rpc_host}")
    click.echo(f"  Client:           {net.client_version() or '(unknown)'}")
    click.echo(f"  Chain id (cfg):   {health.configured_chain_id}")
    click.echo(f"  Chain id (node):  {health.chain_id_hex}")
    click.echo(f"  Block number:     {net.block_number()}")

    node_chain_id = int(health.chain_id_hex, 16)
    if node_chain_id and node_chain_id != health.configured_chain_id:
        click.echo("")
        click.secho(
            "  WARNING: node chain id differs from CHAIN_ID; signed transactions will be rejected.",
            fg="yellow",
        )


@click.command()
@click.argument("address")
@pass_runtime
def balance(runtime: Runtime, address: str) -> None:
    """Show the ETH balance of ADDRESS."""
    net = Network(runtime.client)
    try:
        wei = net.balance_wei(address)
    except ChainError as exc:
        fail(exc)

    click.echo(f"  Address: {address}")
    click.echo(f"  Wei:     {wei}")
    click.echo(f"  ETH:     {wei_to_ether(wei):f}")
