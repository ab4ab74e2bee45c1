"""Init command implementation"""

import click

from ...enum import NodeType
from ...node import DEFAULT_API_PORT
from ..util import CliContext, console, reports_errors


@click.command(name="init", help="Create a testbed of N nodes")
@click.option("--count", "-n", type=int, required=True, help="Number of nodes")
@click.option(
    "--type",
    "node_type",
    type=click.Choice([t.value for t in NodeType]),
    default=NodeType.IPFS.value,
    show_default=True,
    help="Daemon flavor",
)
@click.option(
    "--base-port",
    type=int,
    default=DEFAULT_API_PORT,
    show_default=True,
    help="API port of node 0 (filecoin), node i gets base-port + i",
)
@click.option("--force", "-f", is_flag=True, help="Replace an existing testbed")
@click.pass_obj
@reports_errors
def init(obj: CliContext, count: int, node_type: str, base_port: int, force: bool):
    """Create the node directories and bootstrap each node"""
    registry = obj.registry
    console.print(f"Initializing {count} {node_type} nodes at {registry.root}")

    nodes = registry.create(count, node_type, base_port=base_port, force=force)
    for i, node in enumerate(nodes):
        node.init()
        console.print(f"  node {i}: {node.directory} {node.peer_id}".rstrip())

    # init may have discovered peer ids
    registry.save(nodes)
    console.print("[green]✓ Testbed initialized[/green]")
