"""Status command implementation"""

import click
from rich.table import Table

from ...exception import CorruptStateError
from ..util import CliContext, console, parse_node_range, reports_errors


@click.command(name="status", help="Show pid, liveness and peer id of nodes")
@click.argument("nodes", default="all")
@click.pass_obj
@reports_errors
def status(obj: CliContext, nodes: str):
    all_nodes = obj.registry.load_all()

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("type")
    table.add_column("dir", overflow="fold")
    table.add_column("pid", justify="right")
    table.add_column("alive", no_wrap=True, min_width=5)
    table.add_column("peer id")

    for i in parse_node_range(nodes, len(all_nodes)):
        node = all_nodes[i]
        try:
            pid = node.pid()
            alive = "[green]yes[/green]" if node.is_alive() else "no"
        except CorruptStateError:
            pid = None
            alive = "[red]corrupt pid file[/red]"
        table.add_row(
            str(i),
            node.node_type.value,
            str(node.directory),
            str(pid) if pid is not None else "-",
            alive,
            node.peer_id or "-",
        )

    console.print(table)
