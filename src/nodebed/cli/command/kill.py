"""Kill command implementation"""

import click

from ...process import is_alive, read_pid, remove_pid
from ..util import CliContext, console, parse_node_range, reports_errors


@click.command(name="kill", help="Stop nodes, escalating from SIGINT to SIGKILL")
@click.argument("nodes", default="all")
@click.pass_obj
@reports_errors
def kill(obj: CliContext, nodes: str):
    all_nodes = obj.registry.load_all()

    for i in parse_node_range(nodes, len(all_nodes)):
        node = all_nodes[i]
        pid = read_pid(node.directory)
        if pid is None:
            console.print(f"[yellow]Node {i} not running[/yellow]")
            continue
        if not is_alive(node.directory):
            remove_pid(node.directory)
            console.print(f"[yellow]Node {i} was not running, removed stale pid file[/yellow]")
            continue

        console.print(f"Stopping node {i} (pid {pid})...")
        node.kill()
        console.print(f"[green]✓ Node {i} stopped[/green]")
