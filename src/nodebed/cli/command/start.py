"""Start and restart command implementation"""

import click

from ...exception import AlreadyRunningError
from ...process import is_alive, read_pid, remove_pid
from ..util import CliContext, console, parse_node_range, reports_errors, split_selector


def _start_nodes(obj: CliContext, selector: str, args: tuple) -> None:
    registry = obj.registry
    nodes = registry.load_all()

    for i in parse_node_range(selector, len(nodes)):
        node = nodes[i]
        try:
            node.start(args)
        except AlreadyRunningError as e:
            console.print(f"[yellow]Node {i} already running (pid {e.pid}), skipping[/yellow]")
            continue

        registry.update(i, node)
        if node.peer_id:
            console.print(f"Started node {i}, pid = {node.pid()}, peer id = {node.peer_id}")
        else:
            console.print(
                f"[yellow]Started node {i}, pid = {node.pid()}, "
                f"but it did not report a peer id[/yellow]"
            )


@click.command(
    name="start",
    help="Start nodes; arguments after -- go to the daemon",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("nodes", default="all")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@reports_errors
def start(obj: CliContext, nodes: str, args: tuple):
    nodes, args = split_selector(nodes, args)
    _start_nodes(obj, nodes, args)


@click.command(
    name="restart",
    help="Kill then start nodes; arguments after -- go to the daemon",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("nodes", default="all")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@reports_errors
def restart(obj: CliContext, nodes: str, args: tuple):
    nodes, args = split_selector(nodes, args)
    all_nodes = obj.registry.load_all()
    for i in parse_node_range(nodes, len(all_nodes)):
        node = all_nodes[i]
        if is_alive(node.directory):
            node.kill()
            console.print(f"Killed node {i}")
        elif read_pid(node.directory) is not None:
            remove_pid(node.directory)
    _start_nodes(obj, nodes, args)
