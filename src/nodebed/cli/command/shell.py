"""Shell command implementation"""

import click

from ..util import CliContext, reports_errors


@click.command(
    name="shell",
    help="Open $SHELL with the node's data directory and NODE<i> peer ids set",
)
@click.argument("node", type=int)
@click.pass_obj
@reports_errors
def shell(obj: CliContext, node: int):
    nodes = obj.registry.load_all()
    obj.registry.load(node).shell(nodes)
