"""Get/set attribute command implementation"""

import click

from ..util import CliContext, reports_errors


@click.command(name="get", help="Print an attribute of a node (id, path, bw_in, bw_out, api_port)")
@click.argument("attr")
@click.argument("node", type=int)
@click.pass_obj
@reports_errors
def get(obj: CliContext, attr: str, node: int):
    click.echo(obj.registry.load(node).get_attr(attr))


@click.command(name="set", help="Set an attribute of a node")
@click.argument("attr")
@click.argument("value")
@click.argument("node", type=int)
@click.pass_obj
@reports_errors
def set_(obj: CliContext, attr: str, value: str, node: int):
    obj.registry.load(node).set_attr(attr, value)
