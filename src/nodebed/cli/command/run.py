"""Run command implementation"""

import click

from ..util import CliContext, reports_errors


@click.command(
    name="run",
    help="Run a command with a node's environment, e.g. nodebed run 0 -- ipfs id",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("node", type=int)
@click.argument("cmd", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
@reports_errors
def run(obj: CliContext, node: int, cmd: tuple):
    output = obj.registry.load(node).run_command(*cmd)
    click.echo(output, nl=False)
