"""nodebed CLI entry point"""

import click

from ..config import get_settings
from ..logging import setup_logging
from ..registry import NodeRegistry
from .command.attr import get, set_
from .command.init import init
from .command.kill import kill
from .command.run import run
from .command.shell import shell
from .command.start import restart, start
from .command.status import status
from .util import CliContext


@click.group(
    name="nodebed",
    help="nodebed - local testbed of peer-to-peer daemons",
)
@click.option(
    "--path",
    type=click.Path(file_okay=False),
    envvar="NODEBED_PATH",
    default=None,
    help="Testbed directory (default: ~/testbed)",
)
@click.pass_context
def main(ctx: click.Context, path: str = None):
    """Main CLI entry point"""
    settings = get_settings(path)
    setup_logging(settings.testbed_path, settings.log_level)
    ctx.obj = CliContext(
        settings=settings,
        registry=NodeRegistry(settings.testbed_path, settings),
    )


# Register commands
main.add_command(init)
main.add_command(start)
main.add_command(restart)
main.add_command(kill)
main.add_command(status)
main.add_command(get)
main.add_command(set_)
main.add_command(run)
main.add_command(shell)


if __name__ == "__main__":
    main()
