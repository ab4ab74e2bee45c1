"""CLI utility functions"""

import functools
import re
from dataclasses import dataclass
from typing import List, Tuple

import click
from rich.console import Console
from rich.markup import escape

from ..config import Settings
from ..exception import NodebedException
from ..registry import NodeRegistry

console = Console()
err_console = Console(stderr=True)

_RANGE_ITEM = re.compile(r"^(\d+)(?:-(\d+))?$")


@dataclass
class CliContext:
    """Objects shared by all commands through ``click.Context.obj``"""
    settings: Settings
    registry: NodeRegistry


def parse_node_range(selector: str, count: int) -> List[int]:
    """Parse a node selector into sorted node indices

    Accepted forms: ``all``, ``3``, ``0-4``, ``[0,2,5-7]``.

    Args:
        selector: Selector text
        count: Number of nodes in the testbed

    Returns:
        Sorted, de-duplicated indices

    Raises:
        click.BadParameter: Malformed selector or index out of range
    """
    selector = selector.strip()
    if selector == "all":
        return list(range(count))

    if selector.startswith("[") and selector.endswith("]"):
        selector = selector[1:-1]

    indices = set()
    for item in selector.split(","):
        match = _RANGE_ITEM.match(item.strip())
        if not match:
            raise click.BadParameter(f"invalid node selector: {item!r}")
        low = int(match.group(1))
        high = int(match.group(2)) if match.group(2) else low
        if high < low:
            raise click.BadParameter(f"invalid node range: {item!r}")
        indices.update(range(low, high + 1))

    out_of_range = [i for i in indices if i >= count]
    if out_of_range:
        raise click.BadParameter(
            f"node {min(out_of_range)} does not exist, testbed has {count} nodes"
        )
    return sorted(indices)


def split_selector(nodes: str, args: tuple) -> Tuple[str, tuple]:
    """Separate the node selector from daemon arguments

    Click hands the first token after ``--`` to the optional selector
    argument, so ``start -- --offline`` arrives as ``nodes="--offline"``.
    Anything that cannot begin a selector is moved back in front of the
    daemon arguments and the selector falls back to ``all``.
    """
    text = nodes.strip()
    if text == "all" or text[:1].isdigit() or text.startswith("["):
        return nodes, args
    return "all", (nodes, *args)


def reports_errors(func):
    """Print nodebed errors in red and abort instead of showing a traceback"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NodebedException as e:
            err_console.print(f"[red]Error: {escape(e.message)}[/red]", soft_wrap=True)
            raise click.Abort()

    return wrapper
