"""Bandwidth counters reported by a running daemon"""
import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exception import CommandFailedError

if TYPE_CHECKING:
    from .node.base import TestbedNode


class BandwidthStats(BaseModel):
    """Totals and rates as printed by ``stats bw --enc=json``"""
    model_config = ConfigDict(populate_by_name=True)

    total_in: int = Field(alias="TotalIn")
    total_out: int = Field(alias="TotalOut")
    rate_in: float = Field(default=0.0, alias="RateIn")
    rate_out: float = Field(default=0.0, alias="RateOut")


def get_bandwidth(node: "TestbedNode") -> BandwidthStats:
    """Query a node's bandwidth counters

    Raises:
        CommandFailedError: Query failed or returned unexpected output
    """
    output = node.run_command(node.bin_name, "stats", "bw", "--enc=json")
    try:
        return BandwidthStats.model_validate(json.loads(output))
    except (json.JSONDecodeError, ValidationError) as e:
        raise CommandFailedError(
            f"Unexpected bandwidth output from {node.directory}: {e}",
            stdout=output,
        )
