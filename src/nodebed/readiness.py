"""Readiness detection for freshly started nodes"""
import logging
import time
from typing import TYPE_CHECKING

from .exception import NodebedException, ReadinessTimeoutError

if TYPE_CHECKING:
    from .node.base import TestbedNode

logger = logging.getLogger(__name__)


def wait_until_ready(
    node: "TestbedNode",
    *,
    settle_delay: float = 0.1,
    attempts: int = 10,
    interval: float = 0.1,
    strict: bool = False,
) -> str:
    """Block until the node answers an identity query

    Business logic:
    1. Sleep ``settle_delay`` so the daemon can bind its API
    2. Query the node's identity up to ``attempts`` times, sleeping
       ``interval`` after each failure
    3. On the first answer record it as the node's peer id

    Args:
        node: Node whose daemon was just launched
        settle_delay: Initial sleep in seconds
        attempts: Maximum number of identity queries
        interval: Sleep between failed queries in seconds
        strict: Raise instead of returning an empty identity

    Returns:
        The peer id, or "" if the node never answered and ``strict`` is off

    Raises:
        ReadinessTimeoutError: No answer within ``attempts`` and ``strict`` is on
    """
    time.sleep(settle_delay)

    last_error = None
    for attempt in range(1, attempts + 1):
        try:
            peer_id = node.query_identity()
        except NodebedException as e:
            last_error = e
            logger.debug(
                f"get id error for {node.directory} "
                f"(attempt {attempt}/{attempts}): {e.message}, retrying..."
            )
            time.sleep(interval)
            continue

        if peer_id:
            node.peer_id = peer_id
            logger.info(f"Node {node.directory} ready, peer id is {peer_id}")
            return peer_id

        logger.debug(f"Empty identity from {node.directory}, retrying...")
        time.sleep(interval)

    message = (
        f"Node {node.directory} did not answer an identity query "
        f"after {attempts} attempts"
    )
    if last_error is not None:
        message = f"{message}: {last_error.message}"
    if strict:
        raise ReadinessTimeoutError(message)

    logger.warning(message)
    return ""
