"""Ordered failover across storage nodes.

Nodes are tried one at a time in registry order, never in parallel. A
transport failure (refused connection, timeout, malformed address) moves on
to the next node. A completed exchange ends the search unless the caller's
accept predicate declines it.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

import requests

from .errors import NoNodeAvailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def attempt(
    nodes: Iterable[str],
    operation: Callable[[str], T],
    accept: Optional[Callable[[T], bool]] = None,
) -> Tuple[str, T]:
    """Run operation against each node in order until one succeeds.

    Args:
        nodes: Node addresses in priority order
        operation: Called with a node address; raises requests.RequestException
            on transport failure
        accept: Decides whether a completed result is final (default: always)

    Returns:
        (node, result) for the first accepted result

    Raises:
        NoNodeAvailableError: If no node produced an accepted result
    """
    failures: List[Tuple[str, str]] = []
    for node in nodes:
        try:
            result = operation(node)
        except requests.RequestException as e:
            logger.warning("Storage node %s unreachable: %s", node, e)
            failures.append((node, type(e).__name__))
            continue

        if accept is None or accept(result):
            return node, result

        logger.info("Storage node %s declined request, trying next node", node)
        failures.append((node, "declined"))

    raise NoNodeAvailableError(failures)
