from __future__ import annotations

"""
Resistor Network Finder - Series/Parallel Network Enumeration

Builds every series/parallel network of up to ``max_size`` resistors from a
set of available values, bottom-up by network size:

    size 1 : one network per available value
    size n : for every split i + j = n, combine each network of size i with
             each network of size j, once in series (a + b) and once in
             parallel (a ∥ b)

Each size bucket is a plain list capped at ``max_networks`` entries.  Once a
bucket is full the remaining candidates for that size are dropped without
error; the cap bounds memory and runtime, it does not guarantee the search
is complete for large value sets.
"""

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Iterator

from config import MAX_N, MAX_NETWORKS, MAX_PARTS

log = logging.getLogger(__name__)

SERIES_OP   = "+"
PARALLEL_OP = "∥"


# ---------------------------------------------------------------------------
# Network value type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Network:
    """One way of combining resistors.

    Attributes:
        resistance: Equivalent resistance in ohms.
        count:      Number of individual resistors used.
        expression: Fully parenthesised topology, e.g. ``'(100.00 ∥ 220.00)'``.
        parts:      Individual resistor values in construction order, at most
                    MAX_PARTS long (extra parts are not tracked).
    """

    resistance: float
    count: int
    expression: str
    parts: tuple[float, ...]

    @classmethod
    def single(cls, ohms: float) -> "Network":
        return cls(resistance=ohms, count=1, expression=f"{ohms:.2f}", parts=(ohms,))

    def series(self, other: "Network") -> "Network":
        """Return ``self + other``."""
        return Network(
            resistance=self.resistance + other.resistance,
            count=self.count + other.count,
            expression=f"({self.expression} {SERIES_OP} {other.expression})",
            parts=_merge_parts(self.parts, other.parts),
        )

    def parallel(self, other: "Network") -> "Network":
        """Return ``self ∥ other``.

        Raises:
            ValueError: If either side is not strictly positive.
        """
        if self.resistance <= 0 or other.resistance <= 0:
            raise ValueError("parallel combination needs two positive resistances")
        return Network(
            resistance=1.0 / ((1.0 / self.resistance) + (1.0 / other.resistance)),
            count=self.count + other.count,
            expression=f"({self.expression} {PARALLEL_OP} {other.expression})",
            parts=_merge_parts(self.parts, other.parts),
        )


def _merge_parts(left: tuple[float, ...], right: tuple[float, ...]) -> tuple[float, ...]:
    return (left + right)[:MAX_PARTS]


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------

def _combinations(
    bucket_i: list[Network],
    bucket_j: list[Network],
    same_bucket: bool,
) -> Iterator[Network]:
    """Yield series then parallel networks for every (a, b) pair.

    When both operands come from the same bucket, ``b`` starts at ``a``'s
    index so each unordered pair is visited once.
    """
    for ia, a in enumerate(bucket_i):
        start = ia if same_bucket else 0
        for b in islice(bucket_j, start, None):
            yield a.series(b)
            if a.resistance > 0 and b.resistance > 0:
                yield a.parallel(b)


def _candidates(size: int, networks: dict[int, list[Network]]) -> Iterator[Network]:
    """Yield every size-*size* candidate, split by split (i = 1 .. size-1)."""
    for i in range(1, size):
        j = size - i
        yield from _combinations(networks[i], networks[j], same_bucket=(i == j))


def build_networks(
    available: Iterable[float],
    max_size: int = MAX_N,
    max_networks: int = MAX_NETWORKS,
) -> dict[int, list[Network]]:
    """Enumerate series/parallel networks of 1..*max_size* resistors.

    Args:
        available:    Resistor values in ohms.  Order is kept; values are
                      expected to be positive (the caller filters them).
        max_size:     Largest network size to build (default MAX_N).
        max_networks: Cap on networks kept per size (default MAX_NETWORKS).

    Returns:
        Mapping ``size -> list[Network]`` with a (possibly empty) list for
        every size from 1 to *max_size*.  All networks in bucket ``k`` use
        exactly ``k`` resistors.

    Raises:
        ValueError: If *max_size* or *max_networks* is less than 1.
    """
    if max_size < 1:
        raise ValueError(f"max_size must be at least 1, got {max_size}")
    if max_networks < 1:
        raise ValueError(f"max_networks must be at least 1, got {max_networks}")

    networks: dict[int, list[Network]] = {
        1: [Network.single(float(v)) for v in islice(available, max_networks)]
    }

    for size in range(2, max_size + 1):
        # Each bucket reads only strictly smaller buckets, so it can be
        # produced in one pass and never touched again.
        bucket = list(islice(_candidates(size, networks), max_networks))
        networks[size] = bucket
        if len(bucket) == max_networks:
            log.debug("size %d: bucket full at %d networks, rest dropped", size, max_networks)

    for size, bucket in networks.items():
        log.debug("size %d: %d networks", size, len(bucket))

    return networks


def iter_networks(networks: dict[int, list[Network]]) -> Iterator[Network]:
    """Yield every network in ascending size order."""
    for size in sorted(networks):
        yield from networks[size]
