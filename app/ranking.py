from __future__ import annotations

"""
Resistor Network Finder - Result Filtering and Ranking

Filters enumerated networks against a target resistance and tolerance and
orders the survivors by relative error, fewest resistors first on ties.
Also prepares the per-component codes shown under the best results.
"""

import logging
from dataclasses import dataclass, field
from itertools import islice

from color_code import all_codes
from config import MAX_NETWORKS, MAX_RESULTS, PART_EPSILON
from network_builder import Network, iter_networks

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """A network that landed within tolerance of the target."""

    network: Network
    relative_error: float

    @property
    def resistance(self) -> float:
        return self.network.resistance

    @property
    def count(self) -> int:
        return self.network.count

    @property
    def expression(self) -> str:
        return self.network.expression

    @property
    def parts(self) -> tuple[float, ...]:
        return self.network.parts

    @property
    def error_percent(self) -> float:
        return self.relative_error * 100.0

    def sort_key(self) -> tuple[float, int]:
        return (self.relative_error, self.count)


@dataclass(frozen=True)
class RankedResults:
    """Best matches in display order plus the true number of matches.

    ``results`` holds at most ``max_results`` entries; ``total`` counts every
    match collected, so ``hidden`` is what a caller reports as "N more".
    """

    results: list[Result] = field(default_factory=list)
    total: int = 0

    @property
    def found(self) -> bool:
        return self.total > 0

    @property
    def shown(self) -> int:
        return len(self.results)

    @property
    def hidden(self) -> int:
        return self.total - len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


def relative_error(resistance: float, target: float) -> float:
    """|resistance - target| / target; *target* must be positive."""
    return abs(resistance - target) / target


def _matches(networks: dict[int, list[Network]], target: float, tol: float):
    for net in iter_networks(networks):
        err = relative_error(net.resistance, target)
        if err <= tol:
            yield Result(network=net, relative_error=err)


def rank_networks(
    networks: dict[int, list[Network]],
    target: float,
    tolerance_percent: float,
    max_results: int = MAX_RESULTS,
    max_matches: int = MAX_NETWORKS,
) -> RankedResults:
    """Return the networks within *tolerance_percent* of *target*, best first.

    Networks are scanned in size order; at most *max_matches* matches are
    collected (later ones are dropped without error), then sorted by
    ``(relative_error, count)`` and cut to *max_results*.

    Args:
        networks:          Output of ``network_builder.build_networks``.
        target:            Target resistance in ohms, > 0.
        tolerance_percent: Allowed relative error in percent.
        max_results:       Number of results kept for display.
        max_matches:       Number of matches collected before sorting.

    Raises:
        ValueError: If *target* is not positive.
    """
    if not target > 0:
        raise ValueError(f"target must be greater than 0, got {target!r}")

    tol = tolerance_percent / 100.0

    collected = list(islice(_matches(networks, target, tol), max_matches))
    collected.sort(key=Result.sort_key)

    log.debug(
        "target %.4g Ω ±%g%%: %d matches, showing %d",
        target, tolerance_percent, len(collected), min(len(collected), max_results),
    )
    return RankedResults(results=collected[:max_results], total=len(collected))


# ---------------------------------------------------------------------------
# Component codes
# ---------------------------------------------------------------------------

def unique_parts(parts, epsilon: float = PART_EPSILON) -> list[float]:
    """Return *parts* in first-seen order, skipping near-duplicates.

    Two values closer than *epsilon* ohms count as the same component, so a
    network of four 100 Ω resistors lists 100 Ω once.
    """
    seen: list[float] = []
    for value in parts:
        if any(abs(s - value) < epsilon for s in seen):
            continue
        seen.append(value)
    return seen


def component_codes(parts, epsilon: float = PART_EPSILON) -> list[dict]:
    """Return the code dict (``value``, ``four_band``, ``five_band``, ``smd``) per unique part."""
    return [all_codes(value) for value in unique_parts(parts, epsilon)]
