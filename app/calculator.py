from __future__ import annotations

"""
Resistor Network Finder - Calculation Entry Points

The UI and CLI call these functions and nothing deeper.  Input is checked
here, before any enumeration runs, and every failure comes back as a status
dict rather than an exception:

    {'status': 'ok', ...}
    {'status': 'error', 'error': '<kind>', 'message': '<text for the user>'}

Error kinds: invalid_target, no_values, invalid_size, invalid_tolerance,
allocation_failed, invalid_ladder.
"""

import logging
import math
from typing import Iterable

from color_code import all_codes
from config import (
    DEFAULT_TOLERANCE,
    DEFAULT_VREF,
    MAX_AVAILABLE,
    MAX_N,
    TOP_N_CODES,
)
from ladder import ladder_spec
from network_builder import build_networks
from ranking import RankedResults, component_codes, rank_networks
from value_parser import parse_resistor_value

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class CalculatorError(ValueError):
    """Invalid user input, reported back as an error dict."""

    kind = "invalid_input"


class InvalidTargetError(CalculatorError):
    kind = "invalid_target"


class NoAvailableValuesError(CalculatorError):
    kind = "no_values"


class InvalidSizeError(CalculatorError):
    kind = "invalid_size"


class InvalidToleranceError(CalculatorError):
    kind = "invalid_tolerance"


class InvalidLadderError(CalculatorError):
    kind = "invalid_ladder"


def _error(kind: str, message: str) -> dict:
    return {"status": "error", "error": kind, "message": message}


# ---------------------------------------------------------------------------
# Input handling
# ---------------------------------------------------------------------------

def parse_available(labels: Iterable[str]) -> list[float]:
    """Parse value-picker labels into ohms, dropping unusable ones.

    At most MAX_AVAILABLE values are kept.  Labels that parse to zero or a
    negative number are skipped with a warning.
    """
    values: list[float] = []
    for label in labels:
        value = parse_resistor_value(label)
        if value <= 0:
            log.warning("Ignoring resistor label %r (parsed as %g)", label, value)
            continue
        values.append(value)
        if len(values) >= MAX_AVAILABLE:
            break
    return values


def validate_inputs(
    available: list[float],
    target: float,
    tolerance_percent: float,
    max_size: int,
) -> list[float]:
    """Check the finder inputs and return the usable available values.

    Raises:
        InvalidTargetError:     target <= 0 or not a finite number.
        NoAvailableValuesError: no positive value selected.
        InvalidToleranceError:  negative tolerance.
        InvalidSizeError:       max_size < 1.
    """
    if not isinstance(target, (int, float)) or not math.isfinite(target) or target <= 0:
        raise InvalidTargetError("Target resistance must be greater than 0")

    values = [float(v) for v in available if v > 0][:MAX_AVAILABLE]
    if not values:
        raise NoAvailableValuesError("Select at least one resistor value")

    if tolerance_percent < 0 or not math.isfinite(tolerance_percent):
        raise InvalidToleranceError("Tolerance must be zero or a positive percentage")

    if max_size < 1:
        raise InvalidSizeError("Network size must be at least 1 resistor")

    return values


# ---------------------------------------------------------------------------
# Network finder
# ---------------------------------------------------------------------------

def _result_dicts(ranked: RankedResults) -> list[dict]:
    rows = []
    for rank, res in enumerate(ranked.results, start=1):
        rows.append(
            {
                "rank":            rank,
                "expression":      res.expression,
                "resistance":      res.resistance,
                "count":           res.count,
                "error_percent":   res.error_percent,
                "component_codes": component_codes(res.parts) if rank <= TOP_N_CODES else [],
            }
        )
    return rows


def find_networks(
    available: Iterable[float],
    target: float,
    tolerance_percent: float | None = None,
    max_size: int = MAX_N,
) -> dict:
    """Find resistor networks close to *target*.

    Args:
        available:         Resistor values in ohms.
        target:            Target resistance in ohms.
        tolerance_percent: Allowed error in percent; None means DEFAULT_TOLERANCE.
        max_size:          Largest network size (default MAX_N).

    Returns:
        On success::

            {'status': 'ok', 'target', 'tolerance', 'max_size',
             'results': [{'rank', 'expression', 'resistance', 'count',
                          'error_percent', 'component_codes'}, ...],
             'total', 'shown', 'hidden', 'found'}

        On failure an error dict (see module docstring).
    """
    if tolerance_percent is None:
        tolerance_percent = DEFAULT_TOLERANCE

    try:
        values = validate_inputs(list(available), target, tolerance_percent, max_size)
    except CalculatorError as exc:
        log.info("Rejected finder input: %s", exc)
        return _error(exc.kind, str(exc))

    log.info(
        "Searching %d values for %.4g Ω ±%g%% (up to %d resistors)",
        len(values), target, tolerance_percent, max_size,
    )

    try:
        networks = build_networks(values, max_size)
        ranked = rank_networks(networks, target, tolerance_percent)
    except MemoryError:
        log.error("Out of memory while enumerating networks")
        return _error("allocation_failed", "Not enough memory to enumerate networks")

    log.info("Found %d combinations, showing %d", ranked.total, ranked.shown)

    return {
        "status":    "ok",
        "target":    float(target),
        "tolerance": float(tolerance_percent),
        "max_size":  max_size,
        "results":   _result_dicts(ranked),
        "total":     ranked.total,
        "shown":     ranked.shown,
        "hidden":    ranked.hidden,
        "found":     ranked.found,
    }


def find_networks_from_labels(
    labels: Iterable[str],
    target: float,
    tolerance_percent: float | None = None,
    max_size: int = MAX_N,
) -> dict:
    """Like :func:`find_networks`, with the available values given as labels."""
    return find_networks(parse_available(labels), target, tolerance_percent, max_size)


# ---------------------------------------------------------------------------
# R-2R ladder
# ---------------------------------------------------------------------------

def ladder_summary(r: float, bits: int, vref: float | None = None) -> dict:
    """Return the R-2R ladder figures for *r* and *bits* as a dict.

    *vref* of None or <= 0 means DEFAULT_VREF.  Codes for R and 2R are
    included so the ladder can be built from marked parts.

    Returns:
        ``{'status': 'ok', 'r', 'r2', 'bits', 'vref', 'r_count', 'r2_count',
        'lsb', 'full_scale', 'output_impedance', 'r_codes', 'r2_codes',
        'samples': [{'code', 'value', 'voltage'}, ...]}`` or an error dict.
    """
    if vref is None:
        vref = DEFAULT_VREF

    try:
        spec = ladder_spec(r, bits, vref)
    except (TypeError, ValueError) as exc:
        log.info("Rejected ladder input: %s", exc)
        return _error(InvalidLadderError.kind, str(exc))

    return {
        "status":           "ok",
        "r":                spec.r,
        "r2":               spec.r2,
        "bits":             spec.bits,
        "vref":             spec.vref,
        "r_count":          spec.r_count,
        "r2_count":         spec.r2_count,
        "lsb":              spec.lsb,
        "full_scale":       spec.full_scale,
        "output_impedance": spec.output_impedance,
        "r_codes":          all_codes(spec.r),
        "r2_codes":         all_codes(spec.r2),
        "samples": [
            {"code": s.code, "value": s.value, "voltage": s.voltage}
            for s in spec.samples
        ],
    }
