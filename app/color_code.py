from __future__ import annotations

"""
Resistor Network Finder - Resistance to Code Conversion

Maps a resistance value to its standard identification codes:

    four_band_code       – 2 significant digits + multiplier + Gold (5 %)
    five_band_code       – 3 significant digits + multiplier + Brown (1 %)
    smd_code             – 3-digit SMD marking, or R-notation below 10 Ω
    resistance_to_bands  – 4-band code as band dicts (name + rgb) for drawing
    bands_to_description – band list → human-readable string

Codes only standardise magnitudes from 1 Ω to 9.1 GΩ; values outside that
range saturate at the boundary colour instead of failing.  Non-positive
input returns INVALID_CODE.
"""

import math

from resistor_constants import (
    COLOR_NAMES,
    COLOR_RGB,
    FIVE_BAND_TOLERANCE,
    FOUR_BAND_TOLERANCE,
    TOLERANCE_BANDS,
)

INVALID_CODE = "(invalid)"

# Multiplier exponent range that has a band colour (10^0 .. 10^9).
_EXP_MIN = 0
_EXP_MAX = 9


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_valid(ohms: float) -> bool:
    return isinstance(ohms, (int, float)) and math.isfinite(ohms) and ohms > 0


def _round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero (x >= 0)."""
    return int(math.floor(x + 0.5))


def _clamp(value: int, lo: int = _EXP_MIN, hi: int = _EXP_MAX) -> int:
    return max(lo, min(hi, value))


def _normalise(ohms: float, digits: int) -> tuple[int, int]:
    """Return (significand, exponent) with ``significand`` holding *digits* digits.

    The exponent is clamped to the colour-code range before and after the
    rounding fix-ups, so significand * 10**exponent only approximates *ohms*
    at the extremes.
    """
    low = 10 ** (digits - 1)
    high = 10 ** digits

    exp10 = _clamp(math.floor(math.log10(ohms)) - (digits - 1))
    sig = _round_half_up(ohms / 10 ** exp10)

    # Rounding edge cases (e.g. 99.96 rounds up to 100).
    if sig >= high:
        sig //= 10
        exp10 += 1
    if sig < low:
        sig *= 10
        exp10 -= 1

    return sig, _clamp(exp10)


def _digit_name(digit: int) -> str:
    return COLOR_NAMES[_clamp(digit)]


def _format_value(ohms: float) -> str:
    """Format *ohms* as a compact SI string (Ω / kΩ / MΩ / GΩ), stripping '.0'."""
    if ohms >= 1_000_000_000:
        scaled, unit = ohms / 1_000_000_000, "GΩ"
    elif ohms >= 1_000_000:
        scaled, unit = ohms / 1_000_000, "MΩ"
    elif ohms >= 1_000:
        scaled, unit = ohms / 1_000, "kΩ"
    else:
        scaled, unit = ohms, "Ω"

    formatted = f"{scaled:.1f}"
    if formatted.endswith(".0"):
        formatted = formatted[:-2]
    return f"{formatted}{unit}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def four_band_code(ohms: float) -> str:
    """Return the 4-band colour code of *ohms*, e.g. ``'Yellow-Violet-Red-Gold'``."""
    if not _is_valid(ohms):
        return INVALID_CODE

    sig2, exp10 = _normalise(ohms, 2)
    d1, d2 = sig2 // 10, sig2 % 10
    return "-".join(
        (_digit_name(d1), _digit_name(d2), COLOR_NAMES[exp10], FOUR_BAND_TOLERANCE)
    )


def five_band_code(ohms: float) -> str:
    """Return the 5-band colour code of *ohms*, e.g. ``'Yellow-Violet-Black-Brown-Brown'``."""
    if not _is_valid(ohms):
        return INVALID_CODE

    sig3, exp10 = _normalise(ohms, 3)
    d1, d2, d3 = sig3 // 100, (sig3 // 10) % 10, sig3 % 10
    return "-".join(
        (
            _digit_name(d1),
            _digit_name(d2),
            _digit_name(d3),
            COLOR_NAMES[exp10],
            FIVE_BAND_TOLERANCE,
        )
    )


def smd_code(ohms: float) -> str:
    """Return the SMD marking of *ohms*.

    Below 10 Ω the R-notation is used (``4.7`` → ``'4R7'``); otherwise the
    3-digit form XYZ = XY × 10^Z (``4700`` → ``'472'``).
    """
    if not _is_valid(ohms):
        return INVALID_CODE

    if ohms < 10.0:
        whole = int(ohms)
        frac = _round_half_up((ohms - whole) * 10) % 10
        return f"{whole}R{frac}"

    sig, exp10 = _normalise(ohms, 2)
    return f"{sig}{exp10}"


def resistance_to_bands(ohms: float) -> list[dict]:
    """Convert *ohms* to a list of 4 band dicts for drawing.

    Band layout:
        [0] First significant digit   {'digit', 'name', 'rgb'}
        [1] Second significant digit  {'digit', 'name', 'rgb'}
        [2] Multiplier                {'digit', 'name', 'rgb'}
        [3] Tolerance (Gold, 5 %)     {'name', 'rgb', 'tolerance'}

    Returns an empty list for non-positive input.
    """
    if not _is_valid(ohms):
        return []

    sig2, exp10 = _normalise(ohms, 2)
    digits = (_clamp(sig2 // 10), _clamp(sig2 % 10), exp10)

    bands = [
        {
            "digit": digit,
            "name":  COLOR_NAMES[digit],
            "rgb":   COLOR_RGB[COLOR_NAMES[digit]],
        }
        for digit in digits
    ]
    bands.append(
        {
            "name":      FOUR_BAND_TOLERANCE,
            "rgb":       COLOR_RGB[FOUR_BAND_TOLERANCE],
            "tolerance": TOLERANCE_BANDS[FOUR_BAND_TOLERANCE] / 100.0,
        }
    )
    return bands


def bands_to_description(bands: list[dict]) -> str:
    """Return a human-readable description of *bands*, e.g. 'Yellow-Violet-Red-Gold (4.7kΩ ±5%)'.

    Reconstructs the resistance from digit and multiplier bands, then formats
    it with SI prefix.
    """
    if len(bands) < 4:
        return INVALID_CODE

    name_str = "-".join(b["name"] for b in bands)

    digit1     = bands[0]["digit"]
    digit2     = bands[1]["digit"]
    multiplier = bands[2]["digit"]
    ohms       = (digit1 * 10 + digit2) * (10 ** multiplier)

    value_str = _format_value(float(ohms))
    tol_pct = round(bands[3]["tolerance"] * 100)

    return f"{name_str} ({value_str} ±{tol_pct}%)"


def all_codes(ohms: float) -> dict:
    """Return ``{'value', 'four_band', 'five_band', 'smd'}`` for *ohms*."""
    return {
        "value":     ohms,
        "four_band": four_band_code(ohms),
        "five_band": five_band_code(ohms),
        "smd":       smd_code(ohms),
    }
