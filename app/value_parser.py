from __future__ import annotations

"""
Resistor Network Finder - Resistor Label Parsing

Turns the labels shown on the value picker ("1 Ω", "7.5 Ω", "4.7K Ω",
"1M Ω") into ohms.  Parsing is "take what you can": a leading number is
read, the next word is searched for a K or M multiplier, and anything else
is ignored.  Nothing here raises for string input.
"""

import re

# Leading decimal number, optional sign and exponent.
_NUMBER_RE = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

# Multiplier word: skip whitespace, then up to 9 non-space characters.
_SUFFIX_RE = re.compile(r"\s*(\S{1,9})")

KILO = 1_000.0
MEGA = 1_000_000.0


def parse_resistor_value(label: str) -> float:
    """Return the resistance in ohms described by *label*.

    Examples:
        "47"      -> 47.0
        "4.7K Ω"  -> 4700.0
        "1M Ω"    -> 1000000.0
        "2.2 kΩ"  -> 2200.0
        "Ω"       -> 0.0   (no leading number)

    A suffix containing ``K``/``k`` multiplies by 1000; otherwise a suffix
    containing ``M``/``m`` multiplies by 1 000 000.
    """
    if not isinstance(label, str):
        return 0.0

    match = _NUMBER_RE.match(label)
    if match is None:
        return 0.0

    value = float(match.group(1))

    suffix_match = _SUFFIX_RE.match(label, match.end())
    if suffix_match is not None:
        suffix = suffix_match.group(1)
        if "K" in suffix or "k" in suffix:
            value *= KILO
        elif "M" in suffix or "m" in suffix:
            value *= MEGA

    return value
