"""
Resistor Network Finder - Shared Constants

Colour tables used by color_code.py and the UI screens, plus the IEC 60063
E-series base mantissas used to build the preset value catalogue.
"""

from __future__ import annotations

# Digit colours (index == digit value).  The multiplier band uses the same
# table: exponent k is drawn with the colour of digit k.
COLOR_NAMES: tuple[str, ...] = (
    "Black", "Brown", "Red", "Orange", "Yellow",
    "Green", "Blue", "Violet", "Grey", "White",
)

COLOR_RGB: dict[str, tuple[int, int, int]] = {
    "Black":  (0,   0,   0  ),
    "Brown":  (139, 69,  19 ),
    "Red":    (220, 20,  20 ),
    "Orange": (255, 140, 0  ),
    "Yellow": (255, 220, 0  ),
    "Green":  (0,   160, 0  ),
    "Blue":   (0,   80,  200),
    "Violet": (148, 0,   211),
    "Grey":   (160, 160, 160),
    "White":  (255, 255, 255),
    # Tolerance-only colours
    "Gold":   (212, 175, 55 ),
    "Silver": (192, 192, 192),
}

# Tolerance band colour -> tolerance in percent
TOLERANCE_BANDS: dict[str, float] = {
    "Brown":  1.0,
    "Red":    2.0,
    "Gold":   5.0,
    "Silver": 10.0,
}

# Fixed tolerance bands of the generated codes
FOUR_BAND_TOLERANCE = "Gold"    # ±5 %
FIVE_BAND_TOLERANCE = "Brown"   # ±1 %

# --- E-series base mantissas (one decade, 1.0 - 9.x) ---

E3_BASE_VALUES = [1.0, 2.2, 4.7]

E6_BASE_VALUES = [1.0, 1.5, 2.2, 3.3, 4.7, 6.8]

E12_BASE_VALUES = [1.0, 1.2, 1.5, 1.8, 2.2, 2.7, 3.3, 3.9, 4.7, 5.6, 6.8, 8.2]

E24_BASE_VALUES = [
    1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
    3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1,
]

E_SERIES_BASE: dict[str, list[float]] = {
    "E3":  E3_BASE_VALUES,
    "E6":  E6_BASE_VALUES,
    "E12": E12_BASE_VALUES,
    "E24": E24_BASE_VALUES,
}

# Label suffix per decade exponent, giving labels such as
# ("1 Ω", "47 Ω", "4.7K Ω", "1M Ω").
_DECADE_UNITS = {0: ("", 1), 1: ("", 1), 2: ("", 1),
                 3: ("K", 1_000), 4: ("K", 1_000), 5: ("K", 1_000),
                 6: ("M", 1_000_000)}


def series_labels(series: str = "E12", decade_min: int = 0, decade_max: int = 6) -> list[str]:
    """Return the catalogue labels of *series* across the given decades.

    Labels are the value-picker captions ("4.7K Ω") and
    are meant to be fed through ``value_parser.parse_resistor_value``.

    Raises:
        KeyError: If *series* is not one of :data:`E_SERIES_BASE`.
    """
    base_values = E_SERIES_BASE[series]
    labels: list[str] = []
    for exp in range(max(0, decade_min), min(6, decade_max) + 1):
        suffix, divisor = _DECADE_UNITS[exp]
        for base in base_values:
            scaled = round(base * 10 ** exp / divisor, 6)
            text = f"{scaled:g}"
            labels.append(f"{text}{suffix} Ω")
    return labels
