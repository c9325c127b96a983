"""
Resistor Network Finder - Configuration
"""

# Network enumeration
MAX_N = 5               # maximum resistors in a network
MAX_NETWORKS = 10000    # networks kept per size (and matches kept for ranking)
MAX_PARTS = 8           # individual resistor values tracked per network

# Ranking / display
MAX_RESULTS = 50        # results shown
TOP_N_CODES = 5         # results that get component colour codes
DEFAULT_TOLERANCE = 5.0 # percent, used when the caller gives none
PART_EPSILON = 0.01     # ohms; component values closer than this display once
MAX_AVAILABLE = 100     # selectable values passed to the builder

# R-2R ladder
DEFAULT_VREF = 5.0      # volts, used when vref <= 0
DEFAULT_BITS = 8
LADDER_MIN_BITS = 2
LADDER_MAX_BITS = 24
LADDER_EXHAUSTIVE_BITS = 4   # full code table up to this many bits
LADDER_SAMPLE_COUNT = 16     # evenly spaced codes above that

# Value catalogue offered by the UI
DEFAULT_SERIES = "E12"
TOLERANCE_CHOICES = [0.1, 0.5, 1.0, 2.0, 5.0, 10.0]

# Display
SCREEN_W = 480
SCREEN_H = 320
