"""
Resistor Network Finder - R-2R Ladder DAC

Closed-form figures for an R-2R ladder digital-to-analogue converter:

    bits-1 resistors of value R, bits+1 resistors of value 2R
    LSB          = Vref / 2^bits
    Vout(code)   = Vref * code / 2^bits
    full scale   = Vref * (2^bits - 1) / 2^bits

The sample table lists every code for small ladders (bits <= 4) and 16
evenly spaced codes, first and last included, for larger ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from config import (
    DEFAULT_VREF,
    LADDER_EXHAUSTIVE_BITS,
    LADDER_MAX_BITS,
    LADDER_MIN_BITS,
    LADDER_SAMPLE_COUNT,
)


@dataclass(frozen=True)
class LadderSample:
    code: str       # binary, zero-padded to the ladder width
    value: int
    voltage: float


@dataclass(frozen=True)
class LadderSpec:
    r: float
    bits: int
    vref: float
    r_count: int
    r2_count: int
    lsb: float
    samples: list[LadderSample] = field(default_factory=list)

    @property
    def r2(self) -> float:
        return 2.0 * self.r

    @property
    def levels(self) -> int:
        return 2 ** self.bits

    @property
    def full_scale(self) -> float:
        return self.vref * (self.levels - 1) / self.levels

    @property
    def output_impedance(self) -> float:
        # Thevenin resistance seen at the output of an R-2R ladder.
        return self.r

    def voltage(self, value: int) -> float:
        return output_voltage(value, self.bits, self.vref)


def output_voltage(value: int, bits: int, vref: float) -> float:
    """Ideal ladder output for the digital *value*."""
    return vref * value / 2 ** bits


def sample_codes(bits: int) -> list[int]:
    """Digital codes shown in the sample table for a *bits*-wide ladder."""
    top = 2 ** bits - 1
    if bits <= LADDER_EXHAUSTIVE_BITS:
        return list(range(top + 1))
    steps = LADDER_SAMPLE_COUNT - 1
    return [int(k * top / steps + 0.5) for k in range(LADDER_SAMPLE_COUNT)]


def ladder_spec(r: float, bits: int, vref: float = DEFAULT_VREF) -> LadderSpec:
    """Compute the R-2R ladder figures for resistor *r*, *bits* and *vref*.

    A non-positive *vref* falls back to DEFAULT_VREF.

    Raises:
        ValueError: If *r* is not positive or *bits* is outside
            LADDER_MIN_BITS..LADDER_MAX_BITS.
    """
    if not r > 0:
        raise ValueError(f"ladder resistor must be greater than 0, got {r!r}")
    if not LADDER_MIN_BITS <= bits <= LADDER_MAX_BITS:
        raise ValueError(
            f"bits must be between {LADDER_MIN_BITS} and {LADDER_MAX_BITS}, got {bits!r}"
        )
    if not vref > 0:
        vref = DEFAULT_VREF

    samples = [
        LadderSample(
            code=format(value, f"0{bits}b"),
            value=value,
            voltage=output_voltage(value, bits, vref),
        )
        for value in sample_codes(bits)
    ]

    return LadderSpec(
        r=float(r),
        bits=bits,
        vref=float(vref),
        r_count=bits - 1,
        r2_count=bits + 1,
        lsb=vref / 2 ** bits,
        samples=samples,
    )
