"""
Resistor Network Finder - Text Reports

Renders the dicts returned by calculator.py as the plain-text report shown
in the finder output pane and printed by the CLI.
"""

from __future__ import annotations

from config import TOP_N_CODES

OHM = "Ω"

COLOR_LEGEND = (
    "-- Color Code Reference --\n"
    "Digits: Black=0, Brown=1, Red=2, Orange=3, Yellow=4\n"
    "        Green=5, Blue=6, Violet=7, Grey=8, White=9\n"
    "Tolerance: Gold=5%, Brown=1%, Red=2%, Silver=10%\n"
)


def format_ohms(ohms: float) -> str:
    """Compact SI form used in headings, e.g. ``'4.7kΩ'``."""
    if ohms >= 1_000_000_000:
        scaled, unit = ohms / 1_000_000_000, f"G{OHM}"
    elif ohms >= 1_000_000:
        scaled, unit = ohms / 1_000_000, f"M{OHM}"
    elif ohms >= 1_000:
        scaled, unit = ohms / 1_000, f"k{OHM}"
    else:
        scaled, unit = ohms, OHM
    formatted = f"{scaled:.3f}".rstrip("0").rstrip(".")
    return f"{formatted}{unit}"


def format_code_line(codes: dict) -> str:
    """One component line: value and its three codes."""
    return (
        f"{codes['value']:.2f} {OHM}: 4-band: {codes['four_band']} | "
        f"5-band: {codes['five_band']} | SMD: {codes['smd']}"
    )


def format_result_line(row: dict) -> str:
    plural = "s" if row["count"] > 1 else ""
    return (
        f"{row['expression']} = {row['resistance']:.2f} {OHM} "
        f"({row['count']} resistor{plural}, error {row['error_percent']:.2f}%)"
    )


def format_error(outcome: dict) -> str:
    return f"Error: {outcome['message']}"


def format_find_report(outcome: dict, legend: bool = True) -> str:
    """Render a :func:`calculator.find_networks` result.

    The top TOP_N_CODES results get a ``#n`` marker and one code line per
    distinct component value.
    """
    if outcome.get("status") != "ok":
        return format_error(outcome)

    lines = [
        "",
        f"-- Networks within {outcome['tolerance']:.2f}% tolerance of "
        f"{outcome['target']:.2f} {OHM} --",
        f"   Found {outcome['total']} combinations, showing top "
        f"{outcome['shown']} sorted by error",
        "",
    ]

    for row in outcome["results"]:
        marker = f"#{row['rank']} " if row["rank"] <= TOP_N_CODES else ""
        lines.append(marker + format_result_line(row))
        if row["component_codes"]:
            lines.append("    Component resistor codes:")
            for codes in row["component_codes"]:
                lines.append("      " + format_code_line(codes))
        lines.append("")

    if outcome["hidden"] > 0:
        lines.append(f"... and {outcome['hidden']} more results")
        lines.append("")

    if not outcome["found"]:
        lines.append("No network found within the specified tolerance.")

    text = "\n".join(lines) + "\n"
    if legend:
        text += "\n" + COLOR_LEGEND
    return text


def format_ladder_report(summary: dict) -> str:
    """Render a :func:`calculator.ladder_summary` result."""
    if summary.get("status") != "ok":
        return format_error(summary)

    bits = summary["bits"]
    lines = [
        "",
        f"-- R-2R Ladder: {bits} bits, R = {format_ohms(summary['r'])}, "
        f"Vref = {summary['vref']:.3f} V --",
        f"   R  ({format_ohms(summary['r'])}):  {summary['r_count']} resistors"
        f"   4-band: {summary['r_codes']['four_band']} | SMD: {summary['r_codes']['smd']}",
        f"   2R ({format_ohms(summary['r2'])}): {summary['r2_count']} resistors"
        f"   4-band: {summary['r2_codes']['four_band']} | SMD: {summary['r2_codes']['smd']}",
        f"   LSB: {summary['lsb']:.6f} V   Full scale: {summary['full_scale']:.6f} V   "
        f"Output impedance: {format_ohms(summary['output_impedance'])}",
        "",
        f"   {'Code':>{max(bits, 4)}}  {'Value':>8}  {'Vout (V)':>10}",
    ]
    for sample in summary["samples"]:
        lines.append(
            f"   {sample['code']:>{max(bits, 4)}}  {sample['value']:>8}  "
            f"{sample['voltage']:>10.6f}"
        )
    return "\n".join(lines) + "\n"
