"""
Resistor Network Finder - Command Line Interface

Headless access to the finder, the R-2R ladder calculator and the code
lookup.  Every command prints the same text report the UI shows.

Usage:
    resistor-finder find 4.7K --value 1K --value 2.2K --tolerance 1
    resistor-finder find 866 --series E24 --max-size 3
    resistor-finder ladder 10K --bits 8 --vref 5
    resistor-finder codes 4.7K
"""

from __future__ import annotations

import logging
import sys

import click

import calculator
import config
from color_code import all_codes
from report import format_code_line, format_find_report, format_ladder_report
from resistor_constants import E_SERIES_BASE, series_labels
from value_parser import parse_resistor_value

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Log enumeration details")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Find series/parallel resistor networks and R-2R ladder figures."""
    ctx.ensure_object(dict)
    _setup_logging(verbose)


@cli.command("find", help="Find networks approximating TARGET (e.g. 866, 4.7K, 1M)")
@click.argument("target")
@click.option(
    "--value", "values",
    multiple=True,
    help="Available resistor value, repeatable (default: the --series catalogue)",
)
@click.option(
    "--series",
    type=click.Choice(sorted(E_SERIES_BASE)),
    default=config.DEFAULT_SERIES,
    show_default=True,
    help="E-series used when no --value is given",
)
@click.option(
    "--tolerance", "-t",
    type=float,
    default=config.DEFAULT_TOLERANCE,
    show_default=True,
    help="Allowed error in percent",
)
@click.option(
    "--max-size", "-n",
    type=int,
    default=config.MAX_N,
    show_default=True,
    help="Largest number of resistors in a network",
)
@click.option("--no-legend", is_flag=True, help="Omit the colour code reference")
def find(target: str, values: tuple, series: str, tolerance: float,
         max_size: int, no_legend: bool) -> None:
    if values:
        labels = list(values)
    else:
        labels = series_labels(series)
        log.debug("No --value given, using %d %s catalogue values", len(labels), series)
    outcome = calculator.find_networks_from_labels(
        labels,
        parse_resistor_value(target),
        tolerance,
        max_size,
    )
    click.echo(format_find_report(outcome, legend=not no_legend))
    if outcome["status"] != "ok":
        sys.exit(1)


@cli.command("ladder", help="R-2R ladder DAC figures for resistor R (e.g. 10K)")
@click.argument("r")
@click.option(
    "--bits", "-b",
    type=int,
    default=config.DEFAULT_BITS,
    show_default=True,
    help=f"DAC resolution ({config.LADDER_MIN_BITS}-{config.LADDER_MAX_BITS})",
)
@click.option(
    "--vref",
    type=float,
    default=config.DEFAULT_VREF,
    show_default=True,
    help="Reference voltage; <= 0 uses the default",
)
def ladder(r: str, bits: int, vref: float) -> None:
    summary = calculator.ladder_summary(parse_resistor_value(r), bits, vref)
    click.echo(format_ladder_report(summary))
    if summary["status"] != "ok":
        sys.exit(1)


@cli.command("codes", help="4-band, 5-band and SMD codes of VALUE")
@click.argument("value")
def codes(value: str) -> None:
    click.echo(format_code_line(all_codes(parse_resistor_value(value))))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
