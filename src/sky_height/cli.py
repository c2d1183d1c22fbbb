"""Command-line entry point.

Usage:
    python -m sky_height PAYLOAD
    python -m sky_height - < payload.txt
    python -m sky_height PAYLOAD --json --simulate 3 --seed 7
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TextIO

from sky_height.config import ConfigFileError, resolve_config
from sky_height.core.exceptions import ConfigurationError
from sky_height.core.types import Failure, Success
from sky_height.executor import create_executor
from sky_height.formatting import format_value, summary_text
from sky_height.simulation import SimulationSession

# ruff: noqa: T201

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Decode a payload and derive the height measurement",
        prog="python -m sky_height",
    )
    parser.add_argument(
        "payload",
        nargs="?",
        default="-",
        help="Raw payload text, or '-' to read from stdin (default)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument(
        "--simulate",
        type=int,
        default=0,
        metavar="N",
        help="Print N simulated draws after a successful measurement",
    )
    parser.add_argument("--seed", type=int, help="Seed for simulated draws")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    out = stdout or sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    raw = (stdin or sys.stdin).read() if args.payload == "-" else args.payload
    raw = raw.strip()
    if not raw:
        print("Error: please paste the data first.", file=sys.stderr)
        return EXIT_USAGE

    overrides = {"simulation_seed": args.seed} if args.seed is not None else None
    try:
        config = resolve_config(overrides).to_frozen()
    except (ConfigurationError, ConfigFileError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    result = create_executor(config).execute(raw)
    if isinstance(result, Failure):
        print(f"{result.error.user_message} ({result.error.kind})", file=sys.stderr)
        return EXIT_FAILURE

    measurement = result.value
    precision = config.display_precision
    session = SimulationSession(config)
    session.record(measurement)
    draws = [session.draw() for _ in range(max(args.simulate, 0))]
    outcomes = [d.value for d in draws if isinstance(d, Success)]

    if args.json:
        payload = measurement.to_dict()
        if outcomes:
            payload["simulations"] = [
                {"value": o.value, "height": o.height, "extreme": o.extreme}
                for o in outcomes
            ]
        print(json.dumps(payload, indent=2), file=out)
        return EXIT_OK

    print(summary_text(measurement, precision=precision), file=out)
    for index, outcome in enumerate(outcomes, start=1):
        suffix = f" ({outcome.extreme})" if outcome.extreme else ""
        print(f"Simulation #{index}: {format_value(outcome.value, precision)}{suffix}", file=out)
    return EXIT_OK
