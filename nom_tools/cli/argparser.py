"""
Argument parser setup for the NOM Tools CLI.

Subcommands:
- list: Registered indicators and their default params
- configs: YAML indicator instance configs
- run: Run an indicator over a CSV of bars
"""

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="NOM Tools - incremental charting indicators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python nom_cli.py list
  python nom_cli.py run --indicator vwap_bands --csv data/es_5m.csv
  python nom_cli.py run --indicator heikin_ashi_smoothed --csv bars.csv --param period=20 --param movingAverageType=hull
  python nom_cli.py run --config es_vwap_weekly --csv bars.csv --tail 50
        """
    )

    # Verbosity: mutually exclusive group (-q / -v / --debug)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Quiet mode: WARNING only"
    )
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Verbose mode: INFO"
    )
    verbosity.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Debug mode: full DEBUG (VWAP resets, plugin creation)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List registered indicators")

    configs_parser = subparsers.add_parser("configs", help="List YAML indicator configs")
    configs_parser.add_argument(
        "--dir",
        dest="configs_dir",
        default=None,
        help="Config directory (default: NOM_CONFIGS_DIR or configs/indicators)"
    )

    run_parser = subparsers.add_parser("run", help="Run an indicator over a CSV of bars")
    source = run_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--indicator", help="Registered indicator key")
    source.add_argument("--config", help="YAML indicator config id")
    run_parser.add_argument("--csv", required=True, help="CSV with timestamp,open,high,low,close,volume")
    run_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Param override (repeatable), e.g. --param period=20"
    )
    run_parser.add_argument(
        "--dir",
        dest="configs_dir",
        default=None,
        help="Config directory for --config"
    )
    run_parser.add_argument(
        "--tail",
        type=int,
        default=20,
        help="Number of most recent rows to show (default: 20)"
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
