"""CLI interface for ffvumeter."""

import argparse
import logging
import sys

from . import __version__
from .config import DisplayConfig, LevelConfig, MeterConfig, SourceConfig
from .exceptions import ConfigurationError, FFVUMeterError
from .loop import run_meter


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    level = LevelConfig()
    display = DisplayConfig()
    source = SourceConfig()

    parser = argparse.ArgumentParser(
        prog="ffvumeter",
        description="Show a live VU meter for an audio source using ffplay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-m", "--min", type=float, dest="min_level",
        help=f"Set min level in dB (default: {level.min_level})",
    )
    parser.add_argument(
        "-x", "--max", type=float, dest="max_level",
        help=f"Set max level in dB (default: {level.max_level})",
    )
    parser.add_argument(
        "-w", "--width", type=int,
        help=f"Set display width (default: {display.width})",
    )
    parser.add_argument(
        "-s", "--smooth", type=int, dest="smooth_window",
        help=f"Set num samples for smoothing (default: {display.smooth_window})",
    )
    parser.add_argument(
        "-p", "--peak", type=int, dest="peak_window",
        help=f"Set num samples for peak meter (default: {display.peak_window})",
    )
    parser.add_argument(
        "-a", "--falloff", type=float, dest="falloff_rate",
        help=f"Set peak fall off rate (default: {display.falloff_rate})",
    )
    parser.add_argument(
        "--no-peak", action="store_false", dest="peak_enabled", default=None,
        help="Hide the peak meter",
    )
    parser.add_argument(
        "-f", "--ffplay-format",
        help=f"Set ffplay -f flag (default: {source.ffplay_format})",
    )
    parser.add_argument(
        "-i", "--ffplay-input",
        help=f"Set ffplay -i flag (default: {source.ffplay_input})",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log details to stderr"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_overrides(args: argparse.Namespace) -> dict:
    """Collect command line values into MeterConfig.load() overrides."""
    return {
        "level": {
            "min_level": args.min_level,
            "max_level": args.max_level,
        },
        "display": {
            "width": args.width,
            "smooth_window": args.smooth_window,
            "peak_enabled": args.peak_enabled,
            "peak_window": args.peak_window,
            "falloff_rate": args.falloff_rate,
        },
        "source": {
            "ffplay_format": args.ffplay_format,
            "ffplay_input": args.ffplay_input,
        },
    }


def main() -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Configure logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s: %(message)s',
            stream=sys.stderr,
        )
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = MeterConfig.load(config_overrides(args))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        run_meter(config)
        return 0

    except FFVUMeterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
