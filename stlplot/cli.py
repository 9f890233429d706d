#!/usr/bin/env python3
"""
Command-line driver: read a CSV series, run STL and plot the decomposition.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .chart_config import Granularity, RenderOptions
from .data_loader import load_series_csv
from .decomposition import decompose
from .errors import StlPlotError
from .plotter import render

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stlplot',
        description='Seasonal-Trend decomposition plot of a CSV time series',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Hourly cycle in minute data, default output stl-decomposition.png
  stlplot 60 data/cpu.csv

  # Daily cycle in hourly data with a custom title and output
  stlplot 24 data/traffic.csv --granularity hour --title "Traffic" --output traffic.png

Environment (also read from .env):
  STLPLOT_TITLE, STLPLOT_GRANULARITY, STLPLOT_OUTPUT
        """
    )

    parser.add_argument('period', type=int,
                        help='Observations per seasonal cycle')
    parser.add_argument('csv', help='CSV file with a header row and timestamp,value rows')
    parser.add_argument('--output', '-o', default=None,
                        help='Output PNG path (default: stl-decomposition.png)')
    parser.add_argument('--title', default=None,
                        help='Chart title (default: Seasonal Decomposition)')
    parser.add_argument('--granularity', default=None,
                        choices=[g.name.lower() for g in Granularity],
                        help='Time bucket used to align points (default: minute)')
    parser.add_argument('--robust', action='store_true', default=False,
                        help='Use robust STL fitting')
    parser.add_argument('--verbose', '-v', action='store_true', default=False,
                        help='Enable debug logging')
    return parser


def resolve_options(args: argparse.Namespace) -> RenderOptions:
    """Environment settings first, then command-line flags on top"""
    return RenderOptions.from_env().with_overrides(
        title=args.title,
        granularity=args.granularity,
        destination=args.output,
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        options = resolve_options(args)
        times, values = load_series_csv(args.csv)
        result = decompose(times, values, period=args.period, robust=args.robust)
        path = render(result, options)
    except (StlPlotError, ValueError, OSError) as e:
        logger.error(f"Decomposition plot failed: {e}")
        return 1

    logger.info(f"Decomposition plot written to {path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
