#!/usr/bin/env python3
"""
Plot the seasonal decomposition of a CSV time series.

Usage:
  python main.py 60 data/cpu.csv --output cpu.png
"""
import sys

from stlplot.cli import main

if __name__ == '__main__':
    sys.exit(main())
