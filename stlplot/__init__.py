"""
STL Decomposition Plotter - Core Components

This package renders a seasonal-trend decomposition as a stacked,
time-aligned multi-panel PNG chart.
"""

from .chart_config import ChartConfig, Granularity, RenderOptions
from .decomposition import DecompositionResult, decompose
from .errors import StlPlotError, DataShapeError, MissingChannelError, ExportError
from .plotter import render, compose_figure, build_display_figure

__all__ = [
    'ChartConfig',
    'Granularity',
    'RenderOptions',
    'DecompositionResult',
    'decompose',
    'StlPlotError',
    'DataShapeError',
    'MissingChannelError',
    'ExportError',
    'render',
    'compose_figure',
    'build_display_figure',
]
