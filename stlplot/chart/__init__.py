"""
Chart Generation Components

This package contains modular components for plotting a seasonal decomposition:
- SeriesAligner: Snaps channels onto a shared time-bucket index
- PanelComposer: Builds the immutable five-panel figure description
- ChartRenderer: Pure matplotlib rendering and PNG export
"""

from .data_preparer import SeriesAligner, ChannelSeries, snap_times
from .panel_composer import PanelComposer, CompositeFigure, Panel, DomainAxis, RendererKind
from .chart_renderer import ChartRenderer

__all__ = [
    'SeriesAligner',
    'ChannelSeries',
    'snap_times',
    'PanelComposer',
    'CompositeFigure',
    'Panel',
    'DomainAxis',
    'RendererKind',
    'ChartRenderer',
]
