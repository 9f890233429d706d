#!/usr/bin/env python3
"""
Decomposition Plotter

Entry point tying the chart components together:
DecompositionResult -> SeriesAligner -> PanelComposer -> ChartRenderer.
Each call builds fresh components, so concurrent renders share no state.
"""

import logging
from pathlib import Path
from typing import Optional

from matplotlib.figure import Figure

from .chart import ChartRenderer, PanelComposer, SeriesAligner
from .chart.panel_composer import CompositeFigure
from .chart_config import ChartConfig, RenderOptions
from .decomposition import DecompositionResult

logger = logging.getLogger(__name__)


def compose_figure(result: DecompositionResult,
                   options: Optional[RenderOptions] = None,
                   chart_config=ChartConfig) -> CompositeFigure:
    """
    Align and compose a decomposition result without exporting it.

    Raises:
        DataShapeError: if the result's sequences differ in length or are empty
        MissingChannelError: if alignment produced no data for a channel
    """
    options = options or RenderOptions()
    channels = SeriesAligner(options.granularity).align(result)
    return PanelComposer(chart_config).compose(channels, options.title)


def render(result: DecompositionResult,
           options: Optional[RenderOptions] = None,
           chart_config=ChartConfig,
           **overrides) -> Optional[Path]:
    """
    Render a decomposition result to a PNG image.

    Args:
        result: Decomposition to plot
        options: Render settings; defaults to RenderOptions()
        chart_config: Theme, layout and size configuration
        **overrides: Individual RenderOptions fields (title, granularity,
            destination, width, height) taking precedence over options

    Returns:
        Path of the written image, or None when destination is a buffer

    Examples:
        >>> render(result)                                   # stl-decomposition.png
        >>> render(result, destination='out.png')
        >>> render(result, title='CPU load', granularity='hour', destination='cpu.png')
    """
    options = (options or RenderOptions()).with_overrides(**overrides)
    logger.debug(f"Rendering '{options.title}' at {options.granularity.name.lower()} granularity")

    composite = compose_figure(result, options, chart_config)
    return ChartRenderer(chart_config).export(composite, options.destination,
                                              width=options.width, height=options.height)


def build_display_figure(result: DecompositionResult,
                         options: Optional[RenderOptions] = None,
                         chart_config=ChartConfig) -> Figure:
    """
    Draw the composite at display size for embedding in a GUI canvas.

    The figure description is the same one used for export; only the size
    differs.
    """
    composite = compose_figure(result, options, chart_config)
    return ChartRenderer(chart_config).draw(composite, chart_config.get_display_size())
