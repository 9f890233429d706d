#!/usr/bin/env python3
"""
Chart Renderer

This module handles chart rendering using matplotlib's object-oriented API.
Responsible for drawing a CompositeFigure and exporting it as PNG bytes or files.
"""

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Any, Optional

import pandas as pd
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.dates as mdates
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ..chart_config import ChartConfig, Destination
from ..errors import ExportError
from .panel_composer import CompositeFigure, Panel, RendererKind

logger = logging.getLogger(__name__)


def panel_hspace(gap: float, panel_count: int, plot_height: float) -> float:
    """
    Convert a fixed pixel gap into matplotlib's relative hspace.

    hspace is measured in units of the average panel height, so for n
    panels sharing plot_height pixels: gap = hspace * plot_height / (n + (n - 1) * hspace).
    """
    if panel_count < 2 or gap <= 0:
        return 0.0
    free_height = plot_height - (panel_count - 1) * gap
    if free_height <= 0:
        raise ValueError(f"Gap of {gap}px leaves no room for {panel_count} panels in {plot_height}px")
    return gap * panel_count / free_height


class ChartRenderer:
    """Stateless renderer turning a CompositeFigure into raster output"""

    def __init__(self, chart_config=ChartConfig):
        """
        Initialize the chart renderer

        Args:
            chart_config: ChartConfig class with theme, layout and size settings
        """
        self.chart_config = chart_config
        self.layout = chart_config.get_layout()
        self.export_size = chart_config.get_export_size()

        logger.debug(f"ChartRenderer initialized with {self.export_size['width']}x{self.export_size['height']} export size")

    def draw(self, composite: CompositeFigure, size: Optional[Dict[str, Any]] = None) -> Figure:
        """
        Build a matplotlib Figure for the composite.

        Args:
            composite: Figure description from PanelComposer
            size: Dict with width, height (pixels) and dpi; defaults to export size

        Returns:
            matplotlib Figure with one axes per panel, all sharing the x-axis
        """
        size = size or self.export_size
        dpi = size.get('dpi', 100)
        theme = composite.theme or self.chart_config.get_theme_colors()

        fig = Figure(figsize=(size['width'] / dpi, size['height'] / dpi), dpi=dpi,
                     facecolor=theme['figure_color'])
        FigureCanvasAgg(fig)

        plot_height = (self.layout['top'] - self.layout['bottom']) * size['height']
        hspace = panel_hspace(composite.gap, len(composite.panels), plot_height)
        axes = fig.subplots(nrows=len(composite.panels), ncols=1, sharex=True, squeeze=False)[:, 0]
        fig.subplots_adjust(left=self.layout['left'], right=self.layout['right'],
                            top=self.layout['top'], bottom=self.layout['bottom'], hspace=hspace)

        for ax, panel in zip(axes, composite.panels):
            self._draw_panel(ax, panel, composite, theme)

        self._format_domain_axis(axes[-1], composite, theme)
        fig.suptitle(composite.title, fontsize=theme['title_fontsize'], color=theme['text_color'])

        return fig

    def _draw_panel(self, ax, panel: Panel, composite: CompositeFigure, theme: Dict):
        """Draw each dataset of a panel in order on the panel's single range axis"""
        for order, channel in enumerate(panel.channels):
            data = channel.data
            if panel.kind is RendererKind.BAR:
                width = composite.domain_axis.step / pd.Timedelta(days=1) * theme['bar_width_ratio']
                ax.bar(data.index.to_numpy(), data.to_numpy(), width=width, align='center',
                       color=theme['bar_color'], edgecolor='none', zorder=order + 2)
            else:
                ax.plot(data.index.to_numpy(), data.to_numpy(), color=composite.line_color,
                        linewidth=theme['line_width'], marker=None, zorder=order + 2)

        ax.set_ylabel(panel.label, fontsize=theme['label_fontsize'], color=theme['text_color'])
        ax.set_facecolor(theme['face_color'])
        ax.grid(True, color=theme['grid_color'], linestyle='--', linewidth=0.5, alpha=theme['grid_alpha'])
        ax.tick_params(labelsize=theme['tick_fontsize'], colors=theme['text_color'])

    def _format_domain_axis(self, ax, composite: CompositeFigure, theme: Dict):
        """
        Apply the shared time range and a date format suited to its span

        Args:
            ax: Bottom axis (the x-axis is shared with every other panel)
            composite: Figure description
            theme: Theme colors dictionary
        """
        domain = composite.domain_axis
        pad = domain.step / 2
        ax.set_xlim((domain.start - pad).to_pydatetime(), (domain.end + pad).to_pydatetime())

        span = domain.end - domain.start
        if span.days > 30:
            formatter = mdates.DateFormatter('%Y-%m-%d')
        elif span.days > 1:
            formatter = mdates.DateFormatter('%m-%d %H:%M')
        elif span >= pd.Timedelta(hours=1):
            formatter = mdates.DateFormatter('%H:%M')
        else:
            formatter = mdates.DateFormatter('%H:%M:%S')

        ax.xaxis.set_major_formatter(formatter)
        ax.xaxis.set_major_locator(mdates.AutoDateLocator(maxticks=self.layout['max_date_ticks']))
        ax.set_xlabel(domain.label, fontsize=theme['label_fontsize'], color=theme['text_color'])

    def render_to_bytes(self, composite: CompositeFigure,
                        width: Optional[int] = None, height: Optional[int] = None) -> bytes:
        """
        Render the composite and return PNG bytes

        Output is deterministic: no timestamps are drawn or embedded, so the
        same composite always yields the same bytes.
        """
        size = self.export_size.copy()
        if width:
            size['width'] = width
        if height:
            size['height'] = height

        fig = self.draw(composite, size)
        buffer = io.BytesIO()
        fig.savefig(
            buffer,
            format='png',
            dpi=size['dpi'],
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            metadata={'Software': None},
        )
        return buffer.getvalue()

    def export(self, composite: CompositeFigure, destination: Destination,
               width: Optional[int] = None, height: Optional[int] = None) -> Optional[Path]:
        """
        Write the rendered PNG to a file path or a writable binary buffer

        Files are written to a temporary sibling first and then moved into
        place, so a failed export never leaves a partial image behind.

        Returns:
            The written Path, or None for buffer destinations

        Raises:
            ExportError: if writing fails
        """
        png_bytes = self.render_to_bytes(composite, width, height)

        if hasattr(destination, 'write'):
            try:
                destination.write(png_bytes)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to write chart to buffer: {e}")
                raise ExportError(destination, e) from e
            logger.info(f"Chart '{composite.title}' written to buffer ({len(png_bytes)} bytes)")
            return None

        path = Path(destination)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp', dir=path.parent)
            os.chmod(tmp_name, 0o644)
            with os.fdopen(fd, 'wb') as handle:
                handle.write(png_bytes)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Failed to export chart to {path}: {e}")
            raise ExportError(path, e) from e

        logger.info(f"Chart '{composite.title}' saved to {path} ({len(png_bytes)} bytes)")
        return path
