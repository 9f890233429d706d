#!/usr/bin/env python3
"""Panel Composer - Arranges aligned channels into the fixed decomposition layout."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple

import pandas as pd

from ..chart_config import ChartConfig
from ..errors import MissingChannelError
from .data_preparer import ChannelSeries

logger = logging.getLogger(__name__)


class RendererKind(Enum):
    """How a panel draws its datasets"""
    LINE = "line"   # Line without point markers
    BAR = "bar"     # Clustered bars, one per bucket


@dataclass(frozen=True)
class DomainAxis:
    """Time axis shared by every panel of a figure"""
    label: str
    start: pd.Timestamp
    end: pd.Timestamp
    step: pd.Timedelta  # Narrowest bucket spacing; sizes bars and pads single-bucket ranges


@dataclass(frozen=True)
class Panel:
    """
    One plotting region of the composite figure.

    Datasets are drawn in tuple order on a single range axis; the domain
    axis is the figure's shared instance.
    """
    label: str
    kind: RendererKind
    channels: Tuple[ChannelSeries, ...]
    domain_axis: DomainAxis

    @property
    def channel_names(self) -> Tuple[str, ...]:
        return tuple(channel.name for channel in self.channels)


@dataclass(frozen=True)
class CompositeFigure:
    """Immutable description of the full decomposition chart."""
    title: str
    panels: Tuple[Panel, ...]
    domain_axis: DomainAxis
    gap: float
    line_color: str
    show_legend: bool = False
    theme: Mapping = field(default_factory=dict, compare=False)

    def __len__(self) -> int:
        return len(self.panels)

    @property
    def panel_labels(self) -> Tuple[str, ...]:
        return tuple(panel.label for panel in self.panels)


# Fixed panel order: (label, renderer, channel names drawn in order)
PANEL_LAYOUT = (
    ('Series', RendererKind.LINE, ('Series',)),
    ('Seasonal', RendererKind.LINE, ('Seasonal',)),
    ('Trend', RendererKind.LINE, ('Trend',)),
    ('Remainder', RendererKind.BAR, ('Remainder',)),
    ('S & T', RendererKind.LINE, ('Series', 'Trend')),
)


class PanelComposer:
    """Builds a CompositeFigure from aligned channel series."""

    def __init__(self, chart_config=ChartConfig):
        self.chart_config = chart_config

    def compose(self, channels: Mapping[str, ChannelSeries], title: str) -> CompositeFigure:
        """
        Compose the five-panel decomposition figure.

        Args:
            channels: aligned series keyed by channel name
            title: figure title

        Returns:
            CompositeFigure with panels Series, Seasonal, Trend, Remainder
            and a Series + Trend overlay, all on one time axis

        Raises:
            MissingChannelError: if a referenced channel is absent or empty
        """
        required = {name for _, _, names in PANEL_LAYOUT for name in names}
        for name in sorted(required):
            channel = channels.get(name)
            if channel is None or len(channel) == 0:
                logger.error(f"Cannot compose figure: channel '{name}' missing")
                raise MissingChannelError(name)

        theme = self.chart_config.get_theme_colors()
        layout = self.chart_config.get_layout()
        domain_axis = self._build_domain_axis([channels[name] for name in sorted(required)], layout['domain_label'])

        panels = tuple(
            Panel(
                label=label,
                kind=kind,
                channels=tuple(channels[name] for name in names),
                domain_axis=domain_axis,
            )
            for label, kind, names in PANEL_LAYOUT
        )

        logger.debug(f"Composed '{title}' with panels {[p.label for p in panels]}")
        return CompositeFigure(
            title=title,
            panels=panels,
            domain_axis=domain_axis,
            gap=float(layout['gap']),
            line_color=theme['line_color'],
            show_legend=False,
            theme=theme,
        )

    @staticmethod
    def _build_domain_axis(channels, label: str) -> DomainAxis:
        buckets = channels[0].data.index
        for channel in channels[1:]:
            buckets = buckets.union(channel.data.index)
        buckets = buckets.sort_values()

        if len(buckets) > 1:
            step = (buckets[1:] - buckets[:-1]).min()
        else:
            step = channels[0].granularity.step_at(buckets[0])
        return DomainAxis(label=label, start=buckets[0], end=buckets[-1], step=step)
