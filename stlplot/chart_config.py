"""
Chart Configuration Module

This module contains all configurable settings for decomposition charts:
- Flat single-color theme
- Panel layout (gap and margins)
- Export and display sizes
- Render defaults (title, time granularity, output file)
"""

import os
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, Union, BinaryIO

import pandas as pd


class Granularity(Enum):
    """Time bucket sizes used to align decomposition channels"""
    MILLISECOND = "ms"
    SECOND = "s"
    MINUTE = "min"
    HOUR = "h"
    DAY = "D"
    WEEK = "W"
    MONTH = "M"
    QUARTER = "Q"
    YEAR = "Y"

    @property
    def period_alias(self) -> str:
        """pandas period alias for this granularity"""
        return self.value

    def step_at(self, moment: pd.Timestamp) -> pd.Timedelta:
        """Length of the bucket containing moment (calendar periods vary)"""
        period = pd.Period(moment, freq=self.period_alias)
        return (period + 1).start_time - period.start_time

    @classmethod
    def parse(cls, value: Union[str, "Granularity"]) -> "Granularity":
        """
        Resolve a granularity from its name or pandas alias.

        Examples:
            >>> Granularity.parse('minute')
            <Granularity.MINUTE: 'min'>
            >>> Granularity.parse('h')
            <Granularity.HOUR: 'h'>
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls[text.upper()]
        except KeyError:
            pass
        for member in cls:
            if member.value == text or member.value.lower() == text.lower():
                return member
        choices = ', '.join(m.name.lower() for m in cls)
        raise ValueError(f"Unknown granularity '{value}' (expected one of: {choices})")


class ChartConfig:
    """
    Configuration class for decomposition chart settings.
    Every dataset is drawn in one flat color; panels differ only in scale.
    """

    THEME = {
        'line_color': 'black',
        'line_width': 1.0,
        'bar_color': 'black',
        'bar_width_ratio': 0.8,       # Bar width as a share of bucket spacing
        'face_color': '#ffffff',
        'figure_color': '#ffffff',
        'grid_color': '#d0d0d0',
        'grid_alpha': 0.5,
        'text_color': '#000000',
        'title_fontsize': 12,
        'label_fontsize': 9,
        'tick_fontsize': 8,
    }

    LAYOUT = {
        'gap': 10.0,                  # Vertical space between panels, in pixels
        'left': 0.10,
        'right': 0.97,
        'top': 0.93,
        'bottom': 0.08,
        'max_date_ticks': 8,
        'domain_label': 'Time',
    }

    # File export size in pixels; dpi only converts to matplotlib inches
    EXPORT_SIZE = {
        'width': 800,
        'height': 600,
        'dpi': 100,
    }

    # Preferred on-screen size for a display adapter, independent of export
    DISPLAY_SIZE = {
        'width': 1000,
        'height': 500,
        'dpi': 100,
    }

    DEFAULTS = {
        'title': 'Seasonal Decomposition',
        'granularity': Granularity.MINUTE,
        'destination': 'stl-decomposition.png',
    }

    @classmethod
    def get_theme_colors(cls) -> Dict[str, Any]:
        """
        Get current theme colors.

        Returns:
            Dictionary containing all theme color settings
        """
        return cls.THEME.copy()

    @classmethod
    def get_layout(cls) -> Dict[str, Any]:
        """Get panel layout settings (gap in pixels, margins as figure fractions)"""
        return cls.LAYOUT.copy()

    @classmethod
    def get_export_size(cls) -> Dict[str, Any]:
        """Get raster export size"""
        return cls.EXPORT_SIZE.copy()

    @classmethod
    def get_display_size(cls) -> Dict[str, Any]:
        """Get display sizing for interactive adapters"""
        return cls.DISPLAY_SIZE.copy()


Destination = Union[str, Path, BinaryIO]


@dataclass(frozen=True)
class RenderOptions:
    """
    Settings for a single render request.

    Replaces the separate title / granularity / destination overloads with
    one value; unspecified fields fall back to ChartConfig.DEFAULTS.
    """
    title: str = ChartConfig.DEFAULTS['title']
    granularity: Granularity = ChartConfig.DEFAULTS['granularity']
    destination: Destination = ChartConfig.DEFAULTS['destination']
    width: int = ChartConfig.EXPORT_SIZE['width']
    height: int = ChartConfig.EXPORT_SIZE['height']

    def __post_init__(self):
        # Accept plain strings for granularity from config files and the CLI
        object.__setattr__(self, 'granularity', Granularity.parse(self.granularity))
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")

    def with_overrides(self, **overrides) -> "RenderOptions":
        """Return a copy with the given non-None fields replaced"""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "RenderOptions":
        """
        Build options from STLPLOT_* environment variables.

        Recognized variables:
            STLPLOT_TITLE: chart title
            STLPLOT_GRANULARITY: time bucket name (e.g. 'minute', 'hour')
            STLPLOT_OUTPUT: output file path
        """
        env = os.environ if environ is None else environ
        return cls().with_overrides(
            title=env.get('STLPLOT_TITLE') or None,
            granularity=env.get('STLPLOT_GRANULARITY') or None,
            destination=env.get('STLPLOT_OUTPUT') or None,
        )
