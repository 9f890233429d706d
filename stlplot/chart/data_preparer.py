#!/usr/bin/env python3
"""Series Aligner - Snaps decomposition channels onto a shared time-bucket index."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from ..chart_config import Granularity
from ..decomposition import DecompositionResult
from ..errors import DataShapeError

logger = logging.getLogger(__name__)

# Channel display names keyed by DecompositionResult field
CHANNEL_FIELDS = {
    'Series': 'series',
    'Seasonal': 'seasonal',
    'Trend': 'trend',
    'Remainder': 'remainder',
}

_EPOCH = pd.Timestamp(0)
_ONE_MS = pd.Timedelta(milliseconds=1)


def snap_times(times: Sequence[int], granularity: Granularity = Granularity.MINUTE) -> pd.DatetimeIndex:
    """
    Floor epoch-millisecond timestamps to the start of their period.

    Timestamps are interpreted as UTC and returned as a naive
    DatetimeIndex. Calendar granularities (week, month, quarter, year)
    snap to the first instant of the calendar period.
    """
    granularity = Granularity.parse(granularity)
    stamps = pd.to_datetime(np.asarray(times, dtype='int64'), unit='ms')
    return stamps.to_period(granularity.period_alias).to_timestamp(how='start')


def bucket_millis(index: pd.DatetimeIndex) -> List[int]:
    """Convert bucket timestamps back to epoch milliseconds"""
    return [int(delta // _ONE_MS) for delta in (index - _EPOCH)]


@dataclass(frozen=True, eq=False)
class ChannelSeries:
    """One decomposition channel indexed by time bucket (read-only)."""
    name: str
    data: pd.Series
    granularity: Granularity = Granularity.MINUTE

    def __post_init__(self):
        data = self.data.copy()
        data.name = self.name
        object.__setattr__(self, 'data', data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def buckets(self) -> List[int]:
        """Bucket start times as epoch milliseconds"""
        return bucket_millis(self.data.index)

    @property
    def values(self) -> np.ndarray:
        return self.data.to_numpy(copy=True)

    def to_series(self) -> pd.Series:
        return self.data.copy()

    def __getitem__(self, bucket):
        """Look up a value by bucket (epoch milliseconds or Timestamp)"""
        if isinstance(bucket, (int, np.integer)):
            bucket = _EPOCH + int(bucket) * _ONE_MS
        return self.data.loc[bucket]


class SeriesAligner:
    """Aligns the four decomposition channels onto one bucketed time index."""

    def __init__(self, granularity: Granularity = Granularity.MINUTE):
        self.granularity = Granularity.parse(granularity)

    def align(self, result: DecompositionResult) -> Dict[str, ChannelSeries]:
        """
        Build one ChannelSeries per channel, in Series/Seasonal/Trend/Remainder order.

        Values that land in the same bucket follow add-or-update semantics:
        the later one in input order replaces the earlier one.

        Raises:
            DataShapeError: if the sequences differ in length or are empty
        """
        lengths = result.lengths()
        if len(set(lengths.values())) != 1 or lengths['times'] == 0:
            logger.error(f"Cannot align decomposition with lengths {lengths}")
            raise DataShapeError(lengths)

        buckets = snap_times(result.times, self.granularity)
        collisions = int(buckets.duplicated().sum())
        if collisions:
            logger.debug(f"{collisions} timestamps share a {self.granularity.name.lower()} bucket; keeping latest values")

        channels = {}
        for name, field in CHANNEL_FIELDS.items():
            channels[name] = ChannelSeries(name, self._add_or_update(buckets, getattr(result, field)), self.granularity)

        logger.debug(f"Aligned {lengths['times']} points into {len(channels['Series'])} "
                     f"{self.granularity.name.lower()} buckets")
        return channels

    @staticmethod
    def _add_or_update(buckets: pd.DatetimeIndex, values: np.ndarray) -> pd.Series:
        """Keep the last value per bucket, ordered by bucket."""
        series = pd.Series(np.array(values, dtype='float64'), index=buckets)
        series = series[~series.index.duplicated(keep='last')]
        return series.sort_index(kind='stable')
