#!/usr/bin/env python3
"""
Seasonal-Trend decomposition results.

DecompositionResult is the data contract consumed by the chart pipeline.
decompose() is a thin adapter over statsmodels' STL that produces one from
a raw (times, values) series, configured like a classic periodic STL: an
effectively infinite seasonal window with degree-0 seasonal smoothing.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from statsmodels.tsa.seasonal import STL

from .errors import DataShapeError

logger = logging.getLogger(__name__)

CHANNELS = ('series', 'seasonal', 'trend', 'remainder')


def _frozen_array(values, dtype) -> np.ndarray:
    array = np.array(values, dtype=dtype, copy=True)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class DecompositionResult:
    """
    Output of a seasonal decomposition: five parallel sequences.

    Attributes:
        times: epoch timestamps in milliseconds
        series: observed values
        seasonal: seasonal component
        trend: trend component
        remainder: residual component

    Lengths are not checked here; the aligner rejects mismatched shapes.
    """
    times: np.ndarray
    series: np.ndarray
    seasonal: np.ndarray
    trend: np.ndarray
    remainder: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'times', _frozen_array(self.times, 'int64'))
        for name in CHANNELS:
            object.__setattr__(self, name, _frozen_array(getattr(self, name), 'float64'))

    def __len__(self) -> int:
        return len(self.times)

    def lengths(self) -> dict:
        """Length of each sequence keyed by field name"""
        return {'times': len(self.times), **{name: len(getattr(self, name)) for name in CHANNELS}}


def decompose(times: Sequence[int],
              values: Sequence[float],
              period: int,
              robust: bool = False) -> DecompositionResult:
    """
    Decompose a raw series with STL.

    Args:
        times: epoch millisecond timestamps, one per value
        values: observed values
        period: number of observations per seasonal cycle
        robust: use robust (outlier-resistant) fitting

    Returns:
        DecompositionResult aligned to the given timestamps

    Raises:
        DataShapeError: if times and values differ in length, or the series
            is too short for the requested period
    """
    times = np.asarray(times)
    values = np.asarray(values, dtype='float64')
    if len(times) != len(values) or len(values) == 0:
        raise DataShapeError({'times': len(times), 'values': len(values)})

    n = len(values)
    if period < 2 or n < 2 * period:
        raise DataShapeError(
            {'times': len(times), 'values': n},
            message=f"STL needs period >= 2 and at least two full cycles (period={period}, observations={n})",
        )

    # Periodic seasonal window: odd and wider than the whole series
    seasonal_window = 10 * n + 1
    logger.debug(f"Running STL: n={n}, period={period}, seasonal={seasonal_window}, robust={robust}")

    try:
        fit = STL(values, period=period, seasonal=seasonal_window, seasonal_deg=0, robust=robust).fit()
    except ValueError as e:
        raise DataShapeError({'times': len(times), 'values': n}, message=f"STL decomposition failed: {e}") from e

    return DecompositionResult(
        times=times,
        series=values,
        seasonal=np.asarray(fit.seasonal),
        trend=np.asarray(fit.trend),
        remainder=np.asarray(fit.resid),
    )
