"""Shared fixtures for the stlplot test suite."""

import numpy as np
import pytest

from stlplot.decomposition import DecompositionResult


@pytest.fixture
def minute_result():
    """Three points one minute apart"""
    return DecompositionResult(
        times=[0, 60000, 120000],
        series=[10, 12, 11],
        seasonal=[1, -1, 0],
        trend=[9, 9, 9],
        remainder=[0, 4, 2],
    )


@pytest.fixture
def hourly_result():
    """Two days of hourly data with a daily cycle"""
    n = 48
    times = np.arange(n, dtype='int64') * 3_600_000 + 1_700_000_000_000
    seasonal = np.sin(2 * np.pi * np.arange(n) / 24)
    trend = np.linspace(100.0, 110.0, n)
    remainder = np.where(np.arange(n) % 7 == 0, 0.5, -0.1)
    return DecompositionResult(
        times=times,
        series=seasonal + trend + remainder,
        seasonal=seasonal,
        trend=trend,
        remainder=remainder,
    )
