"""
CSV loading for raw time series.

Expected layout: one header row, then `timestamp,value` rows where the
timestamp is epoch milliseconds.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import pandas as pd

from .errors import DataShapeError

logger = logging.getLogger(__name__)


def load_series_csv(path: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Read a two-column CSV into (times, values) arrays.

    Args:
        path: CSV file with a header row

    Returns:
        Tuple of int64 epoch-millisecond times and float64 values

    Raises:
        DataShapeError: if the file has no rows, fewer than two columns,
            or non-numeric cells
    """
    df = pd.read_csv(path, header=0)
    if df.shape[1] < 2:
        raise DataShapeError(message=f"{path}: expected timestamp,value columns, found {list(df.columns)}")
    if df.empty:
        raise DataShapeError(message=f"{path}: no data rows")

    df = df.iloc[:, :2]
    numeric = df.apply(pd.to_numeric, errors='coerce')
    bad_rows = numeric.isna().any(axis=1)
    if bad_rows.any():
        first_bad = int(np.flatnonzero(bad_rows.to_numpy())[0]) + 2  # 1-based, after header
        raise DataShapeError(message=f"{path}: non-numeric value on line {first_bad}")

    times = numeric.iloc[:, 0].to_numpy().astype('int64')
    values = numeric.iloc[:, 1].to_numpy(dtype='float64')
    logger.info(f"Loaded {len(values)} observations from {path}")
    return times, values
