import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ensemble_quantiles._providers import SummaryRunProvider

from .ensemble_model import EnsembleModel
from .quantile_request import QuantileRequest

LOGGER = logging.getLogger(__name__)


def empirical_quantile(samples: Sequence[float], quantile: float) -> float:
    """Empirical quantile with linear interpolation between order statistics.

    With the samples sorted ascending and n samples, the value at fractional rank
    quantile * (n - 1) is returned (the "type 7" definition, numpy's default).
    """
    sample_arr = np.sort(np.asarray(samples, dtype=np.float64))
    if sample_arr.size == 0:
        raise ValueError("Cannot compute quantile of an empty sample set")
    if sample_arr.size == 1:
        return float(sample_arr[0])
    return float(np.quantile(sample_arr, quantile))


class SampleCache:
    """Values collected from all runs covering one time axis row, per vector.

    The cache only ever holds samples for a single row. Starting a new row with
    `begin_row()` discards everything collected for the previous one.
    """

    def __init__(self, runs: Sequence[SummaryRunProvider]) -> None:
        self._runs = runs
        self._timestamp: Optional[np.datetime64] = None
        self._samples: Dict[str, np.ndarray] = {}

    @property
    def timestamp(self) -> Optional[np.datetime64]:
        return self._timestamp

    def begin_row(self, timestamp: np.datetime64) -> None:
        self.reset()
        self._timestamp = timestamp

    def reset(self) -> None:
        self._samples.clear()
        self._timestamp = None

    def samples(self, vector_name: str) -> np.ndarray:
        if self._timestamp is None:
            raise ValueError("No active row in sample cache, call begin_row() first")

        if vector_name not in self._samples:
            self._samples[vector_name] = self._collect(vector_name, self._timestamp)
        return self._samples[vector_name]

    def _collect(self, vector_name: str, timestamp: np.datetime64) -> np.ndarray:
        # Runs may have different simulated durations, runs that do not cover
        # the timestamp contribute nothing
        values = [
            run.value_at(vector_name, timestamp)
            for run in self._runs
            if run.covers(timestamp)
        ]
        return np.array(values, dtype=np.float64)


@dataclass(frozen=True)
class QuantileTable:
    """Quantile values with one row per time axis entry and one column per request,
    columns in the order the requests were given.
    """

    dates: np.ndarray
    requests: Tuple[QuantileRequest, ...]
    values: np.ndarray

    def __post_init__(self) -> None:
        expected_shape = (len(self.dates), len(self.requests))
        if self.values.shape != expected_shape:
            raise ValueError(
                f"Quantile values have shape {self.values.shape}, "
                f"expected {expected_shape}"
            )

    @property
    def num_rows(self) -> int:
        return len(self.dates)

    @property
    def num_columns(self) -> int:
        return len(self.requests)

    @property
    def vectors(self) -> List[str]:
        return [request.vector for request in self.requests]

    @property
    def quantiles(self) -> List[float]:
        return [request.quantile for request in self.requests]

    def value(self, row: int, column: int) -> float:
        if not 0 <= row < self.num_rows:
            raise IndexError(f"Row {row} out of range [0, {self.num_rows})")
        if not 0 <= column < self.num_columns:
            raise IndexError(f"Column {column} out of range [0, {self.num_columns})")
        return float(self.values[row, column])

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(
            self.values, columns=[str(request) for request in self.requests]
        )
        df.insert(0, "DATE", pd.to_datetime(self.dates))
        return df


class QuantileResampler:
    """Computes per timestep empirical quantiles of summary vectors across all runs
    in an ensemble.

    For every row of the time axis the value of each requested vector is gathered from
    every run whose native time range includes the row's timestamp. The gathered
    samples are shared by all requests for the same vector within the row, and thrown
    away before moving on to the next row.
    """

    def __init__(self, ensemble: EnsembleModel) -> None:
        self._ensemble = ensemble

    def resample(
        self,
        requests: Sequence[QuantileRequest],
        time_axis: Optional[np.ndarray] = None,
    ) -> QuantileTable:
        if time_axis is None:
            time_axis = self._ensemble.time_axis

        columns_per_vector: Dict[str, List[int]] = {}
        for column, request in enumerate(requests):
            columns_per_vector.setdefault(request.vector, []).append(column)

        LOGGER.debug(
            f"Resampling {len(requests)} quantile requests for "
            f"{len(columns_per_vector)} vectors on {len(time_axis)} timesteps"
        )

        values = np.empty((len(time_axis), len(requests)), dtype=np.float64)
        cache = SampleCache(self._ensemble.runs)

        for row, timestamp in enumerate(time_axis):
            cache.begin_row(timestamp)
            for vector_name, columns in columns_per_vector.items():
                samples = cache.samples(vector_name)
                if samples.size == 0:
                    raise ValueError(
                        f"No run covers time {timestamp} for vector {vector_name}"
                    )
                for column in columns:
                    values[row, column] = empirical_quantile(
                        samples, requests[column].quantile
                    )
        cache.reset()

        return QuantileTable(
            dates=np.asarray(time_axis).astype("datetime64[s]"),
            requests=tuple(requests),
            values=values,
        )
