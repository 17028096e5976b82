import abc
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ensemble_quantiles._abbreviations.reservoir_simulation import (
    simulation_vector_needs_num,
    simulation_vector_needs_wgname,
)


class SummaryVectorNotFoundError(KeyError):
    """Raised when a run has no vector with the requested name"""


class TimeOutOfRangeError(ValueError):
    """Raised when a point in time lies outside a run's native time range"""


@dataclass(frozen=True)
class VectorMetadata:
    unit: str
    is_total: bool
    is_rate: bool
    is_historical: bool
    keyword: str
    wgname: Optional[str]
    get_num: Optional[int]

    @property
    def needs_wgname(self) -> bool:
        return simulation_vector_needs_wgname(self.keyword)

    @property
    def needs_num(self) -> bool:
        return simulation_vector_needs_num(self.keyword)


# Class provides summary data for a single simulation run
class SummaryRunProvider(abc.ABC):
    @abc.abstractmethod
    def run_id(self) -> str:
        """Returns identifier of the run, typically the path it was loaded from."""

    @abc.abstractmethod
    def vector_names(self) -> List[str]:
        """Returns list of all available vector names."""

    @abc.abstractmethod
    def vector_metadata(self, vector_name: str) -> Optional[VectorMetadata]:
        """Returns metadata for the specified vector. Returns None if no metadata
        exists or if any of the non-optional properties of `VectorMetadata` are missing.
        Raises SummaryVectorNotFoundError if the vector does not exist.
        """

    @abc.abstractmethod
    def start_time(self) -> np.datetime64:
        """Returns first native time of the run, with second resolution."""

    @abc.abstractmethod
    def end_time(self) -> np.datetime64:
        """Returns last native time of the run, with second resolution."""

    @abc.abstractmethod
    def value_at(self, vector_name: str, timestamp: np.datetime64) -> float:
        """Returns the value of `vector_name` at `timestamp`, interpolated within
        the run's native time grid.

        Raises TimeOutOfRangeError if `timestamp` is outside the native range of the
        run, and SummaryVectorNotFoundError if the vector does not exist.
        """

    def covers(self, timestamp: np.datetime64) -> bool:
        """Returns True if `timestamp` lies within the native range, both ends
        included."""
        return bool(self.start_time() <= timestamp <= self.end_time())
