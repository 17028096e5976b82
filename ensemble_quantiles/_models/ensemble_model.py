import logging
import pathlib
import warnings
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from ensemble_quantiles._providers import (
    SummaryRunProvider,
    VectorMetadata,
    create_run_provider,
)

from .time_axis import DEFAULT_NUM_INTERP, build_time_axis

LOGGER = logging.getLogger(__name__)

# Quantiles are not meaningful for smaller ensembles, ~100 realizations is recommended
MIN_REALIZATIONS = 10


class EnsembleModel:
    """Collection of simulation runs that are aggregated into quantile statistics.

    Runs are added one by one, after which `finalize()` builds the time axis shared by
    all runs. The ensemble start and end times are the earliest start and the latest
    end among the added runs. Metadata queries (unit, keyword, qualifiers) are answered
    by the first run added, assuming that all runs expose the same metadata. Use
    `check_vector_metadata()` to verify that assumption for a set of vectors.
    """

    def __init__(self, min_realizations: int = MIN_REALIZATIONS) -> None:
        self._min_realizations = min_realizations
        self._runs: List[SummaryRunProvider] = []
        self._start_time: Optional[np.datetime64] = None
        self._end_time: Optional[np.datetime64] = None
        self._time_axis: Optional[np.ndarray] = None

    def __repr__(self) -> str:
        return (
            f"EnsembleModel: #runs={len(self._runs)}, "
            f"range=[{self._start_time}, {self._end_time}]"
        )

    @classmethod
    def from_runs(
        cls,
        runs: Iterable[SummaryRunProvider],
        num_interp: int = DEFAULT_NUM_INTERP,
        min_realizations: int = MIN_REALIZATIONS,
    ) -> "EnsembleModel":
        ensemble = cls(min_realizations=min_realizations)
        for run in runs:
            ensemble.add_run(run)
        ensemble.finalize(num_interp)
        return ensemble

    @classmethod
    def from_paths(
        cls,
        paths: Sequence[Union[str, pathlib.Path]],
        num_interp: int = DEFAULT_NUM_INTERP,
        min_realizations: int = MIN_REALIZATIONS,
    ) -> "EnsembleModel":
        ensemble = cls(min_realizations=min_realizations)
        for path in paths:
            ensemble.load_run(path)
        ensemble.finalize(num_interp)
        return ensemble

    def load_run(self, path: Union[str, pathlib.Path]) -> SummaryRunProvider:
        LOGGER.info(f"Loading case: {path}")
        run = create_run_provider(path)
        self.add_run(run)
        return run

    def add_run(self, run: SummaryRunProvider) -> None:
        if self._time_axis is not None:
            raise ValueError("Cannot add runs to an ensemble that has been finalized")

        self._runs.append(run)

        if self._start_time is None or self._end_time is None:
            self._start_time = run.start_time()
            self._end_time = run.end_time()
        else:
            self._start_time = min(self._start_time, run.start_time())
            self._end_time = max(self._end_time, run.end_time())

    def finalize(self, num_interp: int = DEFAULT_NUM_INTERP) -> np.ndarray:
        """Builds the shared time axis. Must be called after all runs are added."""
        if not self._runs:
            raise ValueError("No simulation runs were matched by any CASE_LIST pattern")
        if len(self._runs) < self._min_realizations:
            raise ValueError(
                f"Too few realizations: quantiles make no sense with "
                f"{len(self._runs)} < {self._min_realizations} realizations; "
                "should have ~> 100"
            )

        self._time_axis = build_time_axis(self.start_time, self.end_time, num_interp)
        LOGGER.info(
            f"Time axis with {num_interp} points spanning "
            f"[{self._time_axis[0]}, {self._time_axis[-1]}] "
            f"for {len(self._runs)} realizations"
        )
        return self._time_axis

    @property
    def runs(self) -> List[SummaryRunProvider]:
        return self._runs

    @property
    def start_time(self) -> np.datetime64:
        if self._start_time is None:
            raise ValueError("Ensemble has no runs")
        return self._start_time

    @property
    def end_time(self) -> np.datetime64:
        if self._end_time is None:
            raise ValueError("Ensemble has no runs")
        return self._end_time

    @property
    def time_axis(self) -> np.ndarray:
        if self._time_axis is None:
            raise ValueError("Ensemble time axis is not built, call finalize() first")
        return self._time_axis

    @property
    def reference_run(self) -> SummaryRunProvider:
        if not self._runs:
            raise ValueError("Ensemble has no runs")
        return self._runs[0]

    def vector_metadata(self, vector_name: str) -> Optional[VectorMetadata]:
        return self.reference_run.vector_metadata(vector_name)

    def check_vector_metadata(self, vector_names: Iterable[str]) -> List[str]:
        """Compare unit and keyword of the given vectors in all runs against the
        reference run. Each mismatch is issued as a UserWarning, and the list of
        mismatch messages is returned.
        """
        mismatches: List[str] = []
        reference = self.reference_run

        for vector_name in dict.fromkeys(vector_names):
            ref_meta = reference.vector_metadata(vector_name)
            for run in self._runs[1:]:
                meta = run.vector_metadata(vector_name)
                if ref_meta is None or meta is None:
                    if ref_meta is not meta:
                        mismatches.append(
                            f"Metadata for {vector_name} is missing in one of "
                            f"{reference.run_id()} and {run.run_id()}"
                        )
                    continue
                if (meta.unit, meta.keyword) != (ref_meta.unit, ref_meta.keyword):
                    mismatches.append(
                        f"Metadata for {vector_name} in {run.run_id()} "
                        f"(unit={meta.unit}, keyword={meta.keyword}) differs from "
                        f"{reference.run_id()} "
                        f"(unit={ref_meta.unit}, keyword={ref_meta.keyword})"
                    )

        for message in mismatches:
            warnings.warn(message, UserWarning)

        return mismatches
