import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc

from ._field_metadata import create_vector_metadata_from_field_meta
from ._resampling import interpolate_at_time
from .summary_run_provider import (
    SummaryRunProvider,
    SummaryVectorNotFoundError,
    TimeOutOfRangeError,
    VectorMetadata,
)

# Since PyArrow's actual compute functions are not seen by pylint
# pylint: disable=no-member


LOGGER = logging.getLogger(__name__)


def _sort_table_on_date(table: pa.Table) -> pa.Table:
    indices = pc.sort_indices(table, sort_keys=[("DATE", "ascending")])
    return table.take(indices)


class ProviderImplArrow(SummaryRunProvider):
    """Implements a SummaryRunProvider on top of a single run's summary table.

    The table must contain a DATE column and one numeric column per vector. Vector
    metadata is read from the schema's field metadata.
    """

    def __init__(self, run_id: str, table: pa.Table) -> None:
        if "DATE" not in table.schema.names:
            raise ValueError(f"No DATE column present in summary data for {run_id}")
        if table.num_rows == 0:
            raise ValueError(f"Summary data for {run_id} contains no time steps")

        self._run_id = run_id
        self._table = _sort_table_on_date(table)
        self._vector_names: List[str] = [
            colname
            for colname in self._table.schema.names
            if colname not in ["DATE", "REAL", "ENSEMBLE"]
        ]
        self._dates: np.ndarray = (
            self._table.column("DATE").to_numpy().astype("datetime64[s]")
        )
        self._cached_vectors: Dict[str, np.ndarray] = {}
        # Parsing the field metadata is expensive, keep the result per vector
        self._cached_metadata: Dict[str, Optional[VectorMetadata]] = {}

        LOGGER.debug(
            f"init {run_id}: #vector_names={len(self._vector_names)}, "
            f"#dates={len(self._dates)}, "
            f"range=[{self._dates[0]}, {self._dates[-1]}]"
        )

    @staticmethod
    def from_arrow_file(arrow_file_name: Union[str, Path]) -> "ProviderImplArrow":
        LOGGER.debug(f"loading table from arrow file: {arrow_file_name}")
        source = pa.memory_map(str(arrow_file_name), "r")
        reader = pa.ipc.RecordBatchFileReader(source)
        return ProviderImplArrow(str(arrow_file_name), reader.read_all())

    def _get_vector_array(self, vector_name: str) -> np.ndarray:
        if vector_name not in self._cached_vectors:
            if vector_name not in self._vector_names:
                raise SummaryVectorNotFoundError(
                    f"Vector {vector_name} not found in {self._run_id}"
                )
            self._cached_vectors[vector_name] = (
                self._table.column(vector_name).to_numpy().astype(np.float64)
            )
        return self._cached_vectors[vector_name]

    def run_id(self) -> str:
        return self._run_id

    def vector_names(self) -> List[str]:
        return self._vector_names

    def vector_metadata(self, vector_name: str) -> Optional[VectorMetadata]:
        if vector_name not in self._vector_names:
            raise SummaryVectorNotFoundError(
                f"Vector {vector_name} not found in {self._run_id}"
            )
        if vector_name not in self._cached_metadata:
            self._cached_metadata[vector_name] = create_vector_metadata_from_field_meta(
                self._table.field(vector_name)
            )
        return self._cached_metadata[vector_name]

    def start_time(self) -> np.datetime64:
        return self._dates[0]

    def end_time(self) -> np.datetime64:
        return self._dates[-1]

    def value_at(self, vector_name: str, timestamp: np.datetime64) -> float:
        values = self._get_vector_array(vector_name)

        if not self.covers(timestamp):
            raise TimeOutOfRangeError(
                f"Time {timestamp} is outside the range "
                f"[{self.start_time()}, {self.end_time()}] of {self._run_id}"
            )

        metadata = self.vector_metadata(vector_name)
        is_rate = metadata.is_rate if metadata else False

        return interpolate_at_time(timestamp, self._dates, values, is_rate)
