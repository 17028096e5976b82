import abc
import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ensemble_quantiles._abbreviations.reservoir_simulation import (
    SUMMARY_JOIN,
    simulation_vector_breakdown,
    simulation_vector_needs_num,
    simulation_vector_needs_wgname,
)
from ensemble_quantiles._models import QuantileTable
from ensemble_quantiles._providers import VectorMetadata

LOGGER = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


class OutputFormat(Enum):
    S3GRAPH = "S3GRAPH"
    HEADER = "HEADER"
    PLAIN = "PLAIN"

    @classmethod
    def from_string_value(cls, value: str) -> Optional["OutputFormat"]:
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class ColumnMetadata:
    """Per column information used in output headers"""

    vector: str
    keyword: str
    unit: str
    qualifier: str

    @classmethod
    def from_vector_metadata(
        cls, vector: str, metadata: Optional[VectorMetadata]
    ) -> "ColumnMetadata":
        """Create column metadata for `vector`. Parts missing from `metadata`, or all
        of them if no metadata is available, are taken from the vector name.
        """
        keyword, wgname, num = simulation_vector_breakdown(vector)
        unit = ""
        if metadata is not None:
            keyword = metadata.keyword or keyword
            unit = metadata.unit
            if metadata.wgname:
                wgname = metadata.wgname
            if metadata.get_num is not None:
                num = str(metadata.get_num)

        need_wgname = simulation_vector_needs_wgname(keyword)
        need_num = simulation_vector_needs_num(keyword)

        # There is no established way to give both, so they are joined
        if need_wgname and need_num:
            qualifier = f"{wgname or ''}{SUMMARY_JOIN}{num or ''}"
        elif need_num:
            qualifier = num or ""
        elif need_wgname:
            qualifier = wgname or ""
        else:
            qualifier = " "

        return cls(vector=vector, keyword=keyword, unit=unit, qualifier=qualifier)


def calendar_dates(dates: np.ndarray) -> List[datetime.datetime]:
    return [pd.Timestamp(date).to_pydatetime() for date in dates]


def day_offsets(dates: np.ndarray, start_time: np.datetime64) -> np.ndarray:
    """Offsets in (fractional) days from `start_time`"""
    seconds = (dates - start_time).astype("timedelta64[s]").astype(np.int64)
    return seconds / SECONDS_PER_DAY


class OutputFormatter(abc.ABC):
    @abc.abstractmethod
    def render(
        self,
        table: QuantileTable,
        columns: Sequence[ColumnMetadata],
        origin: str,
    ) -> str:
        """Returns the text for `table`. `columns` holds header information for each
        column of `table`, and `origin` is a name identifying the output.
        """

    def write(
        self, output_file: Path, table: QuantileTable, columns: Sequence[ColumnMetadata]
    ) -> None:
        if len(columns) != table.num_columns:
            raise ValueError(
                f"Got metadata for {len(columns)} columns, "
                f"table has {table.num_columns}"
            )
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(self.render(table, columns, output_file.stem))
        LOGGER.debug(f"Wrote {table.num_rows} rows to {output_file}")
