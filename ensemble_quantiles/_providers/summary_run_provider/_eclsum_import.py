import json
import logging
import re
import time
from typing import Dict, Iterable, List

import pyarrow as pa
from ecl.summary import EclSum, EclSumKeyWordVector

from ensemble_quantiles._abbreviations.reservoir_simulation import SUMMARY_JOIN

LOGGER = logging.getLogger(__name__)


def _is_cpi_column(column_name: str) -> bool:
    return bool(re.match("^CPI:[A-Z0-9_-]{1,8}:[0-9]+,[0-9]+,[0-9]+$", column_name))


def _create_smry_meta_dict(
    eclsum: EclSum, column_names: Iterable[str]
) -> Dict[str, dict]:
    """Builds dictionary containing metadata for all the specified summary columns"""
    smry_meta = {}

    for col_name in column_names:
        node = eclsum.smspec_node(col_name)
        col_meta = {
            "unit": eclsum.unit(col_name),
            "is_total": eclsum.is_total(col_name),
            "is_rate": eclsum.is_rate(col_name),
            "is_historical": node.is_historical(),
            "keyword": node.keyword,
            "wgname": node.wgname,
        }

        num = node.get_num()
        if num is not None:
            col_meta["get_num"] = num

        smry_meta[col_name] = col_meta

    return smry_meta


def load_eclsum_into_table(case_name: str) -> pa.Table:
    """
    Reads data for a single Eclipse case into a PyArrow Table.
    DATE column is stored as an Arrow timestamp with ms resolution, timestamp[ms]
    Numeric columns are stored as 64 bit float.
    Summary meta data will be attached per field/column of the table's schema under the
    'smry_meta' key
    """
    start_s = time.perf_counter()

    eclsum = EclSum(
        case_name, join_string=SUMMARY_JOIN, include_restart=False, lazy_load=False
    )

    # Go via a set to prune out duplicate entries being returned by EclSumKeyWordVector
    column_names: List[str] = sorted(set(EclSumKeyWordVector(eclsum, add_keywords=True)))
    column_names = [colname for colname in column_names if not _is_cpi_column(colname)]

    smry_meta_dict = _create_smry_meta_dict(eclsum, column_names)

    field_list: List[pa.Field] = [pa.field("DATE", pa.timestamp("ms"))]
    for colname in column_names:
        field_metadata = {b"smry_meta": json.dumps(smry_meta_dict[colname])}
        field_list.append(pa.field(colname, pa.float64(), metadata=field_metadata))

    schema = pa.schema(field_list)

    # Extract vectors through EclSum.numpy_vector() instead of EclSum.pandas_frame()
    # since the latter fails on timestamps beyond 2262
    column_arrays = [eclsum.numpy_dates]
    for colname in column_names:
        column_arrays.append(eclsum.numpy_vector(colname))

    table = pa.table(column_arrays, schema=schema)

    LOGGER.debug(
        f"Read {table.shape} summary table from {case_name} "
        f"in {(time.perf_counter() - start_s):.2f}s"
    )

    return table
