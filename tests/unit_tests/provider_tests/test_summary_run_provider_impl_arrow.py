import json
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pyarrow as pa
import pytest
from pyarrow import feather

from ensemble_quantiles._providers import (
    ProviderImplArrow,
    SummaryVectorNotFoundError,
    TimeOutOfRangeError,
    create_run_provider,
)


def _smry_meta(unit: str, is_rate: bool, keyword: str, **kwargs: object) -> Dict:
    meta = {
        "unit": unit,
        "is_total": not is_rate,
        "is_rate": is_rate,
        "is_historical": False,
        "keyword": keyword,
    }
    meta.update(kwargs)
    return meta


def _create_table(
    input_data: list, smry_meta: Optional[Dict[str, Dict]] = None
) -> pa.Table:
    # Turn rows into columns
    columns_with_header = list(zip(*input_data))

    field_list = []
    arrays = []
    for col in columns_with_header:
        colname = col[0]
        if colname == "DATE":
            field_list.append(pa.field("DATE", pa.timestamp("ms")))
        else:
            metadata = None
            if smry_meta and colname in smry_meta:
                metadata = {b"smry_meta": json.dumps(smry_meta[colname])}
            field_list.append(pa.field(colname, pa.float32(), metadata=metadata))
        arrays.append(list(col[1:]))

    return pa.table(arrays, schema=pa.schema(field_list))


# fmt:off
INPUT_DATA = [
    ["DATE",                                      "FOPT",  "FOPR", "WOPR:OP_1"],
    [np.datetime64("2020-01-01T00:00:00", "ms"),  0.0,     5.0,    1.0],
    [np.datetime64("2020-01-11T00:00:00", "ms"),  100.0,   10.0,   2.0],
    [np.datetime64("2020-01-21T00:00:00", "ms"),  300.0,   20.0,   3.0],
]
# fmt:on

SMRY_META = {
    "FOPT": _smry_meta("SM3", False, "FOPT"),
    "FOPR": _smry_meta("SM3/DAY", True, "FOPR"),
    "WOPR:OP_1": _smry_meta("SM3/DAY", True, "WOPR", wgname="OP_1"),
}


def _create_provider() -> ProviderImplArrow:
    return ProviderImplArrow("dummy", _create_table(INPUT_DATA, SMRY_META))


def test_time_range() -> None:
    provider = _create_provider()
    assert provider.start_time() == np.datetime64("2020-01-01T00:00:00", "s")
    assert provider.end_time() == np.datetime64("2020-01-21T00:00:00", "s")
    assert provider.covers(np.datetime64("2020-01-21T00:00:00", "s"))
    assert not provider.covers(np.datetime64("2020-01-21T00:00:01", "s"))


def test_vector_names() -> None:
    assert _create_provider().vector_names() == ["FOPT", "FOPR", "WOPR:OP_1"]


def test_value_at_interpolates_totals_linearly() -> None:
    provider = _create_provider()
    assert provider.value_at("FOPT", np.datetime64("2020-01-01", "s")) == 0.0
    assert provider.value_at("FOPT", np.datetime64("2020-01-06", "s")) == 50.0
    assert provider.value_at("FOPT", np.datetime64("2020-01-16", "s")) == 200.0
    assert provider.value_at("FOPT", np.datetime64("2020-01-21", "s")) == 300.0


def test_value_at_backfills_rates() -> None:
    provider = _create_provider()
    assert provider.value_at("FOPR", np.datetime64("2020-01-01", "s")) == 5.0
    assert provider.value_at("FOPR", np.datetime64("2020-01-06", "s")) == 10.0
    assert provider.value_at("FOPR", np.datetime64("2020-01-11", "s")) == 10.0
    assert provider.value_at("FOPR", np.datetime64("2020-01-11T00:00:01", "s")) == 20.0
    assert provider.value_at("FOPR", np.datetime64("2020-01-21", "s")) == 20.0


def test_value_at_out_of_range() -> None:
    provider = _create_provider()
    with pytest.raises(TimeOutOfRangeError):
        provider.value_at("FOPT", np.datetime64("2019-12-31", "s"))
    with pytest.raises(TimeOutOfRangeError):
        provider.value_at("FOPT", np.datetime64("2020-01-22", "s"))


def test_unknown_vector() -> None:
    provider = _create_provider()
    with pytest.raises(SummaryVectorNotFoundError):
        provider.value_at("GOPT:G1", np.datetime64("2020-01-06", "s"))
    with pytest.raises(KeyError):
        provider.vector_metadata("GOPT:G1")


def test_vector_metadata_from_json() -> None:
    provider = _create_provider()

    meta = provider.vector_metadata("WOPR:OP_1")
    assert meta is not None
    assert meta.unit == "SM3/DAY"
    assert meta.is_rate
    assert not meta.is_total
    assert meta.keyword == "WOPR"
    assert meta.wgname == "OP_1"
    assert meta.get_num is None
    assert meta.needs_wgname
    assert not meta.needs_num


def test_vector_metadata_from_flat_properties() -> None:
    table = _create_table(INPUT_DATA)
    idx = table.schema.get_field_index("FOPR")
    field = table.schema.field(idx).with_metadata(
        {
            b"unit": b"SM3/DAY",
            b"is_rate": b"True",
            b"is_total": b"False",
            b"is_historical": b"False",
            b"keyword": b"FOPR",
        }
    )
    table = table.cast(table.schema.set(idx, field))
    provider = ProviderImplArrow("flat", table)

    meta = provider.vector_metadata("FOPR")
    assert meta is not None
    assert meta.unit == "SM3/DAY"
    assert meta.is_rate
    assert meta.keyword == "FOPR"
    assert meta.wgname is None
    # Backfill applies as the vector is flagged as a rate
    assert provider.value_at("FOPR", np.datetime64("2020-01-06", "s")) == 10.0


def test_missing_metadata() -> None:
    provider = ProviderImplArrow("no_meta", _create_table(INPUT_DATA))
    assert provider.vector_metadata("FOPR") is None
    # Without metadata, vectors are interpolated linearly
    assert provider.value_at("FOPR", np.datetime64("2020-01-06", "s")) == 7.5


def test_unsorted_dates_are_sorted() -> None:
    shuffled = [INPUT_DATA[0], INPUT_DATA[3], INPUT_DATA[1], INPUT_DATA[2]]
    provider = ProviderImplArrow("shuffled", _create_table(shuffled, SMRY_META))
    assert provider.start_time() == np.datetime64("2020-01-01", "s")
    assert provider.end_time() == np.datetime64("2020-01-21", "s")
    assert provider.value_at("FOPT", np.datetime64("2020-01-16", "s")) == 200.0


def test_invalid_tables() -> None:
    with pytest.raises(ValueError, match="DATE"):
        ProviderImplArrow("no_date", pa.table({"FOPT": [1.0, 2.0]}))

    empty = _create_table(INPUT_DATA).slice(0, 0)
    with pytest.raises(ValueError, match="no time steps"):
        ProviderImplArrow("empty", empty)


def test_create_from_arrow_file(tmp_path: Path) -> None:
    arrow_file = tmp_path / "CASE-1.arrow"
    feather.write_feather(_create_table(INPUT_DATA, SMRY_META), dest=str(arrow_file))

    provider = create_run_provider(arrow_file)
    assert provider.run_id() == str(arrow_file)
    assert provider.value_at("FOPT", np.datetime64("2020-01-06", "s")) == 50.0
    assert provider.vector_metadata("FOPT").unit == "SM3"


def test_create_from_missing_arrow_file(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="does not exist"):
        create_run_provider(tmp_path / "missing.arrow")
