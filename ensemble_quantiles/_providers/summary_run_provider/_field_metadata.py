import json
from typing import Any, Dict, Optional

import pyarrow as pa

from .summary_run_provider import VectorMetadata


def _create_vector_metadata_dict_from_field_meta(
    field: pa.Field,
) -> Optional[Dict[str, Any]]:
    """Create dictionary with vector metadata from data in the field's metadata.

    Two layouts are recognized: a JSON document stored under the "smry_meta" key,
    and the flat layout written by ecl2df where every property is its own key with
    a byte string value.
    """
    if not field.metadata:
        return None

    meta_as_str = field.metadata.get(b"smry_meta")
    if meta_as_str:
        return json.loads(meta_as_str)

    return {
        key.decode(): value.decode() for key, value in field.metadata.items()
    }


def _as_bool(value: Any) -> bool:
    # ecl2df writes all flat values as strings
    if isinstance(value, str):
        return value == "True"
    return bool(value)


def create_vector_metadata_from_field_meta(field: pa.Field) -> Optional[VectorMetadata]:
    """Create VectorMetadata from keywords stored in the field's metadata.
    All keys except 'wgname' and 'get_num' must be present in order to return a
    valid metadata object.
    """

    meta_dict = _create_vector_metadata_dict_from_field_meta(field)
    if not meta_dict:
        return None

    try:
        unit = str(meta_dict["unit"])
        is_total = _as_bool(meta_dict["is_total"])
        is_rate = _as_bool(meta_dict["is_rate"])
        is_historical = _as_bool(meta_dict["is_historical"])
        keyword = str(meta_dict["keyword"])
    except KeyError:
        return None

    wgname = meta_dict.get("wgname")
    get_num = meta_dict.get("get_num")

    return VectorMetadata(
        unit=unit,
        is_total=is_total,
        is_rate=is_rate,
        is_historical=is_historical,
        keyword=keyword,
        wgname=str(wgname) if wgname not in (None, "", "None") else None,
        get_num=int(get_num) if get_num not in (None, "", "None") else None,
    )
