from enum import Enum
from typing import Optional, Tuple

SUMMARY_JOIN = ":"


class SimulationVectorType(Enum):
    AQUIFER = "aquifer"
    BLOCK = "block"
    COMPLETION = "completion"
    FIELD = "field"
    GROUP = "group"
    LOCAL_BLOCK = "local_block"
    LOCAL_COMPLETION = "local_completion"
    LOCAL_WELL = "local_well"
    MISC = "misc"
    NETWORK = "network"
    REGION = "region"
    REGION_2_REGION = "region_2_region"
    SEGMENT = "segment"
    WELL = "well"


_NEEDS_WGNAME = {
    SimulationVectorType.COMPLETION,
    SimulationVectorType.GROUP,
    SimulationVectorType.LOCAL_COMPLETION,
    SimulationVectorType.LOCAL_WELL,
    SimulationVectorType.SEGMENT,
    SimulationVectorType.WELL,
}

_NEEDS_NUM = {
    SimulationVectorType.AQUIFER,
    SimulationVectorType.BLOCK,
    SimulationVectorType.COMPLETION,
    SimulationVectorType.LOCAL_BLOCK,
    SimulationVectorType.LOCAL_COMPLETION,
    SimulationVectorType.REGION,
    SimulationVectorType.REGION_2_REGION,
    SimulationVectorType.SEGMENT,
}


def simulation_vector_type(keyword: str) -> SimulationVectorType:
    """Returns the kind of summary variable given by an Eclipse keyword, e.g. WELL
    for WOPR and BLOCK for BPR. The kind is decided by the leading letter(s) of
    the keyword, following the Eclipse naming rules.
    """
    if not keyword:
        return SimulationVectorType.MISC

    first = keyword[0]
    if first == "L" and len(keyword) > 1:
        return {
            "B": SimulationVectorType.LOCAL_BLOCK,
            "C": SimulationVectorType.LOCAL_COMPLETION,
            "W": SimulationVectorType.LOCAL_WELL,
        }.get(keyword[1], SimulationVectorType.MISC)

    if first == "R":
        # Region to region flows, e.g. ROFT and RGFR, have an F in third position
        if len(keyword) > 2 and keyword[2] == "F":
            return SimulationVectorType.REGION_2_REGION
        return SimulationVectorType.REGION

    return {
        "A": SimulationVectorType.AQUIFER,
        "B": SimulationVectorType.BLOCK,
        "C": SimulationVectorType.COMPLETION,
        "F": SimulationVectorType.FIELD,
        "G": SimulationVectorType.GROUP,
        "N": SimulationVectorType.NETWORK,
        "S": SimulationVectorType.SEGMENT,
        "W": SimulationVectorType.WELL,
    }.get(first, SimulationVectorType.MISC)


def simulation_vector_needs_wgname(keyword: str) -> bool:
    return simulation_vector_type(keyword) in _NEEDS_WGNAME


def simulation_vector_needs_num(keyword: str) -> bool:
    return simulation_vector_type(keyword) in _NEEDS_NUM


def simulation_vector_breakdown(
    vector: str,
) -> Tuple[str, Optional[str], Optional[str]]:
    """Splits a joined summary key into keyword, well/group name and number part.
    E.g. WOPR:OP_1 gives (WOPR, OP_1, None), RPR:3 gives (RPR, None, 3) and
    CWIT:I1:5432 gives (CWIT, I1, 5432). The number part is returned as written in
    the key, block vectors may carry it on i,j,k form.
    """
    parts = vector.split(SUMMARY_JOIN)
    keyword = parts[0]
    rest = parts[1:]
    vector_type = simulation_vector_type(keyword)

    wgname: Optional[str] = None
    num: Optional[str] = None
    if vector_type in _NEEDS_WGNAME and vector_type in _NEEDS_NUM:
        if rest:
            wgname = rest[0]
        if len(rest) > 1:
            num = SUMMARY_JOIN.join(rest[1:])
    elif vector_type in _NEEDS_WGNAME:
        wgname = SUMMARY_JOIN.join(rest) if rest else None
    elif vector_type in _NEEDS_NUM:
        num = SUMMARY_JOIN.join(rest) if rest else None

    return keyword, wgname, num
