import glob
import logging
from pathlib import Path
from typing import List, Sequence

LOGGER = logging.getLogger(__name__)


def expand_case_list(patterns: Sequence[str]) -> List[Path]:
    """Expand CASE_LIST glob patterns into the paths of the simulation runs.

    Matches of each pattern are sorted, and the union over all patterns is returned in
    the order the patterns were given. A path matched by more than one pattern is only
    included once.
    """
    paths: List[Path] = []
    visited = set()

    for pattern in patterns:
        matches = sorted(glob.glob(pattern))
        if not matches:
            LOGGER.warning(f"CASE_LIST pattern {pattern} did not match any files")

        for match in matches:
            path = Path(match)
            if path.resolve() in visited:
                continue
            visited.add(path.resolve())
            paths.append(path)

    LOGGER.info(f"CASE_LIST patterns matched {len(paths)} simulation runs")
    return paths
