import logging
from pathlib import Path
from typing import Union

from ._provider_impl_arrow import ProviderImplArrow
from .summary_run_provider import SummaryRunProvider

LOGGER = logging.getLogger(__name__)


def create_run_provider(path: Union[str, Path]) -> SummaryRunProvider:
    """Load a single simulation run from disk.

    Files with the .arrow suffix are read as Arrow IPC summary tables. Any other path
    is treated as an Eclipse case (.DATA, .SMSPEC, .UNSMRY or a bare case name) and
    read through ecl, which must then be installed.
    """
    path = Path(path)

    if path.suffix.lower() == ".arrow":
        if not path.is_file():
            raise ValueError(f"Summary file {path} does not exist")
        return ProviderImplArrow.from_arrow_file(path)

    # Only pull in ecl when we actually have an Eclipse case to read
    # pylint: disable=import-outside-toplevel
    try:
        from ._eclsum_import import load_eclsum_into_table
    except ImportError as err:
        raise ValueError(
            f"Reading Eclipse case {path} requires the ecl package, "
            "install with: pip install ensemble-quantiles[ecl]"
        ) from err

    LOGGER.debug(f"Reading Eclipse case: {path}")
    try:
        table = load_eclsum_into_table(str(path))
    except (IOError, ValueError) as err:
        raise ValueError(f"Failed to load Eclipse summary case {path}") from err

    return ProviderImplArrow(str(path), table)
