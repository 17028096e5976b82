from ._provider_impl_arrow import ProviderImplArrow
from .summary_run_provider import (
    SummaryRunProvider,
    SummaryVectorNotFoundError,
    TimeOutOfRangeError,
    VectorMetadata,
)
from .summary_run_provider_factory import create_run_provider
