from .summary_run_provider import (
    ProviderImplArrow,
    SummaryRunProvider,
    SummaryVectorNotFoundError,
    TimeOutOfRangeError,
    VectorMetadata,
    create_run_provider,
)
