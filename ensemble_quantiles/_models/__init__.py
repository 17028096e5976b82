from .ensemble_model import MIN_REALIZATIONS, EnsembleModel
from .quantile_request import QuantileRequest, parse_quantile_request
from .quantile_resampler import (
    QuantileResampler,
    QuantileTable,
    SampleCache,
    empirical_quantile,
)
from .time_axis import DEFAULT_NUM_INTERP, build_time_axis
