from .case_list import expand_case_list
from .config_file import (
    QUANTILE_CONFIG_JSON_SCHEMA,
    OutputSpec,
    QuantileConfig,
    load_quantile_config,
)
