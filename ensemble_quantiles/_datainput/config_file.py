import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import jsonschema
import yaml

from ensemble_quantiles._formatters import OutputFormat
from ensemble_quantiles._models import (
    DEFAULT_NUM_INTERP,
    QuantileRequest,
    parse_quantile_request,
)

LOGGER = logging.getLogger(__name__)

COMMENT_START = "--"

# JSON Schema for the quantile configuration, common to both file syntaxes.
# Used as schema input for jsonschema.validate()
QUANTILE_CONFIG_JSON_SCHEMA = {
    "type": "object",
    "required": ["case_list", "output"],
    "properties": {
        "case_list": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "string"},
        },
        "num_interp": {"type": "integer"},
        "output": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["file", "format"],
                "properties": {
                    "file": {"type": "string"},
                    "format": {"type": "string"},
                    "keys": {"type": "array", "items": {"type": "string"}},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class OutputSpec:
    file: Path
    output_format: OutputFormat
    requests: Tuple[QuantileRequest, ...]


@dataclass(frozen=True)
class QuantileConfig:
    case_list: Tuple[str, ...]
    num_interp: int
    outputs: Tuple[OutputSpec, ...]


def _parse_keyword_config(text: str, config_file: Path) -> Dict[str, Any]:
    """Parse the keyword syntax, one item per line:

        CASE_LIST   simulation*/run*/CASE*.DATA
        NUM_INTERP  100
        OUTPUT      FILE1   S3GRAPH WWCT:OP_1:0.10  WWCT:OP_1:0.50

    Text following "--" on a line is a comment.
    """
    config: Dict[str, Any] = {"case_list": [], "output": []}

    for line_number, line in enumerate(text.splitlines(), start=1):
        tokens = line.split(COMMENT_START, 1)[0].split()
        if not tokens:
            continue

        keyword, args = tokens[0], tokens[1:]
        location = f"line {line_number} of {config_file}"

        if keyword == "CASE_LIST":
            if not args:
                raise ValueError(f"CASE_LIST needs at least one argument ({location})")
            config["case_list"].extend(args)
        elif keyword == "NUM_INTERP":
            if len(args) != 1:
                raise ValueError(f"NUM_INTERP needs exactly one argument ({location})")
            try:
                config["num_interp"] = int(args[0])
            except ValueError as err:
                raise ValueError(
                    f"NUM_INTERP value {args[0]} is not an integer ({location})"
                ) from err
        elif keyword == "OUTPUT":
            if len(args) < 2:
                raise ValueError(
                    f"OUTPUT needs a file name and a format ({location})"
                )
            config["output"].append(
                {"file": args[0], "format": args[1], "keys": args[2:]}
            )
        else:
            raise ValueError(f"Unrecognized keyword {keyword} ({location})")

    return config


def _read_config_dict(config_file: Path) -> Dict[str, Any]:
    text = config_file.read_text()
    if config_file.suffix.lower() in (".yml", ".yaml"):
        try:
            config = yaml.safe_load(text)
        except yaml.YAMLError as excep:
            extra_info = f"Failed to parse the configuration file {config_file}."
            if (problem_mark := getattr(excep, "problem_mark", None)) is not None:
                extra_info += (
                    " The typo is probably somewhere around "
                    f"line {problem_mark.line + 1}."
                )
            raise ValueError(f"{extra_info} {excep}") from excep
        return config if config is not None else {}
    return _parse_keyword_config(text, config_file)


def _resolve_path(path: str, config_folder: Path) -> str:
    return path if Path(path).is_absolute() else str(config_folder / path)


def _create_output_spec(output: Dict[str, Any], config_folder: Path) -> OutputSpec:
    output_format = OutputFormat.from_string_value(output["format"])
    if output_format is None:
        raise ValueError(
            f"Unrecognized format string {output['format']} for output "
            f"{output['file']}, must be one of "
            f"{', '.join(fmt.value for fmt in OutputFormat)}"
        )

    return OutputSpec(
        file=Path(_resolve_path(output["file"], config_folder)),
        output_format=output_format,
        requests=tuple(parse_quantile_request(key) for key in output.get("keys", [])),
    )


def load_quantile_config(config_file: Union[str, Path]) -> QuantileConfig:
    """Read and validate a quantile configuration file.

    Files with suffix .yml or .yaml are read as YAML, anything else with the keyword
    syntax. Relative paths are resolved against the folder of the configuration file.
    All errors are raised as ValueError before any simulation data is loaded.
    """
    config_file = Path(config_file)
    config_folder = config_file.resolve().parent

    config = _read_config_dict(config_file)

    try:
        jsonschema.validate(instance=config, schema=QUANTILE_CONFIG_JSON_SCHEMA)
    except jsonschema.exceptions.ValidationError as err:
        raise ValueError(
            f"Invalid configuration in {config_file}: {err.message}"
        ) from err

    # The schema accepts 3.0 as an integer
    num_interp = int(config.get("num_interp", DEFAULT_NUM_INTERP))
    if num_interp < 2:
        raise ValueError(f"NUM_INTERP must be >= 2, got {num_interp}")

    outputs: Dict[Path, OutputSpec] = {}
    for output in config["output"]:
        spec = _create_output_spec(output, config_folder)
        if spec.file in outputs:
            LOGGER.warning(f"Output {spec.file} is given more than once, using the last")
        outputs[spec.file] = spec

    case_list: List[str] = [
        _resolve_path(pattern, config_folder) for pattern in config["case_list"]
    ]

    LOGGER.info(
        f"Configuration {config_file}: {len(case_list)} CASE_LIST patterns, "
        f"NUM_INTERP={num_interp}, {len(outputs)} outputs"
    )

    return QuantileConfig(
        case_list=tuple(case_list),
        num_interp=num_interp,
        outputs=tuple(outputs.values()),
    )
