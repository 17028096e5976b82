from typing import Callable, Dict

from ._plain_formatter import PlainFormatter
from ._s3graph_formatter import S3GraphFormatter
from .output_formatter import OutputFormat, OutputFormatter

_FORMATTER_FACTORIES: Dict[OutputFormat, Callable[[], OutputFormatter]] = {
    OutputFormat.S3GRAPH: S3GraphFormatter,
    OutputFormat.HEADER: lambda: PlainFormatter(add_header=True),
    OutputFormat.PLAIN: lambda: PlainFormatter(add_header=False),
}


def create_output_formatter(output_format: OutputFormat) -> OutputFormatter:
    return _FORMATTER_FACTORIES[output_format]()
