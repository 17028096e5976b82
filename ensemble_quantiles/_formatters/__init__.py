from ._plain_formatter import PlainFormatter
from ._s3graph_formatter import S3GraphFormatter
from .output_formatter import ColumnMetadata, OutputFormat, OutputFormatter
from .output_formatter_factory import create_output_formatter
