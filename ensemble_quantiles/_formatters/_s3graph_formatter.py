from typing import List, Sequence

from ensemble_quantiles._models import QuantileTable

from .output_formatter import (
    ColumnMetadata,
    OutputFormatter,
    calendar_dates,
    day_offsets,
)

FIELD_WIDTH = 24
TIME_HEADER = "      DATE       TIME "
TIME_UNIT = "                 DAYS "
TIME_BLANK = " " * 22


def _field(text: str) -> str:
    return f"{text:>{FIELD_WIDTH}} "


class S3GraphFormatter(OutputFormatter):
    """User format for the S3GRAPH plotting tool.

    The header has an ORIGIN line followed by three lines with, per column, the
    keyword and quantile, the unit, and the qualifier (well/group name and/or number)
    needed to identify the vector. Data rows hold the date (DD-MM-YYYY), the day
    offset from the ensemble start and the values, in fixed width columns.
    """

    def render(
        self,
        table: QuantileTable,
        columns: Sequence[ColumnMetadata],
        origin: str,
    ) -> str:
        lines: List[str] = [f"ORIGIN {origin}"]

        lines.append(
            TIME_HEADER
            + "".join(
                _field(f"{column.keyword}:{quantile:4.2f}")
                for column, quantile in zip(columns, table.quantiles)
            )
        )
        lines.append(TIME_UNIT + "".join(_field(column.unit) for column in columns))
        lines.append(
            TIME_BLANK + "".join(_field(column.qualifier) for column in columns)
        )

        if table.num_rows > 0:
            days = day_offsets(table.dates, table.dates[0])
            for row, date in enumerate(calendar_dates(table.dates)):
                lines.append(
                    f"{date:%d-%m-%Y} "
                    + f"{days[row]:10.2f} "
                    + "".join(f"{value:24.5f} " for value in table.values[row])
                )

        return "\n".join(lines) + "\n"
