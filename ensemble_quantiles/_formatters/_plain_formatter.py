from typing import List, Sequence

from ensemble_quantiles._models import QuantileTable

from .output_formatter import (
    ColumnMetadata,
    OutputFormatter,
    calendar_dates,
    day_offsets,
)

TIME_HEADER = "--    DAYS      DATE    "
TIME_DASH = "-" * 24
KEY_DASH = "-" * 25


class PlainFormatter(OutputFormatter):
    """Columns of data, optionally with a two line header naming the columns.

    Each row holds the day offset from the ensemble start, the date, and one value
    per column.
    """

    def __init__(self, add_header: bool = False) -> None:
        self._add_header = add_header

    def render(
        self,
        table: QuantileTable,
        columns: Sequence[ColumnMetadata],
        origin: str,
    ) -> str:
        lines: List[str] = []

        if self._add_header:
            lines.append(
                TIME_HEADER
                + "".join(
                    f" {column.vector:>18}:{quantile:4.2f} "
                    for column, quantile in zip(columns, table.quantiles)
                )
            )
            lines.append(TIME_DASH + KEY_DASH * table.num_columns)

        if table.num_rows > 0:
            days = day_offsets(table.dates, table.dates[0])
            for row, date in enumerate(calendar_dates(table.dates)):
                lines.append(
                    f"{days[row]:10.2f} "
                    + f"  {date:%d/%m/%Y} "
                    + "".join(f"{value:24.5f} " for value in table.values[row])
                )

        return "".join(f"{line}\n" for line in lines)
