from dataclasses import dataclass

from ensemble_quantiles._abbreviations.reservoir_simulation import SUMMARY_JOIN


@dataclass(frozen=True)
class QuantileRequest:
    vector: str
    quantile: float

    def __str__(self) -> str:
        return f"{self.vector}{SUMMARY_JOIN}{self.quantile:4.2f}"


def parse_quantile_request(token: str) -> QuantileRequest:
    """Parse a token on the form KEY:QUANTILE, e.g. WWCT:OP_1:0.10 or FOPT:0.90.

    The last ':' separated segment is the quantile, everything in front of it is
    joined back together as the summary key.
    """
    parts = token.split(SUMMARY_JOIN)
    if len(parts) < 2:
        raise ValueError(
            f"The key {token} is malformed - must be of the form SUMMARY_KEY:QUANTILE"
        )

    vector = SUMMARY_JOIN.join(parts[:-1])
    if not vector:
        raise ValueError(f"The key {token} is malformed - missing summary key")

    try:
        quantile = float(parts[-1])
    except ValueError as err:
        raise ValueError(
            f"Failed to interpret {parts[-1]} in {token} as a quantile "
            "- must be a number in [0, 1]"
        ) from err

    if not 0.0 <= quantile <= 1.0:
        raise ValueError(
            f"Quantile {parts[-1]} in {token} is outside the valid range [0, 1]"
        )

    return QuantileRequest(vector=vector, quantile=quantile)
