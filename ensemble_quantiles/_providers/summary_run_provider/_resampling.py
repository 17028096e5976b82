import numpy as np


def interpolate_backfill(
    x: np.ndarray, xp: np.ndarray, yp: np.ndarray, yleft: float, yright: float
) -> np.ndarray:
    # pylint: disable=invalid-name
    """Do back-filling interpolation of the coordinates in xp and yp, evaluated at the
    x-coordinates specified in x.
    Note that xp and yp must be arrays of the same length.
    It is assumed that both the x and the xp array is sorted in increasing order.
    """

    # Finds the leftmost valid insertion indices for the values x in xp
    indices = np.searchsorted(xp, x, side="left")

    padded_y = np.concatenate((yp, np.array([yright])))

    ret_arr = padded_y[indices]

    if x[0] < xp[0]:
        idx = np.searchsorted(x, xp[0])
        ret_arr[0:idx] = yleft

    return ret_arr


def interpolate_at_time(
    timestamp: np.datetime64,
    raw_dates: np.ndarray,
    raw_values: np.ndarray,
    is_rate: bool,
) -> float:
    """Evaluate a single vector at `timestamp` on its native time grid.

    Rates are valid backwards in time from the report step where they are written,
    so they are back-filled. Everything else is interpolated linearly. The caller is
    responsible for checking that `timestamp` lies within the range of `raw_dates`.
    """
    x_arr = np.array([timestamp]).astype("datetime64[s]").astype(np.int64)
    xp_arr = raw_dates.astype("datetime64[s]").astype(np.int64)
    yp_arr = raw_values.astype(np.float64)

    if is_rate:
        values = interpolate_backfill(x_arr, xp_arr, yp_arr, 0, 0)
    else:
        values = np.interp(x_arr, xp_arr, yp_arr)

    return float(values[0])
