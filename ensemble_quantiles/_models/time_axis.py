import numpy as np

DEFAULT_NUM_INTERP = 50


def build_time_axis(
    start_time: np.datetime64, end_time: np.datetime64, num_interp: int
) -> np.ndarray:
    """Returns `num_interp` evenly spaced timestamps spanning [start_time, end_time].

    Entry i is start_time + i * (end_time - start_time) / (num_interp - 1), with the
    offset truncated to whole seconds. The first and last entries are exactly
    start_time and end_time. The returned array has dtype datetime64[s].
    """
    if num_interp < 2:
        raise ValueError(
            f"Interpolation point count must be >= 2, got {num_interp}"
        )

    start_s = np.datetime64(start_time, "s")
    end_s = np.datetime64(end_time, "s")
    span_s = int((end_s - start_s) / np.timedelta64(1, "s"))

    if span_s < 0:
        raise ValueError(f"Start time {start_s} is after end time {end_s}")
    if span_s < num_interp - 1:
        raise ValueError(
            f"Time span [{start_s}, {end_s}] is too short for {num_interp} "
            "strictly increasing interpolation points"
        )

    offsets_s = (np.arange(num_interp, dtype=np.int64) * span_s) // (num_interp - 1)
    return start_s + offsets_s.astype("timedelta64[s]")
