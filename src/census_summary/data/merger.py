"""Merge per-segment content frames of one state on LOGRECNO."""

from functools import reduce
from typing import List

import pandas as pd

RECORD_KEY = "LOGRECNO"


def merge_on_record_key(frames: List[pd.DataFrame]) -> pd.DataFrame:
    """
    Outer-join content frames on LOGRECNO.

    A record present in any frame is kept; contents missing from a frame
    are null. Columns are LOGRECNO followed by each frame's contents in
    frame order.

    Args:
        frames: Frames each holding LOGRECNO plus content columns

    Returns:
        One wide frame keyed by LOGRECNO
    """
    if not frames:
        return pd.DataFrame({RECORD_KEY: pd.Series([], dtype="int64")})

    merged = reduce(
        lambda left, right: left.merge(right, on=RECORD_KEY, how="outer", sort=False),
        frames,
    )
    contents = [c for frame in frames for c in frame.columns if c != RECORD_KEY]
    return merged[[RECORD_KEY] + contents].reset_index(drop=True)
