"""Sample — one (timestamp, value, flag) observation."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class Sample:
    """A single observation handed out by series lookups and iterators.

    Attributes
    ----------
    date : pd.Period
        Timestamp at the series precision.
    value : float
        Data value; may be the series' missing sentinel.
    flag : str
        Optional data flag, empty when unset.
    """

    date: pd.Period
    value: float
    flag: str = ""
