"""Immutable series configuration, loadable from YAML."""

from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from tscore.series import DEFAULT_MISSING, Series, create_series
from tscore.time import Interval

log = logging.getLogger(__name__)


def _date_key(raw: Any) -> Union[str, _dt.date]:
    # YAML turns 2001-06-15 into a date and 2001 into an int
    if isinstance(raw, (_dt.date, _dt.datetime)):
        return raw
    return str(raw)


@dataclass(frozen=True)
class SeriesConfig:
    """Immutable description of a series and the values to load into it.

    Example YAML::

        interval: Month
        start: 2000-01
        end: 2002-12
        missing: -999
        values:
          2001-06: 5.0
        flags:
          2001-06: E
    """

    interval: str
    start: Optional[str] = None
    end: Optional[str] = None
    missing: float = DEFAULT_MISSING
    precision: Optional[str] = None
    description: str = ""
    units: str = ""
    values: dict = field(default_factory=dict)
    flags: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict) -> SeriesConfig:
        """Validate a raw mapping (e.g. parsed YAML) and build a config."""
        if not isinstance(raw, dict):
            raise ValueError("series config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown series config keys: {sorted(unknown)}")
        if "interval" not in raw:
            raise ValueError("series config must contain an 'interval' key")

        cfg = dict(raw)  # shallow copy so we don't mutate caller's dict
        for key in ("start", "end"):
            if cfg.get(key) is not None:
                cfg[key] = str(cfg[key])
        cfg["values"] = {_date_key(k): v for k, v in (cfg.get("values") or {}).items()}
        cfg["flags"] = {_date_key(k): str(v) for k, v in (cfg.get("flags") or {}).items()}
        return cls(**cfg)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> SeriesConfig:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        log.info("Loaded series config from %s", path)
        return cls.from_dict(raw or {})

    @property
    def interval_obj(self) -> Interval:
        return Interval.parse(self.interval)

    def build(self) -> Series:
        """Create, allocate and fill the configured series."""
        kwargs: dict[str, Any] = {
            "missing": self.missing,
            "description": self.description,
            "units": self.units,
        }
        if self.precision is not None:
            kwargs["precision"] = Interval.parse(self.precision).base

        series = create_series(self.interval_obj, self.start, self.end, **kwargs)
        for date, value in self.values.items():
            flag = self.flags.get(date)
            series.set_value(date, self.missing if value is None else float(value), flag)
        log.info("Built %r with %d configured values", series, len(self.values))
        return series
