"""Statistics package — limits summary used by ``Series.refresh``."""

from tscore.stats.limits import SeriesLimits, compute_limits

__all__ = ["SeriesLimits", "compute_limits"]
