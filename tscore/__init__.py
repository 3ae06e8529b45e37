"""tscore — date-indexed time series with bidirectional iteration."""

__version__ = "0.1.0"
