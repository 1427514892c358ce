"""Portfolio backend: project listings, contact messages and the portfolio assistant."""

__version__ = "0.3.0"
