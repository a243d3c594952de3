"""ChartTrace: data extraction from vector charts in page-description documents."""

__version__ = "0.1.0"
