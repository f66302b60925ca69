"""NFL play classification and team aggregation."""

__version__ = "0.1.0"
