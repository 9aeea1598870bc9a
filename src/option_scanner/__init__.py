"""Option fair-value estimation and income-strategy opportunity scanning."""

__version__ = "0.1.0"
