"""Utility functions for goldnotebook."""

from goldnotebook.utils.parsers import parse_date, parse_amount

__all__ = ["parse_date", "parse_amount"]
