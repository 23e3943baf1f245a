"""Parsers for course files."""

from .csv_parser import CsvParser

__all__ = ['CsvParser']
