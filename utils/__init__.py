"""Utility modules for merging, parsing and output generation."""

from .address_parser import KoreanAddressParser
from .cache import TimedCache
from .colors import SourceColorPicker
from .markdown_generator import MarkdownGenerator
from .merge import merge_records
from .publish_date import parse_publish_date

__all__ = [
    "KoreanAddressParser",
    "MarkdownGenerator",
    "SourceColorPicker",
    "TimedCache",
    "merge_records",
    "parse_publish_date",
]
