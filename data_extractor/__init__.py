"""
data_extractor - pull field values out of objects and make them safe to index
"""

__version__ = "0.1.0"

from data_extractor.extractors import (
    AttributeExtractor,
    BlockExtractor,
    ComputationExtractor,
    ConstantExtractor,
    DataExtractor,
)
from data_extractor.fields import FieldSet, extractor_for, load_field_set
from data_extractor.filter import Filter, filter_value
from data_extractor.logging_config import configure_logging

__all__ = [
    "AttributeExtractor",
    "BlockExtractor",
    "ComputationExtractor",
    "ConstantExtractor",
    "DataExtractor",
    "FieldSet",
    "Filter",
    "configure_logging",
    "extractor_for",
    "filter_value",
    "load_field_set",
]
