"""Transformer module for converting schedule data to various output formats."""

from .base import BaseTransformer
from .ical_transformer import ICalTransformer, escape_text

__all__ = ["BaseTransformer", "ICalTransformer", "escape_text"]
