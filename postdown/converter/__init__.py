"""Document conversion subsystem: JSON node tree to markdown."""

from postdown.converter.converter import DocumentConverter, convert
from postdown.converter.models import ConversionResult, DecodeError, Document
from postdown.converter.parser import parse
from postdown.converter.renderer import MarkdownRenderer

__all__ = [
    "ConversionResult",
    "DecodeError",
    "Document",
    "DocumentConverter",
    "MarkdownRenderer",
    "convert",
    "parse",
]
