"""Postdown - convert rich-text editor JSON documents to markdown."""

from postdown.converter import DecodeError, DocumentConverter, MarkdownRenderer, convert, parse
from postdown.config import PostdownConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "DocumentConverter",
    "MarkdownRenderer",
    "PostdownConfig",
    "convert",
    "load_config",
    "parse",
]
