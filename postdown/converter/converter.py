"""JSON document to markdown conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from postdown.config.models import RenderConfig
from postdown.converter.models import ConversionResult
from postdown.converter.parser import parse
from postdown.converter.renderer import MarkdownRenderer

logger = logging.getLogger(__name__)

_default_renderer = MarkdownRenderer()


def convert(data: bytes | str) -> str:
    """Convert a JSON document to markdown.

    Raises DecodeError when the input cannot be decoded; any structurally
    valid document converts to some (possibly empty) string.
    """
    return _default_renderer.render(parse(data))


class DocumentConverter:
    """Converts JSON documents using a configured renderer."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()
        self._renderer = MarkdownRenderer(
            skip_types=self._config.skip_types,
            bullet_marker=self._config.bullet_marker,
        )

    def convert(self, data: bytes | str) -> str:
        document = parse(data)
        markdown = self._renderer.render(document)
        logger.debug(
            "Converted %d top-level node(s) into %d characters",
            len(document.content),
            len(markdown),
        )
        return markdown

    def convert_file(self, file_path: str | Path) -> ConversionResult:
        """Convert a JSON document file. OSError and DecodeError propagate."""
        path = Path(file_path)
        data = path.read_bytes()
        return ConversionResult(
            source_path=str(path),
            markdown=self.convert(data),
            size_bytes=len(data),
        )
