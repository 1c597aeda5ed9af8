"""Shared test fixtures for Postdown."""

import json
import logging

import pytest

from postdown.config.models import PostdownConfig
from postdown.converter.renderer import MarkdownRenderer


def make_doc(*nodes):
    """Encode top-level nodes as a JSON document buffer."""
    return json.dumps({"type": "doc", "content": list(nodes)}).encode()


def text(value, *marks):
    node = {"type": "text", "text": value}
    if marks:
        node["marks"] = list(marks)
    return node


def paragraph(*children):
    return {"type": "paragraph", "content": list(children)}


def list_item(*children):
    return {"type": "listItem", "content": list(children)}


@pytest.fixture
def renderer():
    return MarkdownRenderer()


@pytest.fixture
def sample_config():
    return PostdownConfig()


@pytest.fixture
def sample_document():
    """A small article exercising every supported block kind."""
    return make_doc(
        {"type": "heading", "attrs": {"level": 2}, "content": [text("Release notes")]},
        paragraph(
            text("Read the "),
            text("changelog", {"type": "link", "attrs": {"href": "https://example.com/log"}}),
            text(" first."),
        ),
        {
            "type": "figure",
            "content": [
                {"type": "image", "attrs": {"src": "https://example.com/a.png"}, "text": "Chart"}
            ],
        },
        {"type": "embedly", "attrs": {"url": "https://example.com/video"}},
        {"type": "horizontalRule"},
        {
            "type": "orderedList",
            "attrs": {"start": 3},
            "content": [list_item(paragraph(text("Three"))), list_item(paragraph(text("Four")))],
        },
        {
            "type": "unorderedList",
            "content": [list_item(paragraph(text("done", {"type": "strikethrough"})))],
        },
    )


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """The CLI installs its own handler on the package logger; undo it per test."""
    pkg_logger = logging.getLogger("postdown")
    saved = (pkg_logger.handlers[:], pkg_logger.level, pkg_logger.propagate)
    yield
    pkg_logger.handlers, pkg_logger.level, pkg_logger.propagate = saved
