"""Pydantic models for the document tree and conversion results."""

from __future__ import annotations

import functools
import math
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationInfo,
    model_validator,
)


class DecodeError(ValueError):
    """Raised when input bytes cannot be decoded into a document tree."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


#: Deepest heading level rendered as given; larger values count as invalid.
MAX_HEADING_LEVEL = 64


def _integer(value: Any) -> int | None:
    """Truncate a JSON number to an int; anything else is absent."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


#: Validation context the parser passes for editor JSON.
DECODE_CONTEXT: dict[str, Any] = {"decoding": True}


def _decoding(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("decoding"))


class _Element(BaseModel):
    """Base for nodes and marks.

    Nulls are dropped before validation so that they fall back to field
    defaults, and each kind lifts the attrs it understands into typed fields
    via ``_from_attrs``. The raw ``attrs`` bag itself is discarded.

    Under ``DECODE_CONTEXT`` the typed fields come from ``attrs`` only; a
    top-level ``level`` or ``src`` is an unknown field and ignored. Outside
    it (direct construction) input that already carries the typed fields
    and no ``attrs`` is passed through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def lift_attrs(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        fields = {k: v for k, v in data.items() if v is not None and k != "attrs"}
        lifted = cls._from_attrs({})
        decoding = _decoding(info)
        if decoding:
            cls._check_unused(fields, info)
            fields = {k: v for k, v in fields.items() if k not in lifted}
        if decoding or "attrs" in data or not fields.keys() & lifted.keys():
            attrs = data.get("attrs")
            fields.update(cls._from_attrs(attrs if isinstance(attrs, dict) else {}))
        return fields

    @classmethod
    def _from_attrs(cls, attrs: dict[str, Any]) -> dict[str, Any]:
        return {}

    @classmethod
    def _check_unused(cls, fields: dict[str, Any], info: ValidationInfo) -> None:
        pass


class _Node(_Element):
    """Base for node kinds.

    Every node in editor JSON shares one shape (``content``, ``text``,
    ``marks``). Kinds that do not use a member still reject a malformed one
    while decoding, then drop it.
    """

    @classmethod
    def _check_unused(cls, fields: dict[str, Any], info: ValidationInfo) -> None:
        for name, adapter in _node_shape().items():
            if name in fields and name not in cls.model_fields:
                adapter.validate_python(fields[name], context=info.context)


# ── Marks ──────────────────────────────────────────────────────────


class LinkMark(_Element):
    type: Literal["link"] = "link"
    href: str | None = None

    @classmethod
    def _from_attrs(cls, attrs: dict[str, Any]) -> dict[str, Any]:
        return {"href": _string(attrs.get("href"))}


class BoldMark(_Element):
    type: Literal["bold"] = "bold"


class ItalicMark(_Element):
    type: Literal["italic"] = "italic"


class CodeMark(_Element):
    type: Literal["code"] = "code"


class StrikethroughMark(_Element):
    type: Literal["strikethrough"] = "strikethrough"


class UnknownMark(_Element):
    """Any mark type outside the supported set; renders as a no-op."""

    type: str = ""


MARK_TYPES = frozenset({"link", "bold", "italic", "code", "strikethrough"})


def _mark_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        tag = value.get("type", "")
    elif isinstance(value, BaseModel):
        tag = getattr(value, "type", "")
    else:
        return None
    if isinstance(tag, str) and tag in MARK_TYPES:
        return tag
    return "unknown"


Mark = Annotated[
    Union[
        Annotated[LinkMark, Tag("link")],
        Annotated[BoldMark, Tag("bold")],
        Annotated[ItalicMark, Tag("italic")],
        Annotated[CodeMark, Tag("code")],
        Annotated[StrikethroughMark, Tag("strikethrough")],
        Annotated[UnknownMark, Tag("unknown")],
    ],
    Discriminator(_mark_tag),
]


# ── Nodes ──────────────────────────────────────────────────────────


class Text(_Node):
    type: Literal["text"] = "text"
    text: str = ""
    marks: tuple[Mark, ...] = ()


class Heading(_Node):
    type: Literal["heading"] = "heading"
    level: int = Field(default=1, ge=1, le=MAX_HEADING_LEVEL)
    content: tuple[Node, ...] = ()

    @classmethod
    def _from_attrs(cls, attrs: dict[str, Any]) -> dict[str, Any]:
        level = _integer(attrs.get("level"))
        valid = level is not None and 1 <= level <= MAX_HEADING_LEVEL
        return {"level": level if valid else 1}


class Paragraph(_Node):
    type: Literal["paragraph"] = "paragraph"
    content: tuple[Node, ...] = ()


class Image(_Node):
    """An image; ``text`` is the alt text."""

    type: Literal["image"] = "image"
    src: str | None = None
    text: str = ""

    @classmethod
    def _from_attrs(cls, attrs: dict[str, Any]) -> dict[str, Any]:
        return {"src": _string(attrs.get("src"))}


class Figure(_Node):
    type: Literal["figure"] = "figure"
    content: tuple[Node, ...] = ()


class HorizontalRule(_Node):
    type: Literal["horizontalRule"] = "horizontalRule"


class OrderedList(_Node):
    type: Literal["orderedList"] = "orderedList"
    start: int = 1
    content: tuple[Node, ...] = ()

    @classmethod
    def _from_attrs(cls, attrs: dict[str, Any]) -> dict[str, Any]:
        raw = attrs.get("start")
        start = _integer(raw)
        return {"start": 1 if start is None or raw == 0 else start}


class UnorderedList(_Node):
    type: Literal["unorderedList"] = "unorderedList"
    content: tuple[Node, ...] = ()


class ListItem(_Node):
    type: Literal["listItem"] = "listItem"
    content: tuple[Node, ...] = ()


class Embed(_Node):
    """Third-party embeds (embedly, twitter); never rendered."""

    type: Literal["embedly", "twitter"]


class UnknownNode(_Node):
    """Any node type outside the supported set, including a missing type."""

    type: str = ""


NODE_TAGS: dict[str, str] = {
    "text": "text",
    "heading": "heading",
    "paragraph": "paragraph",
    "image": "image",
    "figure": "figure",
    "horizontalRule": "horizontalRule",
    "orderedList": "orderedList",
    "unorderedList": "unorderedList",
    "listItem": "listItem",
    "embedly": "embed",
    "twitter": "embed",
}


def _node_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        tag = value.get("type", "")
    elif isinstance(value, BaseModel):
        tag = getattr(value, "type", "")
    else:
        return None
    if isinstance(tag, str) and tag in NODE_TAGS:
        return NODE_TAGS[tag]
    return "unknown"


Node = Annotated[
    Union[
        Annotated[Text, Tag("text")],
        Annotated[Heading, Tag("heading")],
        Annotated[Paragraph, Tag("paragraph")],
        Annotated[Image, Tag("image")],
        Annotated[Figure, Tag("figure")],
        Annotated[HorizontalRule, Tag("horizontalRule")],
        Annotated[OrderedList, Tag("orderedList")],
        Annotated[UnorderedList, Tag("unorderedList")],
        Annotated[ListItem, Tag("listItem")],
        Annotated[Embed, Tag("embed")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]


class Document(_Element):
    """Root of the tree. ``type`` is expected to be ``"doc"`` but never checked."""

    type: str = "doc"
    content: tuple[Node, ...] = ()


for _model in (Heading, Paragraph, Figure, OrderedList, UnorderedList, ListItem, Document):
    _model.model_rebuild()


class ConversionResult(BaseModel):
    """Result of converting a document file to markdown."""

    source_path: str
    markdown: str
    size_bytes: int = 0


@functools.cache
def _node_shape() -> dict[str, TypeAdapter]:
    return {
        "content": TypeAdapter(tuple[Node, ...]),
        "text": TypeAdapter(str),
        "marks": TypeAdapter(tuple[Mark, ...]),
    }
