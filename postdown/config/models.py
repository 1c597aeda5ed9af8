from pydantic import BaseModel, Field, field_validator
from typing import Literal


class RenderConfig(BaseModel):
    skip_types: list[str] = Field(default_factory=list)
    bullet_marker: Literal["*", "-", "+"] = "*"

    @field_validator("skip_types")
    @classmethod
    def validate_skip_types(cls, v: list[str]) -> list[str]:
        from postdown.converter.models import NODE_TAGS

        unknown = sorted(set(v) - NODE_TAGS.keys())
        if unknown:
            raise ValueError(
                f"unknown node type(s) {unknown}; expected any of {sorted(NODE_TAGS)}"
            )
        return v


class PostdownConfig(BaseModel):
    render: RenderConfig = Field(default_factory=RenderConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
    source: str | None = Field(default=None, exclude=True)
