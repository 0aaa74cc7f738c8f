"""Validated knobs of the sort policy, loaded from the `policy:` config section."""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field, field_validator

from .reconstructor import DEFAULT_TYPE_MARKER


class SortPolicy(BaseModel):
    """Tunable parts of the sort policy."""

    type_marker: str = DEFAULT_TYPE_MARKER
    type_anchor: Literal["shortest", "longest"] = "shortest"
    max_blank_lines: int = Field(default=2, ge=0)
    scanner: Literal["line"] = "line"

    @field_validator("type_marker")
    @classmethod
    def marker_is_line_comment(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("//") or "\n" in value:
            raise ValueError("type_marker must be a single // comment line")
        return value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
