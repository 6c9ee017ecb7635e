"""Script metadata model — the declared identity and attachment list of a script."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ScriptMetadata(BaseModel):
    """Parsed representation of a script's embedded metadata block.

    A zero-value instance (empty ``name``) means the script carried no
    metadata at all; callers decide whether to fail or derive a name.

    Attachment filenames are relative to the script's own directory.
    Duplicates are kept as declared.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(default="", alias="RightScript Name")
    description: str = Field(default="", alias="Description")
    inputs: dict[str, Any] = Field(default_factory=dict, alias="Inputs")
    attachments: list[str] = Field(default_factory=list, alias="Attachments")

    @field_validator("name", "description", "inputs", "attachments", mode="before")
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        # An empty YAML value (`Description:`) loads as None.
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @property
    def is_empty(self) -> bool:
        """True when no name was declared."""
        return not self.name

    def with_name(self, name: str) -> ScriptMetadata:
        """Return a copy carrying *name* (used for the filename fallback)."""
        return self.model_copy(update={"name": name})
