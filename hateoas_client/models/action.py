from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hateoas_client.utils.naming import accessor_name

DEFAULT_ACTION_TYPE = "application/x-www-form-urlencoded"


# -----------------------------------------------------------------------------
# Wire models
# -----------------------------------------------------------------------------
class ActionField(BaseModel):
    """Input declared by an action. Every field must be named in the call params."""
    name: str = Field(..., min_length=1)
    value: Optional[Any] = Field(
        None,
        description="Pre-bound literal; when set it wins over the caller's value"
    )
    type: str = "text"
    title: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return value or "text"

    @property
    def is_bound(self) -> bool:
        return self.value is not None


class ActionEntry(BaseModel):
    """One element of a Siren actions collection."""
    name: str = Field(
        ...,
        min_length=1,
        description="Literal action name as sent by the server"
    )
    classes: List[str] = Field(default_factory=list, alias="class")
    title: Optional[str] = None
    method: str = Field(
        "GET",
        description="HTTP verb, always upper case"
    )
    href: str = ""
    type: str = Field(
        DEFAULT_ACTION_TYPE,
        description="Media type of the request body"
    )
    fields: List[ActionField] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method(cls, value: Any) -> Any:
        if not value:
            return "GET"
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return value or DEFAULT_ACTION_TYPE

    @field_validator("classes", "fields", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def accessor(self) -> str:
        return accessor_name(self.name)


# -----------------------------------------------------------------------------
# Request description
# -----------------------------------------------------------------------------
class RequestDescription(BaseModel):
    """A validated action call, ready to be handed to a resource factory."""
    method: str
    href: str
    type: str = DEFAULT_ACTION_TYPE
    body: Dict[str, Any] = Field(default_factory=dict)
    bindings: Dict[str, Any] = Field(
        default_factory=dict,
        description="Caller params, used to fill ':name' placeholders in href"
    )

    model_config = ConfigDict(frozen=True)
