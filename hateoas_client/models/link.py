from __future__ import annotations

from typing import List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# -----------------------------------------------------------------------------
# Wire model
# -----------------------------------------------------------------------------
class LinkEntry(BaseModel):
    """One element of a Siren links collection."""
    rel: Union[str, List[str]] = Field(
        ...,
        description="Relation name, or several aliases for the same href"
    )
    href: str = Field(
        ...,
        min_length=1,
        description="Target of the link, absolute or relative"
    )
    classes: List[str] = Field(
        default_factory=list,
        alias="class",
        description="Semantic tags, e.g. 'query' for collection endpoints"
    )
    title: Optional[str] = None
    type: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("rel")
    @classmethod
    def _rel_present(cls, value: Union[str, List[str]]) -> Union[str, List[str]]:
        if not value:
            raise ValueError("rel must not be empty")
        return value

    @property
    def aliases(self) -> List[str]:
        if isinstance(self.rel, str):
            return [self.rel]
        return list(self.rel)


# -----------------------------------------------------------------------------
# Derived model
# -----------------------------------------------------------------------------
class LinkTarget(BaseModel):
    """Slot of a link index: where a relation points and whether it is a query."""
    href: str
    is_query: bool = False

    model_config = ConfigDict(frozen=True)


# rel -> target, read-only once built
LinkIndex = Mapping[str, LinkTarget]
