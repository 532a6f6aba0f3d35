from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RemoteCategory(BaseModel):
    """Category node as returned by the catalog API (arbitrarily nested)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    subcategories: List["RemoteCategory"] = []

    @field_validator("subcategories", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class Category(BaseModel):
    """Flat category list entry."""

    id: str
    label: Optional[str] = None


class CategoryNode(BaseModel):
    """Category tree node.

    ``children`` is ``None`` (and dropped from serialized output) for leaves.
    """

    id: str
    label: Optional[str] = None
    children: Optional[List["CategoryNode"]] = None
