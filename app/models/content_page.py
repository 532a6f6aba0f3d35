from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RemoteContentPage(BaseModel):
    """CMS item of type ``ContentPage``."""

    model_config = ConfigDict(extra="allow")

    uuid: Optional[str] = None
    uid: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    masterTemplate: Optional[str] = None
    template: Optional[str] = None
    approvalStatus: Optional[str] = None
    pageStatus: Optional[str] = None
    title: Dict[str, Optional[str]] = {}

    @field_validator("title", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or {}


class ContentPage(BaseModel):
    id: str
    label: Optional[str] = None
    extract: Optional[str] = None


class ContentPageRequest(BaseModel):
    """Create/update payload sent by the bridge host."""

    template: str
    label: str
    pageUid: Optional[str] = None
    visible: bool = True
