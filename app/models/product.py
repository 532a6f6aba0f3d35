from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RemoteImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    format: Optional[str] = None
    url: Optional[str] = None


class RemoteProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str
    name: Optional[str] = None
    url: Optional[str] = None
    images: List[RemoteImage] = []

    @field_validator("images", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class Product(BaseModel):
    id: str
    label: Optional[str] = None
    extract: Optional[str] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
