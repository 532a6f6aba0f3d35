from typing import Generic, List, Literal, TypeVar

from pydantic import BaseModel

from app.models.category import Category, CategoryNode
from app.models.content_page import ContentPage
from app.models.product import Product

T = TypeVar("T")


class PageEnvelope(BaseModel, Generic[T]):
    """Uniform result of every list operation."""

    items: List[T] = []
    total: int = 0
    has_next: bool = False


class CategoriesResponse(BaseModel):
    categories: List[Category]
    total: int
    hasNext: bool


class CategoryTreeResponse(BaseModel):
    categorytree: List[CategoryNode]
    total: int


class ContentPagesResponse(BaseModel):
    contentPages: List[ContentPage]
    total: int
    hasNext: bool


class ProductsResponse(BaseModel):
    products: List[Product]
    total: int
    hasNext: bool


class UrlResponse(BaseModel):
    url: str


class LookupResponse(BaseModel):
    type: Literal["category", "content", "product"]
    id: str
