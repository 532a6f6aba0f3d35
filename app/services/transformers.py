"""Mapping between commerce-platform payloads and the bridge's entity shapes."""

from typing import Optional

from app.models.category import Category, CategoryNode, RemoteCategory
from app.models.content_page import ContentPage, ContentPageRequest, RemoteContentPage
from app.models.product import Product, RemoteProduct

# Bridge template name -> CMS master template.  Unmapped names are sent as-is.
TEMPLATE_MAPPING = {
    "content": "ContentPage1Template",
    "contentpage": "ContentPage1Template",
    "landing": "LandingPage2Template",
    "category": "CategoryPageTemplate",
    "product": "ProductDetailsPageTemplate",
}

CONTENT_PAGE_ITEMTYPE = "ContentPage"


def to_category(category: RemoteCategory) -> Category:
    return Category(id=category.id, label=category.name)


def to_category_node(category: RemoteCategory, children: list[CategoryNode]) -> CategoryNode:
    return CategoryNode(id=category.id, label=category.name, children=children or None)


def to_content_page(page: RemoteContentPage) -> Optional[ContentPage]:
    """Return the bridge view of a CMS page, or *None* when it carries no uuid."""
    if not page.uuid:
        return None
    return ContentPage(id=page.uuid, label=page.name, extract=page.label)


def map_template(template: str) -> str:
    return TEMPLATE_MAPPING.get(template, template)


def to_remote_content_page(
    body: ContentPageRequest,
    lang: str,
    catalog_version: str,
    uuid: Optional[str] = None,
) -> dict:
    """Build the CMS item body for creating or updating a content page.

    *catalog_version* is the ``<catalogId>/<version>`` pair of the content
    catalog.  Visibility drives both status enums: visible pages are
    ``APPROVED``/``ACTIVE``, hidden ones ``UNAPPROVED``/``DELETED``.
    """
    item = {
        "uid": body.pageUid or body.label,
        "itemtype": CONTENT_PAGE_ITEMTYPE,
        "catalogVersion": catalog_version,
        "masterTemplate": map_template(body.template),
        "approvalStatus": "APPROVED" if body.visible else "UNAPPROVED",
        "pageStatus": "ACTIVE" if body.visible else "DELETED",
        "defaultPage": True,
        "homepage": False,
        "label": body.label,
        "name": body.label,
        "title": {lang.lower(): body.label},
    }
    if uuid:
        item["uuid"] = uuid
    return item


def to_product(product: RemoteProduct, media_base_url: str = "") -> Product:
    """Normalise a product, picking ``thumbnail``/``product`` images by format."""
    images = {img.format: media_base_url + img.url for img in product.images if img.format and img.url}
    return Product(
        id=product.code,
        label=product.name,
        extract=product.url,
        thumbnail=images.get("thumbnail"),
        image=images.get("product"),
    )
