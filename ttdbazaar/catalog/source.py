"""Where catalog items come from.

The filter/sort code only needs a list of `CatalogItem`; these sources turn
database rows (or the static sample) into that list.
"""

from __future__ import annotations

from typing import List, Optional

from flask import current_app
from sqlalchemy import func

from ttdbazaar.app.extensions import db
from ttdbazaar.app.models import Product, Review, Vendor
from ttdbazaar.catalog.filtering import CatalogItem
from ttdbazaar.catalog.sample_data import SAMPLE_PRODUCTS


def product_to_item(
    p: Product,
    vendor_name: Optional[str] = None,
    avg_star: Optional[float] = None,
    review_count: Optional[int] = None,
) -> CatalogItem:
    return CatalogItem(
        id=str(p.id),
        name=p.name,
        description=p.description or "",
        price=p.price_cents,
        original_price=p.original_price_cents,
        category=p.category,
        in_stock=(p.stock_quantity or 0) > 0,
        rating=round(float(avg_star), 2) if avg_star is not None else 0.0,
        review_count=int(review_count or 0),
        is_featured=bool(p.is_featured),
        created_at=p.created_at,
        vendor=vendor_name,
        image_url=p.image_url,
    )


class SampleCatalogSource:
    name = "sample"
    # Sample items have no database rows, so reviews cannot be stored.
    stores_reviews = False

    def load(self) -> List[CatalogItem]:
        return list(SAMPLE_PRODUCTS)

    def get(self, product_id) -> Optional[CatalogItem]:
        wanted = str(product_id)
        return next((p for p in SAMPLE_PRODUCTS if p.id == wanted), None)


class DatabaseCatalogSource:
    name = "database"
    stores_reviews = True

    def _query(self):
        """Active products with vendor name and review aggregates, in id order."""
        stats = (
            db.session.query(
                Review.product_id.label("product_id"),
                func.avg(Review.star).label("avg_star"),
                func.count(Review.id).label("review_count"),
            )
            .group_by(Review.product_id)
            .subquery()
        )
        return (
            db.session.query(Product, Vendor.shop_name, stats.c.avg_star, stats.c.review_count)
            .join(Vendor, Product.vendor_id == Vendor.id)
            .outerjoin(stats, stats.c.product_id == Product.id)
            .filter(Product.is_active.is_(True))
            .order_by(Product.id.asc())
        )

    def load(self) -> List[CatalogItem]:
        return [product_to_item(p, shop, avg, count) for p, shop, avg, count in self._query().all()]

    def get(self, product_id) -> Optional[CatalogItem]:
        try:
            pid = int(product_id)
        except (TypeError, ValueError):
            return None
        row = self._query().filter(Product.id == pid).first()
        if row is None:
            return None
        p, shop, avg, count = row
        return product_to_item(p, shop, avg, count)


_SOURCES = {
    SampleCatalogSource.name: SampleCatalogSource,
    DatabaseCatalogSource.name: DatabaseCatalogSource,
}


def get_catalog_source():
    name = (current_app.config.get("CATALOG_SOURCE") or "database").lower()
    source_cls = _SOURCES.get(name)
    if source_cls is None:
        current_app.logger.warning("Unknown CATALOG_SOURCE %r, using database", name)
        source_cls = DatabaseCatalogSource
    return source_cls()
