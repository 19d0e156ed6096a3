from __future__ import annotations

from flask import Blueprint

from ttdbazaar.app.extensions import db
from ttdbazaar.app.models import Product, Review, Vendor
from ttdbazaar.catalog.sample_data import SAMPLE_PRODUCTS

cli_bp = Blueprint("cli", __name__, cli_group=None)


def seed_catalog() -> int:
    """Load the sample catalogue into the database.

    Safe to run multiple times; it will no-op if products exist.
    Returns the number of products created.
    """
    if Product.query.count() > 0:
        return 0

    vendors: dict[str, Vendor] = {}
    created = 0
    for item in SAMPLE_PRODUCTS:
        shop = item.vendor or "TTD Official Store"
        vendor = vendors.get(shop)
        if vendor is None:
            slug = "".join(ch for ch in shop.lower() if ch.isalnum())
            vendor = Vendor(
                shop_name=shop,
                business_type="Retail",
                description=f"{shop}, seller of devotional goods.",
                email=f"{slug}@example.com",
                phone="0877-2277777",
                street_address="1 Temple Road",
                area="Tirumala",
                city="Tirupati",
                state="Andhra Pradesh",
                postal_code="517501",
                is_verified=True,
            )
            db.session.add(vendor)
            vendors[shop] = vendor

        p = Product(
            vendor=vendor,
            name=item.name,
            description=item.description,
            category=item.category,
            price_cents=int(item.price),
            original_price_cents=int(item.original_price) if item.original_price is not None else None,
            stock_quantity=50 if item.in_stock else 0,
            image_url=item.image_url,
            is_featured=item.is_featured,
            created_at=item.created_at,
        )
        db.session.add(p)
        # One review per product so rating sorts have data.
        db.session.add(Review(product=p, customer_name="Pilgrim", star=round(item.rating)))
        created += 1

    db.session.commit()
    return created


@cli_bp.cli.command("seed")
def seed_data() -> None:
    """Seed sample vendors, products and reviews."""
    db.create_all()
    created = seed_catalog()
    if created:
        print(f"Seeded {created} products.")
    else:
        print("Products already exist, nothing to seed.")
