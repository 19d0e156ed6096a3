from __future__ import annotations

from datetime import datetime

from flask import Blueprint, current_app

from ttdbazaar.app.extensions import db
from ttdbazaar.app.models import Product, Vendor
from ttdbazaar.app.common.errors import abort_json
from ttdbazaar.app.common.validation import (
    get_json,
    min_length,
    optional_bool,
    optional_number,
    optional_str,
    require_fields,
    valid_email,
)

bp = Blueprint("vendors", __name__)


def _vendor_or_404(vendor_id: int) -> Vendor:
    vendor = db.session.get(Vendor, vendor_id)
    if not vendor:
        abort_json(404, "not_found", "Vendor not found")
    return vendor


def _vendor_dict(v: Vendor) -> dict:
    return {
        "id": v.id,
        "shop_name": v.shop_name,
        "business_type": v.business_type,
        "description": v.description,
        "email": v.email,
        "phone": v.phone,
        "website": v.website,
        "street_address": v.street_address,
        "area": v.area,
        "landmark": v.landmark,
        "city": v.city,
        "state": v.state,
        "postal_code": v.postal_code,
        "country": v.country,
        "established_year": v.established_year,
        "employee_count": v.employee_count,
        "delivery_available": v.delivery_available,
        "delivery_radius_km": v.delivery_radius_km,
        "is_verified": v.is_verified,
        "created_at": v.created_at.isoformat() if v.created_at else None,
    }


def _product_dict(p: Product) -> dict:
    return {
        "id": p.id,
        "sku": p.sku,
        "name": p.name,
        "description": p.description,
        "category": p.category,
        "price_cents": p.price_cents,
        "original_price_cents": p.original_price_cents,
        "stock_quantity": p.stock_quantity,
        "min_order_quantity": p.min_order_quantity,
        "weight_grams": p.weight_grams,
        "is_active": p.is_active,
        "is_featured": p.is_featured,
        "created_at": p.created_at.isoformat() if p.created_at else None,
    }


@bp.post("/vendors")
def register_vendor():
    """POST /api/vendors - Register a vendor shop."""
    data = get_json()
    require_fields(
        data,
        ["shop_name", "business_type", "description", "phone", "email",
         "street_address", "city", "state", "postal_code", "area"],
    )

    website = optional_str(data, "website")
    if website and not website.startswith(("http://", "https://")):
        abort_json(400, "validation_error", "Website must be a valid URL", {"field": "website"})

    email = valid_email(data)
    if Vendor.query.filter_by(email=email).first():
        abort_json(409, "conflict", "A vendor with this email already exists")

    vendor = Vendor(
        shop_name=min_length(data, "shop_name", 2),
        business_type=min_length(data, "business_type", 1),
        description=min_length(data, "description", 10),
        phone=min_length(data, "phone", 10),
        email=email,
        website=website,
        street_address=min_length(data, "street_address", 5),
        city=min_length(data, "city", 2),
        state=min_length(data, "state", 2),
        postal_code=min_length(data, "postal_code", 5),
        area=min_length(data, "area", 2),
        landmark=optional_str(data, "landmark"),
        established_year=optional_number(data, "established_year", 1900, datetime.utcnow().year),
        employee_count=optional_number(data, "employee_count", 1, 1000),
        delivery_available=optional_bool(data, "delivery_available"),
        delivery_radius_km=optional_number(data, "delivery_radius_km", 1, 100),
        business_license=optional_str(data, "business_license"),
        gst_number=optional_str(data, "gst_number"),
    )
    db.session.add(vendor)
    db.session.commit()
    current_app.logger.info("Vendor registered id=%s shop=%r", vendor.id, vendor.shop_name)

    return _vendor_dict(vendor), 201


@bp.get("/vendors/<int:vendor_id>")
def get_vendor(vendor_id: int):
    return _vendor_dict(_vendor_or_404(vendor_id)), 200


@bp.get("/vendors/<int:vendor_id>/products")
def list_vendor_products(vendor_id: int):
    """GET /api/vendors/<id>/products - All of a vendor's products, newest first."""
    vendor = _vendor_or_404(vendor_id)
    items = (
        Product.query.filter_by(vendor_id=vendor.id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    return {"vendor_id": vendor.id, "items": [_product_dict(p) for p in items]}, 200


@bp.post("/vendors/<int:vendor_id>/products")
def add_vendor_product(vendor_id: int):
    """POST /api/vendors/<id>/products - Add a product to the vendor's shop."""
    vendor = _vendor_or_404(vendor_id)
    data = get_json()
    require_fields(data, ["name", "category", "price_cents"])

    price_cents = optional_number(data, "price_cents", 1)
    original_price_cents = optional_number(data, "original_price_cents", 0)
    if original_price_cents is not None and original_price_cents < price_cents:
        abort_json(
            400,
            "validation_error",
            "Original price cannot be lower than price",
            {"field": "original_price_cents"},
        )

    sku = optional_str(data, "sku")
    if sku and Product.query.filter_by(sku=sku).first():
        abort_json(409, "conflict", "SKU already in use")

    stock = optional_number(data, "stock_quantity", 0)
    min_order = optional_number(data, "min_order_quantity", 1)

    p = Product(
        vendor_id=vendor.id,
        name=min_length(data, "name", 1),
        description=optional_str(data, "description"),
        category=min_length(data, "category", 1),
        price_cents=price_cents,
        original_price_cents=original_price_cents,
        sku=sku,
        stock_quantity=stock if stock is not None else 0,
        min_order_quantity=min_order if min_order is not None else 1,
        weight_grams=optional_number(data, "weight_grams", 0),
        image_url=optional_str(data, "image_url"),
        is_active=optional_bool(data, "is_active", True),
        is_featured=optional_bool(data, "is_featured"),
    )
    db.session.add(p)
    db.session.commit()
    current_app.logger.info("Product added id=%s vendor=%s", p.id, vendor.id)

    return _product_dict(p), 201


@bp.post("/vendors/<int:vendor_id>/products/<int:product_id>/toggle")
def toggle_product(vendor_id: int, product_id: int):
    """Activate or deactivate one of the vendor's products."""
    vendor = _vendor_or_404(vendor_id)
    p = Product.query.filter_by(id=product_id, vendor_id=vendor.id).first()
    if not p:
        abort_json(404, "not_found", "Product not found")

    p.is_active = not p.is_active
    db.session.commit()
    return {"id": p.id, "is_active": p.is_active}, 200
