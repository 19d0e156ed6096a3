from __future__ import annotations

from datetime import datetime
from sqlalchemy import Index

from ttdbazaar.app.extensions import db


class Vendor(db.Model):
    __tablename__ = "vendors"

    id = db.Column(db.Integer, primary_key=True)
    shop_name = db.Column(db.String(255), nullable=False)
    business_type = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    phone = db.Column(db.String(50), nullable=False)
    website = db.Column(db.String(1024), nullable=True)

    street_address = db.Column(db.String(255), nullable=False)
    area = db.Column(db.String(100), nullable=True)
    landmark = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(100), nullable=False)
    state = db.Column(db.String(100), nullable=False)
    postal_code = db.Column(db.String(20), nullable=False)
    country = db.Column(db.String(100), nullable=False, default="India")

    established_year = db.Column(db.Integer, nullable=True)
    employee_count = db.Column(db.Integer, nullable=True)
    delivery_available = db.Column(db.Boolean, nullable=False, default=False)
    delivery_radius_km = db.Column(db.Integer, nullable=True)
    business_license = db.Column(db.String(100), nullable=True)
    gst_number = db.Column(db.String(50), nullable=True)

    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    products = db.relationship("Product", backref="vendor", lazy=True, cascade="all, delete-orphan")


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey("vendors.id"), nullable=False, index=True)
    sku = db.Column(db.String(64), nullable=True, unique=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=False, index=True)
    price_cents = db.Column(db.Integer, nullable=False)
    original_price_cents = db.Column(db.Integer, nullable=True)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    min_order_quantity = db.Column(db.Integer, nullable=False, default=1)
    weight_grams = db.Column(db.Integer, nullable=True)
    image_url = db.Column(db.String(1024), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    reviews = db.relationship("Review", backref="product", lazy=True, cascade="all, delete-orphan")


class Review(db.Model):
    __tablename__ = "reviews"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    customer_name = db.Column(db.String(100), nullable=True)

    star = db.Column(db.Integer, nullable=False)  # 1..5
    comment = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_reviews_product_created", "product_id", "created_at"),
    )
