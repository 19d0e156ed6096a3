from __future__ import annotations

from flask import Blueprint, current_app, request

from ttdbazaar.app.extensions import db
from ttdbazaar.app.models import Review
from ttdbazaar.app.common.errors import abort_json
from ttdbazaar.app.common.validation import (
    get_json,
    optional_number,
    optional_str,
    query_int,
    require_fields,
)
from ttdbazaar.catalog.filtering import (
    DEFAULT_SORT,
    SORT_OPTIONS,
    Criteria,
    available_categories,
    filter_and_sort,
    paginate,
    resolve_sort_key,
)
from ttdbazaar.catalog.sample_data import DEFAULT_CATEGORIES
from ttdbazaar.catalog.source import get_catalog_source

bp = Blueprint("catalog", __name__)


@bp.get("/products")
def list_products():
    """GET /api/products - Browse the catalog.

    Query params:
      - q: text search over name and description
      - category: category name, or "All"
      - min_price, max_price: inclusive bounds in paise (ignored if malformed)
      - in_stock: true to hide out-of-stock items
      - sort: featured (default)|price-asc|price-desc|rating|newest
      - limit, offset
    """
    limit = query_int("limit", current_app.config["DEFAULT_LIMIT"])
    offset = query_int("offset", 0)

    criteria = Criteria.from_params(request.args)
    sort = resolve_sort_key(request.args.get("sort") or DEFAULT_SORT)

    source = get_catalog_source()
    items = source.load()
    matched = filter_and_sort(items, criteria, sort)
    page = paginate(matched, limit, offset, max_limit=current_app.config["MAX_LIMIT"])

    return {
        "items": [p.to_dict() for p in page.items],
        "filters": {
            "q": criteria.query,
            "category": criteria.category,
            "min_price": criteria.min_price,
            "max_price": criteria.max_price,
            "in_stock": criteria.in_stock_only,
            "sort": sort,
        },
        "paging": {"limit": page.limit, "offset": page.offset, "total": page.total, "available": len(items)},
    }, 200


@bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    """GET /api/products/<id> - Retrieve product details."""
    item = get_catalog_source().get(product_id)
    if item is None:
        abort_json(404, "not_found", "Product not found")

    payload = item.to_dict()
    payload["reviews_summary"] = {"avg_rating": item.rating, "count": item.review_count}
    return payload, 200


@bp.get("/categories")
def list_categories():
    """GET /api/categories - Categories for the filter sidebar."""
    items = get_catalog_source().load()
    return {"categories": available_categories(items, DEFAULT_CATEGORIES)}, 200


@bp.get("/sort-options")
def list_sort_options():
    return {"sort_options": SORT_OPTIONS, "default": DEFAULT_SORT}, 200


@bp.route("/products/<int:product_id>/reviews", methods=["GET", "POST"])
def reviews(product_id: int):
    """Reviews are stored in the database; the sample catalog lists none and accepts none."""
    source = get_catalog_source()
    if source.get(product_id) is None:
        abort_json(404, "not_found", "Product not found")

    if request.method == "GET":
        if not source.stores_reviews:
            return {"product_id": product_id, "reviews": []}, 200
        rows = (
            Review.query.filter_by(product_id=product_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .limit(100)
            .all()
        )
        return {
            "product_id": product_id,
            "reviews": [
                {
                    "id": r.id,
                    "customer_name": r.customer_name,
                    "star": r.star,
                    "comment": r.comment,
                    "created_at": r.created_at.isoformat(),
                }
                for r in rows
            ],
        }, 200

    if not source.stores_reviews:
        abort_json(409, "conflict", "Reviews cannot be posted to the sample catalog")

    data = get_json()
    require_fields(data, ["star"])
    star = optional_number(data, "star", 1, 5)

    r = Review(
        product_id=product_id,
        customer_name=optional_str(data, "customer_name"),
        star=star,
        comment=optional_str(data, "comment"),
    )
    db.session.add(r)
    db.session.commit()
    return {"id": r.id, "product_id": product_id, "star": r.star, "comment": r.comment}, 201
