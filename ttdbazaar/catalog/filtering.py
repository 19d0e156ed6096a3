"""Catalog filter/sort.

Pure functions over product view models. Nothing here touches the database
or the request; callers hand in a sequence of `CatalogItem` and get a new
list back. The input sequence is never mutated, so the same source can be
filtered again on every keystroke.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"

Number = float


@dataclass(frozen=True)
class CatalogItem:
    id: str
    name: str
    description: str
    price: Number
    category: str
    in_stock: bool = True
    original_price: Optional[Number] = None
    rating: float = 0.0
    review_count: int = 0
    is_featured: bool = False
    created_at: Optional[datetime] = None
    vendor: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def discount_percent(self) -> Optional[int]:
        """Whole percent off `original_price`, or None when there is no discount."""
        if self.original_price is None or self.original_price <= self.price or self.original_price <= 0:
            return None
        return int(round((self.original_price - self.price) * 100 / self.original_price))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "original_price": self.original_price,
            "discount_percent": self.discount_percent,
            "category": self.category,
            "in_stock": self.in_stock,
            "rating": self.rating,
            "review_count": self.review_count,
            "is_featured": self.is_featured,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "vendor": self.vendor,
            "image_url": self.image_url,
        }


Predicate = Callable[[CatalogItem], bool]


def parse_price_bound(raw: Any) -> Optional[Number]:
    """Turn free-text price input into a number, or None if it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(Decimal(text))
        except (InvalidOperation, ValueError):
            logger.debug("Ignoring malformed price bound %r", raw)
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _truthy(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Criteria:
    query: str = ""
    category: Optional[str] = None
    min_price: Optional[Number] = None
    max_price: Optional[Number] = None
    in_stock_only: bool = False

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "Criteria":
        """Build criteria from query-string style input.

        Accepts `q` or `search` for the text query. Bounds that do not parse
        as numbers are dropped rather than rejected.
        """
        query = params.get("q")
        if query is None:
            query = params.get("search")
        return cls(
            query=str(query or ""),
            category=(str(params.get("category") or "").strip() or None),
            min_price=parse_price_bound(params.get("min_price")),
            max_price=parse_price_bound(params.get("max_price")),
            in_stock_only=_truthy(params.get("in_stock")),
        )

    def predicates(self) -> List[Predicate]:
        preds: List[Predicate] = []

        needle = (self.query or "").strip().lower()
        if needle:
            preds.append(lambda p: needle in (p.name or "").lower() or needle in (p.description or "").lower())

        category = (self.category or "").strip()
        if category and category.lower() != ALL_CATEGORIES.lower():
            preds.append(lambda p: p.category == category)

        lo = parse_price_bound(self.min_price)
        if lo is not None:
            preds.append(lambda p: p.price >= lo)

        hi = parse_price_bound(self.max_price)
        if hi is not None:
            preds.append(lambda p: p.price <= hi)

        if self.in_stock_only:
            preds.append(lambda p: p.in_stock)

        return preds


def filter_products(
    items: Iterable[CatalogItem],
    criteria: Optional[Criteria] = None,
    extra: Sequence[Predicate] = (),
) -> List[CatalogItem]:
    preds = (criteria or Criteria()).predicates() + list(extra)
    return [p for p in items if all(pred(p) for pred in preds)]


# --- Sorting ---

# A sort step is (key function, descending). Steps run primary-first.
SortStep = Tuple[Callable[[CatalogItem], Any], bool]

_EPOCH = datetime.min

SORT_STEPS: Dict[str, List[SortStep]] = {
    "relevance": [],
    "price-asc": [(lambda p: p.price, False)],
    "price-desc": [(lambda p: p.price, True)],
    "rating": [(lambda p: p.rating, True)],
    # Undated items sort as oldest.
    "newest": [(lambda p: p.created_at or _EPOCH, True)],
    "featured": [(lambda p: p.is_featured, True)],
}

SORT_ALIASES = {
    "": "relevance",
    "none": "relevance",
    "price-low": "price-asc",
    "price_asc": "price-asc",
    "price-high": "price-desc",
    "price_desc": "price-desc",
    "top-rated": "rating",
}

# Sort the API applies when a request names none.
DEFAULT_SORT = "featured"

SORT_OPTIONS = [
    {"value": "featured", "label": "Featured"},
    {"value": "price-asc", "label": "Price: Low to High"},
    {"value": "price-desc", "label": "Price: High to Low"},
    {"value": "rating", "label": "Highest Rated"},
    {"value": "newest", "label": "Newest"},
]


def resolve_sort_key(sort_key: Optional[str]) -> str:
    key = (sort_key or "").strip().lower()
    key = SORT_ALIASES.get(key, key)
    return key if key in SORT_STEPS else "relevance"


def sort_products(items: Iterable[CatalogItem], sort_key: Optional[str] = None) -> List[CatalogItem]:
    out = list(items)
    # sorted() is stable, so applying the least significant step first
    # yields a multi-key order with input order as the final tiebreaker.
    for key_fn, descending in reversed(SORT_STEPS[resolve_sort_key(sort_key)]):
        out = sorted(out, key=key_fn, reverse=descending)
    return out


def filter_and_sort(
    items: Iterable[CatalogItem],
    criteria: Optional[Criteria] = None,
    sort_key: Optional[str] = None,
    extra: Sequence[Predicate] = (),
) -> List[CatalogItem]:
    return sort_products(filter_products(items, criteria, extra), sort_key)


@dataclass
class Page:
    items: List[CatalogItem] = field(default_factory=list)
    limit: int = 0
    offset: int = 0
    total: int = 0


def paginate(items: Sequence[CatalogItem], limit: int, offset: int = 0, max_limit: int = 100) -> Page:
    limit = max(1, min(limit, max_limit))
    offset = max(0, offset)
    return Page(items=list(items[offset:offset + limit]), limit=limit, offset=offset, total=len(items))


def available_categories(items: Iterable[CatalogItem], defaults: Sequence[str] = ()) -> List[str]:
    seen: List[str] = [ALL_CATEGORIES]
    for name in list(defaults) + [p.category for p in items]:
        if name and name not in seen:
            seen.append(name)
    return seen
