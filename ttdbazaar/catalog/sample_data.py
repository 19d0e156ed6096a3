"""Static sample catalogue (prices in paise)."""

from __future__ import annotations

from datetime import datetime

from ttdbazaar.catalog.filtering import CatalogItem

DEFAULT_CATEGORIES = ["Devotional Items", "Prasadam", "Handicrafts", "Clothing", "Souvenirs"]

SAMPLE_PRODUCTS = [
    CatalogItem(
        id="1",
        name="Sacred Rudraksha Mala",
        description="Authentic 108 bead Rudraksha mala for meditation and spiritual practice",
        price=129900,
        original_price=159900,
        category="Devotional Items",
        vendor="Divine Beads Co.",
        rating=4.8,
        review_count=124,
        in_stock=True,
        is_featured=True,
        created_at=datetime(2025, 1, 10),
        image_url="https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=400",
    ),
    CatalogItem(
        id="2",
        name="Tirupati Laddu (Box of 12)",
        description="Fresh and authentic Tirupati laddus directly from TTD kitchen",
        price=45000,
        category="Prasadam",
        vendor="TTD Official Store",
        rating=5.0,
        review_count=89,
        in_stock=True,
        is_featured=True,
        created_at=datetime(2025, 3, 2),
        image_url="https://images.unsplash.com/photo-1606313564200-e75d5e30476c?w=400",
    ),
    CatalogItem(
        id="3",
        name="Brass Temple Bell",
        description="Handcrafted brass temple bell with beautiful engravings",
        price=89900,
        original_price=120000,
        category="Handicrafts",
        vendor="Traditional Crafts",
        rating=4.5,
        review_count=67,
        in_stock=True,
        created_at=datetime(2025, 2, 14),
        image_url="https://images.unsplash.com/photo-1609845205347-67c1b9e9d3e7?w=400",
    ),
    CatalogItem(
        id="4",
        name="Silk Dhoti with Gold Border",
        description="Premium silk dhoti with traditional gold border work",
        price=249900,
        category="Clothing",
        vendor="Silk Heritage",
        rating=4.7,
        review_count=43,
        in_stock=False,
        created_at=datetime(2024, 11, 20),
        image_url="https://images.unsplash.com/photo-1583391733956-3750e0ff4e8b?w=400",
    ),
    CatalogItem(
        id="5",
        name="Miniature Venkateswara Idol",
        description="Beautiful miniature idol of Lord Venkateswara in brass",
        price=159900,
        category="Souvenirs",
        vendor="Divine Idols",
        rating=4.9,
        review_count=156,
        in_stock=True,
        created_at=datetime(2025, 4, 1),
        image_url="https://images.unsplash.com/photo-1597131922203-9e9e8f6fbf3e?w=400",
    ),
    CatalogItem(
        id="6",
        name="Sandalwood Incense Sticks",
        description="Pure sandalwood incense sticks for prayer and meditation",
        price=29900,
        original_price=39900,
        category="Devotional Items",
        vendor="Mysore Sandalwood",
        rating=4.6,
        review_count=201,
        in_stock=True,
        created_at=datetime(2024, 12, 5),
        image_url="https://images.unsplash.com/photo-1571580402230-8ab4f8c1bbab?w=400",
    ),
]
