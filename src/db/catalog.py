# static product catalog, compiled in
from typing import List, Optional

from db.models import Product

PRODUCTS: List[Product] = [
    Product(
        id=1,
        name="Pure Himalayan Shilajit",
        category="Wellness",
        price=1500,
        original_price=2000,
        rating=5,
        image_url="images/shilajit.jpg",
        image_urls=("images/shilajit.jpg", "images/shilajit-jar.jpg"),
        benefits=("Boosts energy", "Rich in fulvic acid", "Supports immunity"),
        description="Resin collected from the high rocks around Skardu, "
        "purified in small batches without additives.",
    ),
    Product(
        id=2,
        name="Sun-Dried Apricots",
        category="Dry Fruits",
        price=800,
        rating=4,
        image_url="images/apricots.jpg",
        image_urls=("images/apricots.jpg",),
        benefits=("High in fibre", "No added sugar"),
        description="Apricots from Baltistan orchards, dried in the open sun.",
    ),
    Product(
        id=3,
        name="Cold-Pressed Apricot Kernel Oil",
        category="Oils",
        price=1200,
        original_price=1400,
        rating=5,
        image_url="images/apricot-oil.jpg",
        image_urls=("images/apricot-oil.jpg", "images/apricot-oil-bottle.jpg"),
        benefits=("Nourishes skin", "Conditions hair"),
        description="Kernel oil pressed cold to keep its vitamins intact.",
    ),
    Product(
        id=4,
        name="Wild Sea Buckthorn Juice",
        category="Wellness",
        price=950,
        rating=4,
        image_url="images/sea-buckthorn.jpg",
        image_urls=("images/sea-buckthorn.jpg",),
        benefits=("Vitamin C", "Omega 7"),
        description="Juice of wild sea buckthorn berries picked along the Indus.",
    ),
    Product(
        id=5,
        name="Baltistan Walnuts",
        category="Dry Fruits",
        price=1100,
        rating=4,
        image_url="images/walnuts.jpg",
        image_urls=("images/walnuts.jpg",),
        benefits=("Healthy fats", "Brain food"),
        description="Thin-shelled walnuts from the valleys of Shigar.",
    ),
    Product(
        id=6,
        name="Mountain Honey",
        category="Honey",
        price=1800,
        original_price=2100,
        rating=5,
        image_url="images/honey.jpg",
        image_urls=("images/honey.jpg", "images/honey-comb.jpg"),
        benefits=("Raw and unfiltered", "Natural sweetener"),
        description="Raw honey from wildflower meadows above 3000 metres.",
    ),
]


def get_product(product_id: int) -> Optional[Product]:
    """Return the product with the given id, or None."""
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    return None


def search_products(query: str) -> List[Product]:
    """
    Case-insensitive substring match over name and category.
    An empty query returns the whole catalog in catalog order.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(PRODUCTS)
    return [
        p
        for p in PRODUCTS
        if needle in p.name.lower() or needle in p.category.lower()
    ]


def featured_products(limit: int = 4) -> List[Product]:
    """Products on sale first, then the rest, capped at limit."""
    ranked = sorted(PRODUCTS, key=lambda p: (not p.on_sale, p.id))
    return ranked[:limit]
