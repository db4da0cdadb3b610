"""Sample catalogue for local development and demos.

Seeding is idempotent: categories and products that already exist (matched
by name) are left alone.
"""

from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.catalogue.store import create_category, create_product
from storefront.domain import logger

_UNSPLASH = "https://images.unsplash.com/photo-{}?w=500&h=500&fit=crop"

CATEGORIES = [
    {
        "name": "Electronics",
        "description": "Latest electronic devices and gadgets",
        "photo": "1498049794561-7780e7231661",
    },
    {
        "name": "Clothing",
        "description": "Fashion and apparel for all occasions",
        "photo": "1441986300917-64674bd600d8",
    },
    {
        "name": "Home & Garden",
        "description": "Everything for your home and garden",
        "photo": "1484154218962-a197022b5858",
    },
    {
        "name": "Sports & Fitness",
        "description": "Sports equipment and fitness gear",
        "photo": "1571019613454-1cb2f99b2d8b",
    },
    {
        "name": "Books",
        "description": "Books and educational materials",
        "photo": "1481627834876-b7833e8f5570",
    },
    {
        "name": "Beauty & Health",
        "description": "Beauty products and health supplements",
        "photo": "1596462502278-27bfdc403348",
    },
]

PRODUCTS = [
    {
        "name": "iPhone 15 Pro",
        "description": "Latest iPhone with A17 Pro chip, titanium design, and advanced camera system.",
        "price": 999.99,
        "category": "Electronics",
        "brand": "Apple",
        "photos": ["1592899677977-9c10ca588bbd", "1511707171634-5f897ff02aa9"],
        "stock": 50,
        "featured": True,
        "rating": 4.8,
        "num_reviews": 124,
    },
    {
        "name": "MacBook Air M2",
        "description": "Supercharged by M2 chip. Incredibly thin and light design with all-day battery life.",
        "price": 1199.99,
        "category": "Electronics",
        "brand": "Apple",
        "photos": ["1517336714731-489689fd1ca8"],
        "stock": 30,
        "featured": True,
        "rating": 4.9,
        "num_reviews": 89,
    },
    {
        "name": "Sony WH-1000XM5 Headphones",
        "description": "Industry-leading noise canceling headphones with 30-hour battery life.",
        "price": 349.99,
        "category": "Electronics",
        "brand": "Sony",
        "photos": ["1484704849700-f032a568e944"],
        "stock": 75,
        "featured": False,
        "rating": 4.7,
        "num_reviews": 156,
    },
    {
        "name": "Classic Denim Jacket",
        "description": "Timeless denim jacket made from premium cotton.",
        "price": 89.99,
        "category": "Clothing",
        "brand": "Levi's",
        "photos": ["1551028719-00167b16eac5"],
        "stock": 72,
        "featured": True,
        "rating": 4.5,
        "num_reviews": 203,
    },
    {
        "name": "Premium Cotton T-Shirt",
        "description": "Ultra-soft premium cotton t-shirt with perfect fit.",
        "price": 24.99,
        "category": "Clothing",
        "brand": "ComfortWear",
        "photos": ["1521572163474-6864f9cf17ab"],
        "stock": 95,
        "featured": False,
        "rating": 4.6,
        "num_reviews": 78,
    },
    {
        "name": "Smart LED Strip Lights",
        "description": "WiFi-enabled LED strip lights with 16 million colors.",
        "price": 39.99,
        "category": "Home & Garden",
        "brand": "SmartHome",
        "photos": ["1558618666-fcd25c85cd64"],
        "stock": 120,
        "featured": True,
        "rating": 4.4,
        "num_reviews": 234,
    },
    {
        "name": "Ceramic Plant Pot Set",
        "description": "Set of 3 modern ceramic plant pots with drainage holes.",
        "price": 34.99,
        "category": "Home & Garden",
        "brand": "GreenThumb",
        "photos": ["1485955900006-10f4d324d411"],
        "stock": 60,
        "featured": False,
        "rating": 4.7,
        "num_reviews": 92,
    },
    {
        "name": "Yoga Mat Premium",
        "description": "Extra thick, non-slip yoga mat made from eco-friendly materials.",
        "price": 49.99,
        "category": "Sports & Fitness",
        "brand": "ZenFit",
        "photos": ["1544367567-0f2fcb009e0b"],
        "stock": 85,
        "featured": True,
        "rating": 4.8,
        "num_reviews": 167,
    },
    {
        "name": "Adjustable Dumbbells Set",
        "description": "Space-saving adjustable dumbbells with quick-change weight system.",
        "price": 299.99,
        "category": "Sports & Fitness",
        "brand": "FitPro",
        "photos": ["1571019613454-1cb2f99b2d8b"],
        "stock": 25,
        "featured": False,
        "rating": 4.6,
        "num_reviews": 143,
    },
    {
        "name": "The Art of Programming",
        "description": "Comprehensive guide to modern programming techniques and best practices.",
        "price": 59.99,
        "category": "Books",
        "brand": "TechPress",
        "photos": ["1481627834876-b7833e8f5570"],
        "stock": 200,
        "featured": False,
        "rating": 4.9,
        "num_reviews": 45,
    },
    {
        "name": "Vitamin C Serum",
        "description": "Premium vitamin C serum with hyaluronic acid.",
        "price": 29.99,
        "category": "Beauty & Health",
        "brand": "GlowSkin",
        "photos": ["1596462502278-27bfdc403348"],
        "stock": 150,
        "featured": True,
        "rating": 4.5,
        "num_reviews": 289,
    },
]


def seed_catalogue() -> dict[str, int]:
    """Create the sample categories and products. Returns how many were created."""
    categories = current_domain.repository_for(Category)
    products = current_domain.repository_for(Product)
    created = {"categories": 0, "products": 0}

    for entry in CATEGORIES:
        if categories.find_by_name(entry["name"]):
            continue
        create_category(
            name=entry["name"],
            description=entry["description"],
            image=_UNSPLASH.format(entry["photo"]).replace("h=500", "h=300"),
        )
        created["categories"] += 1

    for entry in PRODUCTS:
        if products.find_by_name(entry["name"]):
            continue
        fields = {key: value for key, value in entry.items() if key != "photos"}
        create_product(images=[_UNSPLASH.format(photo) for photo in entry["photos"]], **fields)
        created["products"] += 1

    logger.info("Catalogue seeded", **created)
    return created
