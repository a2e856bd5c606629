"""Yapee database management CLI.

Creates and drops the schema and loads a small sample catalogue.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed --admin-password s3cret
    PROTEAN_ENV=production python src/manage.py setup-db   # Use the production overlay
"""

import argparse
import sys
from datetime import timedelta

from shared.clock import utcnow
from shared.config import get_config
from shared.database import db, drop_db, setup_db
from shared.logging import configure_logging

SAMPLE_CATEGORIES = [
    {"name": "Điện thoại", "name_en": "Phones", "name_zh": "手机", "icon": "fas fa-mobile-alt"},
    {"name": "Điện tử", "name_en": "Electronics", "name_zh": "电子产品", "icon": "fas fa-laptop"},
    {"name": "Thời trang", "name_en": "Fashion", "name_zh": "时尚", "icon": "fas fa-tshirt"},
    {"name": "Làm đẹp", "name_en": "Beauty", "name_zh": "美妆", "icon": "fas fa-spa"},
    {"name": "Đồ gia dụng", "name_en": "Home", "name_zh": "家居", "icon": "fas fa-home"},
    {"name": "Thể thao", "name_en": "Sports", "name_zh": "运动", "icon": "fas fa-running"},
]

SAMPLE_BRANDS = [
    {"name": "Apple", "is_featured": True},
    {"name": "Samsung", "is_featured": True},
    {"name": "Xiaomi", "is_featured": False},
]

SAMPLE_PRODUCTS = [
    {
        "name": "iPhone 15 Pro Max",
        "name_en": "iPhone 15 Pro Max",
        "name_zh": "iPhone 15 Pro Max",
        "price": 29990000,
        "original_price": 34990000,
        "discount_percentage": 14,
        "stock": 50,
        "category": "Phones",
        "brand": "Apple",
        "is_featured": True,
        "is_hot_deal": True,
    },
    {
        "name": "Samsung Galaxy S24 Ultra",
        "name_en": "Samsung Galaxy S24 Ultra",
        "name_zh": "三星 Galaxy S24 Ultra",
        "price": 26990000,
        "original_price": 31990000,
        "discount_percentage": 16,
        "stock": 40,
        "category": "Phones",
        "brand": "Samsung",
        "is_best_seller": True,
    },
    {
        "name": "Tai nghe không dây Xiaomi Buds 4",
        "name_en": "Xiaomi Buds 4 wireless earbuds",
        "name_zh": "小米 Buds 4 无线耳机",
        "price": 1490000,
        "stock": 120,
        "category": "Electronics",
        "brand": "Xiaomi",
        "is_new_arrival": True,
        "free_shipping": True,
    },
]


def setup_database():
    print("Creating database schema...")
    setup_db(db)
    print("Done.")


def drop_database():
    print("Dropping database schema...")
    drop_db(db)
    print("Done.")


def seed(admin_username: str, admin_password: str):
    """Load sample data. Does nothing when the admin account already exists."""
    from catalogue.brand.management import create_brand
    from catalogue.category.management import create_category
    from catalogue.product.management import create_product
    from identity.user.registration import register_user
    from identity.user.repository import UserRepository
    from identity.user.user import UserRole
    from marketing.banner.management import create_banner
    from marketing.flash_deal.management import create_flash_deal

    setup_db(db)
    with db.session_scope() as session:
        if UserRepository(session).get_by_username(admin_username):
            print(f"User '{admin_username}' already exists; skipping seed.")
            return

        register_user(session, admin_username, admin_password, full_name="Administrator", role=UserRole.ADMIN.value)

        categories = {data["name_en"]: create_category(session, **data) for data in SAMPLE_CATEGORIES}
        brands = {data["name"]: create_brand(session, **data) for data in SAMPLE_BRANDS}

        products = []
        for data in SAMPLE_PRODUCTS:
            data = dict(data)
            category, brand = data.pop("category"), data.pop("brand")
            products.append(
                create_product(session, category_id=categories[category].id, brand_id=brands[brand].id, **data)
            )

        now = utcnow()
        create_flash_deal(
            session,
            product_id=products[0].id,
            start_date=now,
            end_date=now + timedelta(days=7),
            total_stock=20,
        )
        create_banner(
            session,
            title="Siêu sale 11.11",
            title_en="11.11 Mega Sale",
            title_zh="11.11 超级大促",
            image_url="https://images.unsplash.com/photo-1607083206968-13611e3d76db?auto=format&fit=crop&w=1200",
            link_url="/flash-deals",
            position=1,
        )

    print(f"Seeded {len(SAMPLE_CATEGORIES)} categories, {len(SAMPLE_BRANDS)} brands, {len(SAMPLE_PRODUCTS)} products.")


def main():
    parser = argparse.ArgumentParser(description="Yapee database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Load sample catalogue data and an admin account")
    seed_parser.add_argument("--admin-username", default="admin")
    seed_parser.add_argument("--admin-password", required=True)

    args = parser.parse_args()

    configure_logging(get_config())

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed(args.admin_username, args.admin_password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
