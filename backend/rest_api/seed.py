"""
Seed data for development and testing.
Creates one demo restaurant with a manager, a chef, a customer, a small
menu and a few empty tables.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Admin, Chef, Customer, DiningTable, Dish, Restaurant
from shared.config.constants import AdminRole
from shared.config.logging import get_logger
from shared.security.password import hash_password

logger = get_logger(__name__)


DEMO_RESTAURANT_ID = "restro-1"
DEMO_PASSWORD = "demo1234"
DEMO_TABLE_COUNT = 6

DEMO_DISHES = [
    {
        "name": "Paneer Tikka",
        "description": "Char-grilled cottage cheese with peppers",
        "price": 220.0,
        "rating": 4.5,
        "cooking_time": 20,
        "type_of_dish": ["Starter", "Veg"],
        "genre_of_taste": ["Spicy"],
    },
    {
        "name": "Butter Chicken",
        "description": "Chicken in a tomato and butter gravy",
        "price": 320.0,
        "rating": 4.7,
        "cooking_time": 30,
        "type_of_dish": ["Main Course", "Non-Veg"],
        "genre_of_taste": ["Creamy", "Mild"],
    },
    {
        "name": "Garlic Naan",
        "description": None,
        "price": 60.0,
        "rating": 4.2,
        "cooking_time": 10,
        "type_of_dish": ["Bread"],
        "genre_of_taste": ["Savory"],
    },
    {
        "name": "Gulab Jamun",
        "description": "Milk dumplings in rose syrup",
        "price": 90.0,
        "rating": 4.4,
        "cooking_time": 5,
        "type_of_dish": ["Dessert"],
        "genre_of_taste": ["Sweet"],
    },
]


def seed(db: Session) -> bool:
    """
    Insert the demo data. Idempotent: does nothing when any restaurant exists.
    Returns True when data was inserted.
    """
    if db.scalar(select(Restaurant.restaurant_id).limit(1)):
        logger.info("Database already seeded, skipping")
        return False

    password = hash_password(DEMO_PASSWORD)

    db.add(
        Restaurant(
            restaurant_id=DEMO_RESTAURANT_ID,
            name_id="Demo Bistro",
            location_id="Main Street 1",
            logo={},
        )
    )
    db.add(
        Admin(
            restaurant_id=DEMO_RESTAURANT_ID,
            admin_id=f"{AdminRole.MANAGER.value}-1",
            admin_name="Demo Manager",
            email="manager@demo.local",
            password=password,
            role=AdminRole.MANAGER.value,
        )
    )
    db.add(
        Chef(
            chef_id="CHEF-1",
            restaurant_id=DEMO_RESTAURANT_ID,
            name="Demo Chef",
            email="chef@demo.local",
            password=password,
        )
    )
    db.add(
        Customer(
            customer_id="CUSTOMER-1",
            restaurant_id=DEMO_RESTAURANT_ID,
            name="Demo Customer",
            email="customer@demo.local",
            password=password,
        )
    )

    for index, dish in enumerate(DEMO_DISHES, start=1):
        db.add(Dish(dish_id=f"DISH-{index}", restaurant_id=DEMO_RESTAURANT_ID, images=[], **dish))

    for table_no in range(1, DEMO_TABLE_COUNT + 1):
        db.add(DiningTable(restaurant_id=DEMO_RESTAURANT_ID, table_no=table_no))

    db.commit()
    logger.info(
        "Demo data seeded",
        restaurant_id=DEMO_RESTAURANT_ID,
        dishes=len(DEMO_DISHES),
        tables=DEMO_TABLE_COUNT,
    )
    return True
