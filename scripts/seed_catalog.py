import sys
import os

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.infrastructure.database import Base, SessionLocal, engine
from app.domain.models.category import Category
from app.domain.models.product import Product

DEMO_CATALOG = {
    "Pizza": [("Margherita", 89000), ("Pepperoni", 109000), ("Seafood", 139000)],
    "Burger": [("Classic Beef", 59000), ("Chicken Crispy", 55000), ("Double Cheese", 79000)],
    "Drinks": [("Iced Milk Coffee", 29000), ("Peach Tea", 35000), ("Coca-Cola", 15000)],
}


def seed():
    print("Seeding demo catalog...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(Category).count() > 0:
            print("Categories already exist, nothing to do.")
            return

        for category_name, products in DEMO_CATALOG.items():
            category = Category(name=category_name)
            db.add(category)
            db.flush()
            for name, price in products:
                db.add(Product(category_id=category.category_id, name=name, price=price, is_active=True))
        db.commit()
        print(f"Seeded {len(DEMO_CATALOG)} categories.")

    except Exception as e:
        print(f"Seeding failed: {e}")
        db.rollback()
    finally:
        db.close()

if __name__ == "__main__":
    seed()
