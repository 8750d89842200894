# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models import FaqModel, PortfolioModel, ProductModel, ReviewModel, UserModel
from storefront.utils.logging import get_logger
from storefront.utils.security import hash_password

logger = get_logger(__name__)

USERS = [
    {"email": "admin@example.com", "name": "Super Admin", "password": "AdminPass123!", "admin": True},
    {"email": "alice@example.com", "name": "Alice", "password": "AlicePass123!", "admin": False},
    {"email": "mark@example.com", "name": "Mark", "password": "MarkPass123!", "admin": False},
    {"email": "sofia@example.com", "name": "Sofia", "password": "SofiaPass123!", "admin": False},
]

PRODUCTS = [
    {"slug": "eco-bottle", "name": "Eco Bottle", "price": "19.90", "category": "Accessories", "img": "/images/sara-groblechner-h10-NImYZHs-unsplash.jpg", "description": "Reusable bottle made from recycled materials.", "stock": 20},
    {"slug": "bamboo-toothbrush", "name": "Bamboo Toothbrush", "price": "4.90", "category": "Hygiene", "img": "/images/sara-groblechner-7TgbRVEYdYY-unsplash.jpg", "description": "Soft bristles, compostable handle.", "stock": 12},
    {"slug": "metal-straw-set", "name": "Metal Straw Set", "price": "9.90", "category": "Kitchen", "img": "/images/blair-yang-VyXMd13O1qE-unsplash.jpg", "description": "Set of 4 stainless steel straws + brush.", "stock": 41},
    {"slug": "reusable-bag", "name": "Reusable Bag", "price": "7.50", "category": "Accessories", "img": "/images/kelly-sikkema-1Pgq9ZpIatI-unsplash.jpg", "description": "Durable tote bag for daily use.", "stock": 49},
    {"slug": "solar-charger", "name": "Solar Charger", "price": "39.00", "category": "Electronics", "img": "/images/evnex-ltd-QjZqEIrTy1c-unsplash.jpg", "description": "Charge devices with sunlight.", "stock": 99},
    {"slug": "organic-soap", "name": "Organic Soap", "price": "5.90", "category": "Hygiene", "img": "/images/aurelia-dubois-6J0MUsmS4fQ-unsplash.jpg", "description": "Natural ingredients, gentle on skin.", "stock": 148},
    {"slug": "wooden-cutlery", "name": "Wooden Cutlery", "price": "6.50", "category": "Kitchen", "img": "/images/clair-Mv3yxyI_OY4-unsplash.jpg", "description": "Reusable wooden cutlery set.", "stock": 12},
    {"slug": "recycled-notebook", "name": "Recycled Notebook", "price": "8.90", "category": "Stationery", "img": "/images/daian-gan-8_d05sj9JVc-unsplash.jpg", "description": "Notebook made from recycled paper.", "stock": 45},
    {"slug": "thermal-mug", "name": "Thermal Mug", "price": "14.90", "category": "Kitchen", "img": "/images/sean-thoman-smtcdXmvZTI-unsplash.jpg", "description": "Keep drinks hot or cold longer.", "stock": 67},
    {"slug": "led-bulb", "name": "LED Bulb", "price": "3.90", "category": "Electronics", "img": "/images/federico-bottos-TuAtSs8peoM-unsplash.jpg", "description": "Energy-saving LED bulb.", "stock": 7},
]

PORTFOLIO = [
    {"slug": "eco-store-landing", "name": "Eco Store Landing", "image_url": "https://images.unsplash.com/photo-1501004318641-b39e6451bec6?q=80&w=1200&auto=format&fit=crop", "description": "Modern landing page for an eco-friendly shop.", "tags": ["React", "Bootstrap", "Landing"]},
    {"slug": "catalog-grid", "name": "Catalog Grid", "image_url": "https://images.unsplash.com/photo-1519681393784-d120267933ba?q=80&w=1200&auto=format&fit=crop", "description": "Responsive product grid with filters.", "tags": ["React", "Grid", "UI"]},
    {"slug": "checkout-flow", "name": "Checkout Flow", "image_url": "https://images.unsplash.com/photo-1470770903676-69b98201ea1c?q=80&w=1200&auto=format&fit=crop", "description": "Smooth checkout flow (Stripe mock).", "tags": ["Checkout", "Stripe", "UX"]},
]

FAQS = [
    {"question": "Do you ship internationally ?", "answer": "Yes (demo content).", "ordering": 1, "published": True},
    {"question": "Return policy ?", "answer": "30 days (demo).", "ordering": 2, "published": True},
    {"question": "Is payment secure ?", "answer": "Mock checkout only.", "ordering": 3, "published": True},
]

# (email autora, slug produktu, tresc)
REVIEWS = [
    ("alice@example.com", "eco-bottle", {"name": "Alice", "text": "Great quality and fast delivery!", "stars": 5}),
    ("mark@example.com", "bamboo-toothbrush", {"name": "Mark", "text": "Exactly as described. Will buy again.", "stars": 5}),
    ("sofia@example.com", "metal-straw-set", {"name": "Sofia", "text": "Nice eco products. Support was helpful.", "stars": 4}),
]


def seed(db: Session) -> None:
    """
    Dane demo, idempotentnie: mozna odpalac wiele razy.
    Kolejnosc ma znaczenie, opinie potrzebuja userow i produktow.
    """
    users = {}
    for data in USERS:
        user = db.execute(select(UserModel).where(UserModel.email == data["email"])).scalar_one_or_none()
        if not user:
            user = UserModel(
                email=data["email"],
                name=data["name"],
                password=hash_password(data["password"]),
                admin=data["admin"],
            )
            db.add(user)
        users[data["email"]] = user

    products = {}
    for data in PRODUCTS:
        values = {**data, "price": Decimal(data["price"])}
        product = db.execute(select(ProductModel).where(ProductModel.slug == data["slug"])).scalar_one_or_none()
        if product is None:
            product = ProductModel(**values)
            db.add(product)
        else:
            for field, value in values.items():
                if getattr(product, field) != value:
                    setattr(product, field, value)
        products[data["slug"]] = product

    for data in PORTFOLIO:
        item = db.execute(select(PortfolioModel).where(PortfolioModel.slug == data["slug"])).scalar_one_or_none()
        if item is None:
            db.add(PortfolioModel(**data))
        else:
            for field, value in data.items():
                if getattr(item, field) != value:
                    setattr(item, field, value)

    for data in FAQS:
        exists = db.execute(select(FaqModel.id).where(FaqModel.question == data["question"])).first()
        if not exists:
            db.add(FaqModel(**data))

    db.flush()

    for email, slug, data in REVIEWS:
        user, product = users[email], products[slug]
        exists = db.execute(
            select(ReviewModel.id).where(ReviewModel.user_id == user.id, ReviewModel.product_id == product.id)
        ).first()
        if not exists:
            db.add(ReviewModel(**data, published=True, user_id=user.id, product_id=product.id))

    db.commit()
    logger.info("Seed done")


if __name__ == "__main__":
    from storefront.data.database import Database
    from storefront.utils.settings import DATABASE_URL

    database = Database(DATABASE_URL)
    database.open()
    try:
        with database.session() as session:
            seed(session)
    finally:
        database.close()
