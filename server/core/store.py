# server/core/store.py

from fastapi import Depends
from sqlalchemy.orm import Session
from database import get_db
from models.user import User
from models.product import Product


PRODUCT_FIELDS = ("name", "image_link", "description", "price")


class CatalogStore:
    """
    Persistence for users and products over a single SQLAlchemy session.
    Every write is a single statement followed by a commit.
    """

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------
    # Users
    # -------------------------------

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, username: str, hashed_password: str) -> User:
        user = User(username=username, hashed_password=hashed_password)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    # -------------------------------
    # Products
    # -------------------------------

    def list_products(self) -> list[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def get_product(self, product_id: int) -> Product | None:
        return self.db.get(Product, product_id)

    def create_product(self, owner_id: int, name: str, image_link, description, price: float) -> Product:
        product = Product(
            name=name,
            image_link=image_link,
            description=description,
            price=price,
            user_id=owner_id,
        )
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product_if_owner(self, product_id: int, owner_id: int, changes: dict) -> Product | None:
        """
        Applies `changes` only while the row still belongs to `owner_id`.
        Returns the refreshed product, or None if no row matched.
        """
        values = {key: value for key, value in changes.items() if key in PRODUCT_FIELDS}
        query = self.db.query(Product).filter(Product.id == product_id, Product.user_id == owner_id)
        if values:
            matched = query.update(values)
        else:
            matched = query.count()
        self.db.commit()
        if not matched:
            return None
        product = self.db.get(Product, product_id)
        self.db.refresh(product)
        return product

    def delete_product_if_owner(self, product_id: int, owner_id: int) -> bool:
        deleted = (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.user_id == owner_id)
            .delete()
        )
        self.db.commit()
        return deleted > 0


def get_store(db: Session = Depends(get_db)) -> CatalogStore:
    return CatalogStore(db)
