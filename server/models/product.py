# server/models/product.py

from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey
from . import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    image_link = Column(String)
    description = Column(Text)
    price = Column(Float, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "imageLink": self.image_link,
            "description": self.description,
            "price": self.price,
            "userId": self.user_id,
        }
