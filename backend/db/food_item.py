import uuid

from sqlalchemy import Column, Integer, String, Text, Uuid

from .database import Base


class FoodItem(Base):
    """One physical inventory record. Duplicates (same name + brand) are expected."""
    __tablename__ = "food_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String, nullable=False, index=True)
    # Kept verbatim as a single string, e.g. "Acme, Foo Corp"
    brand = Column(String, nullable=False)
    # Package descriptor from the catalog ("500g", "1L")
    quantity = Column(String, nullable=False)
    # On-hand unit count
    stock = Column(Integer, nullable=False, default=1)

    categories = Column(Text, nullable=True)
    ingredients = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)
    expiry_date = Column(String, nullable=True)

    @property
    def to_dict(self):
        """Record as a plain dict; unset optional columns are left out."""
        data = {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "quantity": self.quantity,
            "stock": self.stock,
            "categories": self.categories,
            "ingredients": self.ingredients,
            "image_url": self.image_url,
            "source_url": self.source_url,
            "expiry_date": self.expiry_date,
        }
        return {k: v for k, v in data.items() if v is not None}
