from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class FoodItemCreate(BaseModel):
    """Body of POST /api/food/add. Required fields are checked by the service
    so that a missing one yields a field-level 400 rather than a 422."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    brand: Optional[str] = Field(default=None, alias="brands")
    quantity: Optional[str] = None
    # Strict: JSON true/false must not pass as 1/0
    stock: Optional[StrictInt] = None

    ingredients: Optional[str] = None
    categories: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    source_url: Optional[str] = Field(default=None, alias="url")
    expiry_date: Optional[str] = Field(default=None, alias="expiryDate")

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_as_text(cls, v: Any) -> Any:
        # "quantity": 500 is accepted and kept as the descriptor "500"
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ExpiryDateUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    expiry_date: Optional[str] = Field(default=None, alias="expiryDate")


class QuantityUpdate(BaseModel):
    # Numeric on-hand count; stored in the item's `stock` column
    quantity: Optional[StrictInt] = None


class FoodItemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    name: str
    brand: str = Field(serialization_alias="brands")
    quantity: str
    stock: int
    ingredients: Optional[str] = None
    categories: Optional[str] = None
    image_url: Optional[str] = Field(default=None, serialization_alias="imageUrl")
    source_url: Optional[str] = Field(default=None, serialization_alias="url")
    expiry_date: Optional[str] = Field(default=None, serialization_alias="expiryDate")


class InventoryEntryOut(FoodItemOut):
    count: int


class FoodItemAdded(BaseModel):
    message: str
    item: FoodItemOut


class CandidateProduct(BaseModel):
    """Normalized Open Food Facts search hit."""
    name: str
    brands: str
    quantity: str
    categories: str
    imageUrl: str
    url: str
    ingredients: str
