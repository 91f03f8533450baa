"""
Core Data Models for CashApp

An expense item is a small immutable record: name, category and price,
plus an identity assigned when the item is created.

DESIGN DECISION: The category is stored as a plain string.
The form offers "Personal" and "Business", but the model accepts anything
the caller hands it. Validation beyond types is the caller's job.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


PRIVATE_ITEMS_KEY = "PrivateItems"
BUSINESS_ITEMS_KEY = "BusinessItems"


# =============================================================================
# ENUMS
# =============================================================================

class Category(str, Enum):
    """Categories offered by the "add expense" form."""
    PERSONAL = "Personal"
    BUSINESS = "Business"


class Collection(str, Enum):
    """
    The two independent expense lists.
    
    Each list is persisted under its own fixed key.
    """
    PRIVATE = "private"
    BUSINESS = "business"
    
    @property
    def storage_key(self) -> str:
        """Default persistence key for this collection."""
        if self is Collection.PRIVATE:
            return PRIVATE_ITEMS_KEY
        return BUSINESS_ITEMS_KEY
    
    @classmethod
    def for_category(cls, category: Union[Category, str]) -> "Collection":
        """
        Pick the list an entry belongs in.
        
        "Personal" entries go to the private list, everything else
        goes to the business list.
        """
        value = category.value if isinstance(category, Category) else category
        if value == Category.PERSONAL.value:
            return cls.PRIVATE
        return cls.BUSINESS


# =============================================================================
# EXPENSE ITEM
# =============================================================================

class ExpenseItem(BaseModel):
    """
    A single recorded expense.
    
    Items are frozen: there is no update operation. To "edit" an item,
    remove it and add a new one.
    
    The serialized form uses the key "type" for the category and a
    floating-point number for the price.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)
    
    id: UUID = Field(
        default_factory=uuid4,
        description="Opaque identity, assigned at creation"
    )
    name: str = Field(
        ...,
        description="Free-text label"
    )
    category: str = Field(
        ...,
        alias="type",
        description="Category label, conventionally Personal or Business"
    )
    price: Decimal = Field(
        ...,
        description="Amount in the process-wide default currency"
    )
    
    @field_validator('category', mode='before')
    @classmethod
    def unwrap_category(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v
    
    @field_validator('price', mode='before')
    @classmethod
    def float_price_via_str(cls, v: Any) -> Any:
        """Convert floats through their repr so 3.5 stays Decimal("3.5")."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v
    
    @field_serializer('price')
    def serialize_price(self, v: Decimal) -> float:
        return float(v)
    
    @classmethod
    def create(
        cls,
        name: str,
        category: Union[Category, str],
        price: Union[Decimal, float, int, str],
    ) -> "ExpenseItem":
        """
        Build a new item with a fresh identifier.
        
        Fields are stored verbatim. Empty names and zero or negative
        prices are accepted. The price must be a finite number: NaN and
        infinity raise ValidationError, since they cannot be persisted.
        """
        return cls(name=name, category=category, price=price)
