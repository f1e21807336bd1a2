"""
Input validation schemas using Pydantic. Prices and budgets are rejected here
(InvalidAmount) before they can reach the tax engine.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shop.domain.Province import is_known_jurisdiction
from shop.utilities.constants import MAX_AMOUNT, MAX_QUANTITY, MIN_QUANTITY, MONEY_DECIMAL_PLACES
from shop.utilities.currency import validate_amount

HEX_COLOR_PATTERN = r'^#[0-9A-Fa-f]{6}$'


def money_field(default=...):
    """Non-negative, capped at MAX_AMOUNT, at most two decimals."""
    return Field(default, ge=0, le=MAX_AMOUNT, decimal_places=MONEY_DECIMAL_PLACES)


def _strip_required(v):
    if isinstance(v, str):
        v = v.strip()
    if not v:
        raise ValueError('Name cannot be empty')
    return v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v


class ListInput(BaseModel):
    """Schema for creating a shopping list. A budget of 0 or null means no budget."""
    name: str = Field(..., max_length=100)
    budget: Optional[Decimal] = money_field(None)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _strip_required(v)

    @field_validator('budget', mode='before')
    @classmethod
    def validate_budget(cls, v):
        if v is None or v == "":
            return None
        return validate_amount(v, 'budget')


class ListUpdate(ListInput):
    """Partial update; an explicit "budget": null clears the budget."""
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return None if v is None else _strip_required(v)


class ItemInput(BaseModel):
    """Schema for a shopping list item."""
    name: str = Field(..., max_length=100)
    price: Decimal = money_field()
    quantity: int = Field(MIN_QUANTITY, ge=MIN_QUANTITY, le=MAX_QUANTITY)
    category_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    is_purchased: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _strip_required(v)

    @field_validator('price', mode='before')
    @classmethod
    def validate_price(cls, v):
        return validate_amount(v, 'price')

    @field_validator('category_name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class ItemUpdate(BaseModel):
    """Partial item edit; only the fields sent are applied."""
    name: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = money_field(None)
    quantity: Optional[int] = Field(None, ge=MIN_QUANTITY, le=MAX_QUANTITY)
    category_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    is_purchased: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return None if v is None else _strip_required(v)

    @field_validator('price', mode='before')
    @classmethod
    def validate_price(cls, v):
        return None if v is None else validate_amount(v, 'price')

    @field_validator('category_name', 'notes', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        return _blank_to_none(v)

    def changes(self) -> dict:
        """Fields present in the request. Only category and notes may be cleared with null."""
        clearable = {'category_name', 'notes'}
        return {
            k: getattr(self, k) for k in self.model_fields_set
            if getattr(self, k) is not None or k in clearable
        }


class CategoryInput(BaseModel):
    """Schema for a product category."""
    name: str = Field(..., max_length=50)
    is_taxable: bool = True
    color_hex: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    icon_name: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _strip_required(v)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    is_taxable: Optional[bool] = None
    color_hex: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    icon_name: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return None if v is None else _strip_required(v)


class SettingsUpdate(BaseModel):
    """Schema for preference changes. The province must be one of the supported names."""
    selected_province: Optional[str] = None
    show_purchased_items: Optional[bool] = None
    default_budget: Optional[Decimal] = money_field(None)

    @field_validator('selected_province')
    @classmethod
    def validate_province(cls, v):
        if v is not None and not is_known_jurisdiction(v):
            raise ValueError(f'Unknown province: {v}')
        return v

    @field_validator('default_budget', mode='before')
    @classmethod
    def validate_default_budget(cls, v):
        return None if v is None else validate_amount(v, 'default_budget')


class CalculatorQuery(BaseModel):
    """Standalone calculator input."""
    amount: Decimal = money_field(Decimal("0"))
    taxable: bool = True
    province: Optional[str] = None

    @field_validator('amount', mode='before')
    @classmethod
    def validate_amount_field(cls, v):
        return validate_amount(v, 'amount')
