# dealership/models/car.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .base import TimeStampedModel


class Transmission(str, Enum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"


class FuelType(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"
    ELECTRIC = "electric"
    HYBRID = "hybrid"


class Condition(str, Enum):
    NEW = "new"
    USED = "used"


# Fields that together identify the same listing for one manager
SPEC_FIELDS = (
    'brand', 'model_name', 'year', 'transmission', 'fuel_type',
    'engine_size', 'vin', 'condition'
)

SORTABLE_FIELDS = (
    'created_at', 'updated_at', 'price', 'year', 'mileage', 'brand',
    'model_name', 'quantity'
)


def _check_year(value: Optional[int]) -> Optional[int]:
    if value is not None and not 1900 <= value <= datetime.now().year + 1:
        raise ValueError(f"Year must be between 1900 and {datetime.now().year + 1}")
    return value


class Car(TimeStampedModel):
    """Car listing; `available` is false whenever `quantity` is 0"""
    car_id: int
    brand: str
    model_name: str
    year: int
    price: Decimal
    category_id: int
    manager_id: int
    mileage: int
    transmission: Transmission
    fuel_type: FuelType
    engine_size: Decimal
    color: str
    vin: str
    available: bool = True
    condition: Condition
    quantity: int = 1

    model_config = ConfigDict(protected_namespaces=())

    @property
    def in_stock(self) -> bool:
        return self.available and self.quantity > 0


class CarCreate(BaseModel):
    brand: str = Field(min_length=1)
    model_name: str = Field(min_length=1)
    year: int
    price: Decimal = Field(ge=0)
    category_id: int
    mileage: int = Field(ge=0)
    transmission: Transmission
    fuel_type: FuelType
    engine_size: Decimal = Field(ge=0)
    color: str = Field(min_length=1)
    vin: str = Field(min_length=1)
    available: bool = True
    condition: Condition
    quantity: int = Field(default=1, ge=1)

    model_config = ConfigDict(protected_namespaces=(), str_strip_whitespace=True)

    @field_validator('year')
    @classmethod
    def check_year(cls, value):
        return _check_year(value)


class CarUpdate(BaseModel):
    """Listing edits; stock is only moved by the order lifecycle"""
    brand: Optional[str] = Field(default=None, min_length=1)
    model_name: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    mileage: Optional[int] = Field(default=None, ge=0)
    transmission: Optional[Transmission] = None
    fuel_type: Optional[FuelType] = None
    engine_size: Optional[Decimal] = Field(default=None, ge=0)
    color: Optional[str] = Field(default=None, min_length=1)
    vin: Optional[str] = Field(default=None, min_length=1)
    available: Optional[bool] = None
    condition: Optional[Condition] = None

    model_config = ConfigDict(protected_namespaces=(), str_strip_whitespace=True,
                              extra='forbid')

    @field_validator('year')
    @classmethod
    def check_year(cls, value):
        return _check_year(value)

    def has_spec_changes(self) -> bool:
        return any(field in self.model_fields_set for field in SPEC_FIELDS)


class CarFilters(BaseModel):
    brand: Optional[str] = None
    model_name: Optional[str] = None
    category_id: Optional[int] = None
    available: Optional[bool] = None
    year: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    transmission: Optional[Transmission] = None
    fuel_type: Optional[FuelType] = None
    condition: Optional[Condition] = None

    model_config = ConfigDict(protected_namespaces=())
