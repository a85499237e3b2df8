from decimal import DecimalException
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.product import PRIMARY_KEY, to_dynamo


def storable(value: Any) -> Any:
    """Reject numbers DynamoDB can't hold: over 38 digits, or out of range."""
    try:
        to_dynamo(value)
    except DecimalException:
        raise ValueError('Number cannot be stored: at most 38 significant digits, magnitude 1E-130 to 9.9E+125')
    return value


class ProductKey(BaseModel):
    productId: str = Field(min_length=1)


class Product(ProductKey):
    """A product record: the key plus any other attributes."""
    model_config = ConfigDict(extra="allow")

    @model_validator(mode='after')
    def attributes_must_be_storable(self) -> 'Product':
        storable(self.model_extra)
        return self


class ProductUpdate(ProductKey):
    updateKey: str = Field(min_length=1)
    updateValue: Any

    @field_validator('updateKey')
    @classmethod
    def must_not_be_primary_key(cls, v: str) -> str:
        if v == PRIMARY_KEY:
            raise ValueError(f'{PRIMARY_KEY} cannot be updated')
        return v

    @field_validator('updateValue')
    @classmethod
    def value_must_be_storable(cls, v: Any) -> Any:
        return storable(v)
