# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import List, Optional
from decimal import Decimal


class ProductSnapshot(BaseModel):
    """Produkt z katalogu (i jego kopia zapisana w koszyku)."""

    id: str
    name: str
    category: Optional[str] = None
    cost: Decimal = Field(..., ge=0, description="Cena produktu (nieujemna)")
    rating: Optional[float] = None
    image: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")


class ItemUpdateIn(BaseModel):
    """Schema dla zmiany ilosci, 0 usuwa produkt z koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(..., ge=0, description="Nowa ilosc (0 = usun)")


class CartItemOut(BaseModel):
    product: ProductSnapshot
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: int
    email: str
    cart_items: List[CartItemOut]
    payment_option: str

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema dla tworzenia uzytkownika."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    wallet_money: Optional[Decimal] = Field(None, ge=0)
    address: Optional[str] = Field(None, min_length=20, description="Adres dostawy")

    @field_validator("password")
    @classmethod
    def password_has_letter_and_digit(cls, value: str) -> str:
        if not any(c.isdigit() for c in value) or not any(c.isalpha() for c in value):
            raise ValueError("Password must contain at least one letter and one number")
        return value


class UserRead(BaseModel):
    """Schema dla uzytkownika (response), bez hasla."""

    id: int
    name: str
    email: str
    wallet_money: Decimal
    address: str

    model_config = ConfigDict(from_attributes=True)


class UserAddressRead(BaseModel):
    id: int
    email: str
    address: str

    model_config = ConfigDict(from_attributes=True)


class AddressIn(BaseModel):
    address: str = Field(..., min_length=20, description="Adres dostawy")


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
