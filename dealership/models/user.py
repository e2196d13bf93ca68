# dealership/models/user.py
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from .base import TimeStampedModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserRole(str, Enum):
    MANAGER = "manager"
    CUSTOMER = "customer"


class ManagerPublic(TimeStampedModel):
    """Manager as shown to callers, without credentials"""
    manager_id: int
    name: str
    email: str
    is_active: bool = True
    last_login_at: Optional[datetime] = None


class Manager(ManagerPublic):
    password_hash: str

    def public(self) -> ManagerPublic:
        return ManagerPublic.model_validate(self.model_dump(exclude={'password_hash'}))


class CustomerPublic(TimeStampedModel):
    """Customer as shown to callers, without credentials"""
    customer_id: int
    name: str
    email: str
    phone: str
    is_active: bool = True
    last_login_at: Optional[datetime] = None


class Customer(CustomerPublic):
    password_hash: str

    def public(self) -> CustomerPublic:
        return CustomerPublic.model_validate(self.model_dump(exclude={'password_hash'}))


class _Credentials(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class LoginRequest(_Credentials):
    pass


class ManagerRegister(_Credentials):
    name: str = Field(min_length=1)


class CustomerRegister(_Credentials):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)


class ManagerProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)


class CustomerProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=6)
    new_password: str = Field(min_length=6)


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


class ManagerAuth(BaseModel):
    manager: ManagerPublic
    tokens: TokenPair


class CustomerAuth(BaseModel):
    customer: CustomerPublic
    tokens: TokenPair
