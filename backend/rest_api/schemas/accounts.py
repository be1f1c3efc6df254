"""
Customer, Chef and Admin schemas.

Output schemas never carry a Password field.
"""

from pydantic import BaseModel, Field

from .common import ALIASED


# =============================================================================
# Customer
# =============================================================================


class CustomerOutput(BaseModel):
    customer_id: str = Field(alias="Customer Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    name: str | None = Field(default=None, alias="Name")
    email: str = Field(alias="Email")
    contact_number: str | None = Field(default=None, alias="Contact Number")
    images: list = Field(default_factory=list, alias="Images")

    model_config = ALIASED


class CustomerCreate(BaseModel):
    # Optional here so missing fields produce the service's 400 message
    name: str | None = Field(default=None, alias="Name")
    email: str | None = Field(default=None, alias="Email")
    password: str | None = Field(default=None, alias="Password")
    contact_number: str | None = Field(default=None, alias="Contact Number")
    images: list | None = Field(default=None, alias="Images")

    model_config = ALIASED


class CustomerUpdate(CustomerCreate):
    pass


# =============================================================================
# Chef
# =============================================================================


class ChefOutput(BaseModel):
    chef_id: str = Field(alias="Chef Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    name: str = Field(alias="Name")
    email: str = Field(alias="Email")

    model_config = ALIASED


class ChefCreate(BaseModel):
    name: str | None = Field(default=None, alias="Name")
    email: str | None = Field(default=None, alias="Email")
    password: str | None = Field(default=None, alias="Password")

    model_config = ALIASED


class ChefUpdate(ChefCreate):
    pass


# =============================================================================
# Admin
# =============================================================================


class AdminOutput(BaseModel):
    admin_id: str = Field(alias="Admin Id")
    restaurant_id: str = Field(alias="Restaurant Id")
    admin_name: str | None = Field(default=None, alias="Admin Name")
    contact_number: str | None = Field(default=None, alias="Contact Number")
    email: str = Field(alias="Email")
    role: str = Field(alias="Role")
    images: list = Field(default_factory=list, alias="Images")

    model_config = ALIASED


class AdminSummary(BaseModel):
    admin_id: str = Field(alias="Admin Id")
    admin_name: str | None = Field(default=None, alias="Admin Name")
    role: str = Field(alias="Role")

    model_config = ALIASED


class AdminCreate(BaseModel):
    admin_name: str | None = Field(default=None, alias="Admin Name")
    contact_number: str | None = Field(default=None, alias="Contact Number")
    email: str | None = Field(default=None, alias="Email")
    password: str | None = Field(default=None, alias="Password")
    role: str | None = Field(default=None, alias="Role")
    images: list | None = Field(default=None, alias="Images")

    model_config = ALIASED


class AdminUpdate(AdminCreate):
    pass


class AdminCreated(BaseModel):
    message: str = "Admin created"
    adminId: str


class AdminLoginResponse(BaseModel):
    message: str = "Login successful"
    admin: AdminSummary


# =============================================================================
# Login
# =============================================================================


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, alias="Email")
    password: str | None = Field(default=None, alias="Password")

    model_config = ALIASED
