"""
Restaurant-scoped accounts: Customer and Chef.
"""

from __future__ import annotations

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONList
from .base import Base, TimestampMixin


class Customer(TimestampMixin, Base):
    """
    Diner account. Email is unique within a restaurant; Password holds a
    bcrypt hash and is never serialized.
    """

    __tablename__ = "Customer"

    customer_id: Mapped[str] = mapped_column("Customer Id", String(50), primary_key=True)  # CUSTOMER-N
    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), nullable=False)
    name: Mapped[str | None] = mapped_column("Name", String(200))
    email: Mapped[str] = mapped_column("Email", String(255), nullable=False)
    password: Mapped[str] = mapped_column("Password", String(255), nullable=False)
    contact_number: Mapped[str | None] = mapped_column("Contact Number", String(30))
    images: Mapped[list] = mapped_column("Images", JSONList, default=list)

    __table_args__ = (
        UniqueConstraint("Restaurant Id", "Email", name="uq_customer_restaurant_email"),
        Index("ix_customer_restaurant", "Restaurant Id"),
    )


class Chef(TimestampMixin, Base):
    """Kitchen account. Only id, name and email are ever exposed."""

    __tablename__ = "Chef"

    chef_id: Mapped[str] = mapped_column("Chef Id", String(50), primary_key=True)  # CHEF-N
    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), nullable=False)
    name: Mapped[str] = mapped_column("Name", String(200), nullable=False)
    email: Mapped[str] = mapped_column("Email", String(255), nullable=False)
    password: Mapped[str] = mapped_column("Password", String(255), nullable=False)

    __table_args__ = (
        UniqueConstraint("Restaurant Id", "Email", name="uq_chef_restaurant_email"),
        Index("ix_chef_restaurant", "Restaurant Id"),
    )
