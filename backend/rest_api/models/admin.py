"""
Admin: restaurant staff account with a Manager or Chef role.
"""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.utils.json_columns import JSONList
from .base import Base, TimestampMixin


class Admin(TimestampMixin, Base):
    """
    Admin ids are "{Role}-{n}" counted per restaurant, so the key is the
    (Restaurant Id, Admin Id) pair.
    """

    __tablename__ = "Admin"

    restaurant_id: Mapped[str] = mapped_column("Restaurant Id", String(50), primary_key=True)
    admin_id: Mapped[str] = mapped_column("Admin Id", String(50), primary_key=True)  # Manager-2
    admin_name: Mapped[str | None] = mapped_column("Admin Name", String(200))
    contact_number: Mapped[str | None] = mapped_column("Contact Number", String(30))
    email: Mapped[str] = mapped_column("Email", String(255), nullable=False)
    password: Mapped[str] = mapped_column("Password", String(255), nullable=False)
    role: Mapped[str] = mapped_column("Role", String(20), nullable=False)  # Manager, Chef
    images: Mapped[list] = mapped_column("Images", JSONList, default=list)

    __table_args__ = (
        Index("ix_admin_restaurant_email", "Restaurant Id", "Email"),
        Index("ix_admin_restaurant_role", "Restaurant Id", "Role"),
    )
